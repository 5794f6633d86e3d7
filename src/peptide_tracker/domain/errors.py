"""Error taxonomy for ledger operations.

Every ledger error is raised before any mutation happens, so a caller that
catches one can rely on the ledger state being unchanged.
"""


class LedgerError(Exception):
    """Base class for all ledger errors."""

    code = "ledger_error"


class ValidationError(LedgerError):
    """Input has the wrong shape or is out of range."""

    code = "validation_error"


class CapacityError(LedgerError):
    """A vial does not hold enough content for the request."""

    code = "capacity_error"


class NotFoundError(LedgerError):
    """An identifier does not resolve."""

    code = "not_found"


class IntegrityWarning(LedgerError):
    """A derived value is undefined for the current data."""

    code = "integrity_warning"


class InvalidCapacity(ValidationError):
    code = "invalid_capacity"


class NoVialSelected(ValidationError):
    code = "no_vial_selected"


class InvalidDose(ValidationError):
    code = "invalid_dose"


class InvalidWeight(ValidationError):
    code = "invalid_weight"


class InvalidCycle(ValidationError):
    code = "invalid_cycle"


class OutOfRange(ValidationError):
    code = "out_of_range"


class VialCompoundMismatch(ValidationError):
    code = "vial_compound_mismatch"


class InsufficientCapacity(CapacityError):
    code = "insufficient_capacity"


class UnknownCompound(NotFoundError):
    code = "unknown_compound"


class VialNotFound(NotFoundError):
    code = "vial_not_found"


class RecordNotFound(NotFoundError):
    code = "record_not_found"


class NoData(NotFoundError):
    code = "no_data"


class DegenerateTarget(IntegrityWarning):
    code = "degenerate_target"
