"""Injection ledger: dose records drawn from vials."""

import logging
import math
from dataclasses import dataclass
from datetime import date

from peptide_tracker.domain.catalog import get_compound
from peptide_tracker.domain.errors import (
    InsufficientCapacity,
    InvalidDose,
    NoVialSelected,
    RecordNotFound,
    VialCompoundMismatch,
)
from peptide_tracker.domain.models import (
    InjectionRecord,
    LedgerState,
    new_id,
    round_amount,
)
from peptide_tracker.services.inventory import InventoryLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevokeResult:
    """Outcome of revoking an injection record."""

    record: InjectionRecord
    vial_restored: bool


@dataclass
class InjectionLedger:
    """Owns dose records and keeps them consistent with the inventory."""

    state: LedgerState
    inventory: InventoryLedger

    @property
    def records(self) -> list[InjectionRecord]:
        return self.state.injections

    def admit(
        self,
        day: date,
        compound_id: str,
        dose: float,
        vial_id: str | None,
    ) -> InjectionRecord:
        """Validate a dose against its vial, draw it, and record it."""
        if not vial_id:
            raise NoVialSelected("Select a vial to draw the dose from")
        get_compound(compound_id)
        if not math.isfinite(dose) or dose <= 0:
            raise InvalidDose(f"Dose must be positive, got {dose}")
        vial = self.inventory.require(vial_id)
        if vial.compound_id != compound_id:
            raise VialCompoundMismatch(
                f"Vial {vial_id} holds {vial.compound_id}, not {compound_id}"
            )
        if round_amount(dose) > vial.remaining:
            raise InsufficientCapacity(
                f"Vial {vial_id} holds {vial.remaining}, dose is {dose}"
            )

        self.inventory.allocate(vial_id, dose)
        record = InjectionRecord(
            id=new_id(),
            date=day,
            compound_id=compound_id,
            dose=round_amount(dose),
            vial_id=vial_id,
        )
        self.state.injections = sorted(
            [*self.records, record], key=lambda item: item.date
        )
        return record

    def revoke(self, record_id: str) -> RevokeResult:
        """Remove a record and return its dose to the vial when possible."""
        record = self.get(record_id)
        if record is None:
            raise RecordNotFound(f"Injection record not found: {record_id}")

        restored = self.inventory.get(record.vial_id) is not None
        if restored:
            self.inventory.release(record.vial_id, record.dose)
        else:
            logger.warning(
                "Injection %s references missing vial %s; dose not restored",
                record.id,
                record.vial_id,
            )
        self.state.injections = [
            item for item in self.records if item.id != record_id
        ]
        return RevokeResult(record=record, vial_restored=restored)

    def get(self, record_id: str) -> InjectionRecord | None:
        """Return a record by id, if present."""
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def list_by_compound(self, compound_id: str) -> list[InjectionRecord]:
        """Return records for a compound in ledger order."""
        return [
            record for record in self.records if record.compound_id == compound_id
        ]

    def referencing(self, vial_id: str) -> list[InjectionRecord]:
        """Return records drawn from a vial."""
        return [record for record in self.records if record.vial_id == vial_id]

    def orphaned(self) -> list[InjectionRecord]:
        """Return records whose vial no longer exists."""
        return [
            record
            for record in self.records
            if self.inventory.get(record.vial_id) is None
        ]
