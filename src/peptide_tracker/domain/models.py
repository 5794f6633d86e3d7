"""Domain models for the dosing ledger."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

AMOUNT_PRECISION = 6


def new_id() -> str:
    """Return a fresh record identifier."""
    return uuid4().hex


def round_amount(value: float) -> float:
    """Round a vial or dose amount to the ledger precision."""
    return round(float(value), AMOUNT_PRECISION)


@dataclass(frozen=True)
class Vial:
    """A physical vial of a single compound."""

    id: str
    compound_id: str
    total_size: float
    remaining: float
    added_date: date


@dataclass(frozen=True)
class InjectionRecord:
    """A logged dose drawn from a vial.

    ``vial_id`` is a lookup key; the vial it names may have been deleted.
    """

    id: str
    date: date
    compound_id: str
    dose: float
    vial_id: str


@dataclass(frozen=True)
class WeightRecord:
    """A single body-weight observation."""

    id: str
    date: date
    weight: float


@dataclass
class LedgerState:
    """All ledger collections; the unit of persistence."""

    injections: list[InjectionRecord] = field(default_factory=list)
    weights: list[WeightRecord] = field(default_factory=list)
    inventory: list[Vial] = field(default_factory=list)
    cycles: dict[str, int] = field(default_factory=dict)
    target_weight: float | None = None
