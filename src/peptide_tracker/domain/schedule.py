"""Domain models for dose scheduling."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class NextDose:
    """Projected next dose for a compound."""

    compound_id: str
    last_dose_date: date
    cycle_days: int
    next_due: date
    days_until: int

    @property
    def is_due(self) -> bool:
        """Return True when the dose is due today or overdue."""
        return self.days_until <= 0
