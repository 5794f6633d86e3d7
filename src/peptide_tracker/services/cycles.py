"""Per-compound cycle settings."""

from dataclasses import dataclass

from peptide_tracker.domain.catalog import COMPOUNDS, get_compound
from peptide_tracker.domain.errors import InvalidCycle
from peptide_tracker.domain.models import LedgerState
from peptide_tracker.services.schedule import cycle_length


@dataclass
class CycleSettings:
    """Reads and updates the cycle overrides of a ledger state."""

    state: LedgerState

    def cycle_length(self, compound_id: str) -> int:
        """Return the effective interval in days for a compound."""
        return cycle_length(compound_id, self.state.cycles)

    def effective(self) -> dict[str, int]:
        """Return the effective interval for every catalog compound."""
        return {
            compound_id: self.cycle_length(compound_id) for compound_id in COMPOUNDS
        }

    def set_cycle(self, compound_id: str, days: int) -> int:
        """Override the interval for a compound."""
        get_compound(compound_id)
        if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
            raise InvalidCycle(f"Cycle must be a positive number of days, got {days}")
        self.state.cycles[compound_id] = days
        return days

    def reset_cycle(self, compound_id: str) -> int:
        """Drop the override and return the default interval."""
        compound = get_compound(compound_id)
        self.state.cycles.pop(compound_id, None)
        return compound.default_cycle_days
