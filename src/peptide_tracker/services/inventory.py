"""Vial inventory ledger."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date

from peptide_tracker.domain.catalog import get_compound
from peptide_tracker.domain.errors import (
    InsufficientCapacity,
    InvalidCapacity,
    InvalidDose,
    OutOfRange,
    VialNotFound,
)
from peptide_tracker.domain.models import LedgerState, Vial, new_id, round_amount

logger = logging.getLogger(__name__)


@dataclass
class InventoryLedger:
    """Owns the vial collection of a ledger state.

    ``allocate`` is the only operation that reduces remaining content; the
    injection ledger calls it exactly once per admitted dose.
    """

    state: LedgerState
    today: Callable[[], date] = field(default=date.today)

    @property
    def vials(self) -> list[Vial]:
        return self.state.inventory

    def create_vial(self, compound_id: str, total_size: float) -> Vial:
        """Register a full vial of a compound."""
        get_compound(compound_id)
        if not math.isfinite(total_size) or total_size <= 0:
            raise InvalidCapacity(f"Vial size must be positive, got {total_size}")
        size = round_amount(total_size)
        vial = Vial(
            id=new_id(),
            compound_id=compound_id,
            total_size=size,
            remaining=size,
            added_date=self.today(),
        )
        self.vials.append(vial)
        return vial

    def get(self, vial_id: str) -> Vial | None:
        """Return a vial by id, if present."""
        for vial in self.vials:
            if vial.id == vial_id:
                return vial
        return None

    def require(self, vial_id: str) -> Vial:
        """Return a vial by id or raise VialNotFound."""
        vial = self.get(vial_id)
        if vial is None:
            raise VialNotFound(f"Vial not found: {vial_id}")
        return vial

    def list_available(self, compound_id: str) -> list[Vial]:
        """Return vials of a compound that still hold content."""
        return [
            vial
            for vial in self.vials
            if vial.compound_id == compound_id and vial.remaining > 0
        ]

    def allocate(self, vial_id: str, amount: float) -> Vial:
        """Draw an amount from a vial."""
        vial = self.require(vial_id)
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidDose(f"Amount must be positive, got {amount}")
        if round_amount(amount) > vial.remaining:
            raise InsufficientCapacity(
                f"Vial {vial_id} holds {vial.remaining}, requested {amount}"
            )
        remaining = round_amount(vial.remaining - amount)
        return self._store(replace(vial, remaining=remaining))

    def release(self, vial_id: str, amount: float) -> Vial:
        """Return an amount to a vial, never exceeding its total size."""
        vial = self.require(vial_id)
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidDose(f"Amount must be positive, got {amount}")
        restored = round_amount(vial.remaining + amount)
        if restored > vial.total_size:
            logger.warning(
                "Clamping release on vial %s: %s exceeds total %s",
                vial_id,
                restored,
                vial.total_size,
            )
            restored = vial.total_size
        return self._store(replace(vial, remaining=restored))

    def set_remaining(self, vial_id: str, value: float) -> Vial:
        """Correct a vial's remaining content directly."""
        vial = self.require(vial_id)
        if not math.isfinite(value) or not 0 <= value <= vial.total_size:
            raise OutOfRange(
                f"Remaining must be between 0 and {vial.total_size}, got {value}"
            )
        return self._store(replace(vial, remaining=round_amount(value)))

    def total_by_compound(self, compound_id: str) -> float:
        """Return the remaining content across all vials of a compound."""
        return round_amount(
            sum(
                vial.remaining
                for vial in self.vials
                if vial.compound_id == compound_id
            )
        )

    def delete_vial(self, vial_id: str) -> Vial:
        """Remove a vial; its remaining content is forfeited."""
        vial = self.require(vial_id)
        self.state.inventory = [item for item in self.vials if item.id != vial_id]
        return vial

    def _store(self, updated: Vial) -> Vial:
        self.state.inventory = [
            updated if vial.id == updated.id else vial for vial in self.vials
        ]
        return updated
