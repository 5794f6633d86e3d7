"""Tracker service: the single in-memory ledger and its persistence hooks."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Generic, TypeVar

from peptide_tracker.domain.catalog import get_compound, resolve_vial_size
from peptide_tracker.domain.models import (
    InjectionRecord,
    LedgerState,
    Vial,
    WeightRecord,
)
from peptide_tracker.domain.schedule import NextDose
from peptide_tracker.domain.weights import WeightSummary
from peptide_tracker.services.cycles import CycleSettings
from peptide_tracker.services.injections import InjectionLedger, RevokeResult
from peptide_tracker.services.inventory import InventoryLedger
from peptide_tracker.services.persistence import LedgerRepository
from peptide_tracker.services.schedule import project_schedule
from peptide_tracker.services.weights import WeightLedger

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MutationResult(Generic[T]):
    """Value produced by a mutation and whether it reached storage."""

    value: T
    saved: bool


@dataclass(frozen=True)
class VialDeletion:
    """A deleted vial and the injection records left pointing at it."""

    vial: Vial
    orphaned_record_ids: list[str]


@dataclass
class TrackerService:
    """Application service that owns the ledger state.

    Every mutation is applied in memory first and then mirrored to the
    repository. A failed save is logged and reported, never rolled back.
    """

    repository: LedgerRepository
    today: Callable[[], date] = field(default=date.today)
    state: LedgerState = field(default_factory=LedgerState)

    def __post_init__(self) -> None:
        self._bind(self.state)

    def _bind(self, state: LedgerState) -> None:
        self.state = state
        self.inventory = InventoryLedger(state, today=self.today)
        self.injections = InjectionLedger(state, self.inventory)
        self.weights = WeightLedger(state)
        self.cycles = CycleSettings(state)

    def load(self) -> LedgerState:
        """Replace the in-memory state with the saved one, if any."""
        try:
            loaded = self.repository.load()
        except Exception:
            logger.exception("Failed to load ledger state; starting empty")
            loaded = None
        self._bind(loaded or LedgerState())
        logger.info(
            "Loaded ledger: %d vials, %d injections, %d weights",
            len(self.state.inventory),
            len(self.state.injections),
            len(self.state.weights),
        )
        return self.state

    def persist(self) -> bool:
        """Mirror the current state to the repository."""
        try:
            self.repository.save(self.state)
        except Exception:
            logger.exception("Failed to save ledger state")
            return False
        return True

    def _saved(self, value: T) -> MutationResult[T]:
        return MutationResult(value=value, saved=self.persist())

    def add_vial(
        self, compound_id: str, size: float, custom_size: float | None = None
    ) -> MutationResult[Vial]:
        """Register a vial, honoring custom sizes where the catalog allows."""
        compound = get_compound(compound_id)
        total = resolve_vial_size(compound, size, custom_size)
        return self._saved(self.inventory.create_vial(compound_id, total))

    def set_vial_remaining(self, vial_id: str, value: float) -> MutationResult[Vial]:
        return self._saved(self.inventory.set_remaining(vial_id, value))

    def delete_vial(self, vial_id: str) -> MutationResult[VialDeletion]:
        """Delete a vial and report the injection records it orphans."""
        vial = self.inventory.delete_vial(vial_id)
        orphaned = [record.id for record in self.injections.referencing(vial_id)]
        if orphaned:
            logger.warning(
                "Deleted vial %s still referenced by %d injection record(s)",
                vial_id,
                len(orphaned),
            )
        return self._saved(VialDeletion(vial=vial, orphaned_record_ids=orphaned))

    def log_injection(
        self, day: date, compound_id: str, dose: float, vial_id: str | None
    ) -> MutationResult[InjectionRecord]:
        return self._saved(self.injections.admit(day, compound_id, dose, vial_id))

    def revoke_injection(self, record_id: str) -> MutationResult[RevokeResult]:
        return self._saved(self.injections.revoke(record_id))

    def set_cycle(self, compound_id: str, days: int) -> MutationResult[int]:
        return self._saved(self.cycles.set_cycle(compound_id, days))

    def reset_cycle(self, compound_id: str) -> MutationResult[int]:
        return self._saved(self.cycles.reset_cycle(compound_id))

    def record_weight(self, day: date, weight: float) -> MutationResult[WeightRecord]:
        return self._saved(self.weights.record(day, weight))

    def remove_weight(self, record_id: str) -> MutationResult[None]:
        return self._saved(self.weights.remove(record_id))

    def set_target_weight(self, value: float | None) -> MutationResult[float | None]:
        return self._saved(self.weights.set_target(value))

    def schedule(self) -> dict[str, NextDose]:
        """Project next doses as of today."""
        return project_schedule(self.state.injections, self.state.cycles, self.today())

    def weight_summary(self) -> WeightSummary:
        return self.weights.summary()
