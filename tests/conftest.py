"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from peptide_tracker.config import Settings
from peptide_tracker.containers import AppContainer
from peptide_tracker.domain.models import LedgerState
from peptide_tracker.services.persistence import (
    LedgerRepository,
    state_from_payload,
    state_to_payload,
)
from peptide_tracker.services.tracker import TrackerService

TODAY = date(2024, 3, 10)


@dataclass
class InMemoryLedgerRepository(LedgerRepository):
    """In-memory ledger repository that keeps serialized snapshots."""

    payload: dict[str, object] | None = None
    saves: int = 0

    def load(self) -> LedgerState | None:
        if self.payload is None:
            return None
        return state_from_payload(self.payload)

    def save(self, state: LedgerState) -> None:
        self.payload = state_to_payload(state)
        self.saves += 1


@dataclass
class FailingLedgerRepository(LedgerRepository):
    """Repository whose storage is unavailable."""

    attempts: list[str] = field(default_factory=list)

    def load(self) -> LedgerState | None:
        self.attempts.append("load")
        raise OSError("storage offline")

    def save(self, state: LedgerState) -> None:
        self.attempts.append("save")
        raise OSError("storage offline")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(storage_backend="file", state_path=str(tmp_path / "state.json"))


@pytest.fixture
def repository() -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository()


@pytest.fixture
def tracker(repository: InMemoryLedgerRepository) -> TrackerService:
    return TrackerService(repository, today=lambda: TODAY)


@pytest.fixture
def container(
    settings: Settings,
    repository: InMemoryLedgerRepository,
    tracker: TrackerService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        repository=repository,
        tracker_service=tracker,
    )
