"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from peptide_tracker.adapters.json_file_repository import JsonFileLedgerRepository
from peptide_tracker.adapters.supabase_ledger_repository import (
    SupabaseLedgerRepository,
)
from peptide_tracker.config import Settings
from peptide_tracker.services.persistence import LedgerRepository
from peptide_tracker.services.tracker import TrackerService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    repository: LedgerRepository
    tracker_service: TrackerService


def build_repository(settings: Settings) -> LedgerRepository:
    """Create the ledger repository for the configured backend."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseLedgerRepository(client, state_key=settings.state_key)
    return JsonFileLedgerRepository(Path(settings.state_path))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container and load the saved ledger."""
    resolved_settings = settings or Settings()
    repository = build_repository(resolved_settings)
    tracker_service = TrackerService(repository)
    tracker_service.load()
    return AppContainer(
        settings=resolved_settings,
        repository=repository,
        tracker_service=tracker_service,
    )
