"""Supabase repository for the ledger state."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from peptide_tracker.domain.models import LedgerState
from peptide_tracker.services.persistence import (
    LedgerRepository,
    state_from_payload,
    state_to_payload,
)

TABLE = "ledger_state"


@dataclass
class SupabaseLedgerRepository(LedgerRepository):
    """Supabase implementation storing one payload row per state key."""

    client: Client
    state_key: str = "peptide_data"

    def load(self) -> LedgerState | None:
        """Return the stored state for the key, if present."""
        response = (
            self.client.table(TABLE)
            .select("payload")
            .eq("state_key", self.state_key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return state_from_payload(response.data[0].get("payload"))

    def save(self, state: LedgerState) -> None:
        """Upsert the full state for the key."""
        self.client.table(TABLE).upsert(
            {
                "state_key": self.state_key,
                "payload": state_to_payload(state),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="state_key",
        ).execute()
