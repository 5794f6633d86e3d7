"""Local JSON file repository for the ledger state."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from peptide_tracker.domain.models import LedgerState
from peptide_tracker.services.persistence import (
    LedgerRepository,
    state_from_payload,
    state_to_payload,
)

logger = logging.getLogger(__name__)


@dataclass
class JsonFileLedgerRepository(LedgerRepository):
    """Stores the whole ledger as one JSON document on disk."""

    path: Path

    @property
    def corrupt_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.corrupt")

    def load(self) -> LedgerState | None:
        """Return the stored state, or None if the file is absent or unreadable.

        An unreadable file is moved aside to ``<name>.corrupt`` so a later save
        does not overwrite it.
        """
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            aside = self.corrupt_path
            self.path.replace(aside)
            logger.warning("Moved unreadable ledger file %s to %s", self.path, aside)
            return None
        return state_from_payload(payload)

    def save(self, state: LedgerState) -> None:
        """Write the state atomically via a temporary file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(state_to_payload(state), ensure_ascii=False, indent=2)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
