"""Persistence boundary and the stored ledger layout."""

import logging
import math
from collections.abc import Callable
from datetime import date
from typing import Protocol, TypeVar

from peptide_tracker.domain.catalog import COMPOUNDS
from peptide_tracker.domain.models import (
    InjectionRecord,
    LedgerState,
    Vial,
    WeightRecord,
    round_amount,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LedgerRepository(Protocol):
    """Persistence interface for the whole ledger state."""

    def load(self) -> LedgerState | None:
        """Return the saved state, or None when nothing has been saved."""

    def save(self, state: LedgerState) -> None:
        """Persist the full state, raising on failure."""


def state_to_payload(state: LedgerState) -> dict[str, object]:
    """Serialize a ledger state to the stored layout."""
    return {
        "injections": [
            {
                "id": record.id,
                "date": record.date.isoformat(),
                "peptide": record.compound_id,
                "dose": record.dose,
                "vialId": record.vial_id,
            }
            for record in state.injections
        ],
        "weights": [
            {
                "id": record.id,
                "date": record.date.isoformat(),
                "weight": record.weight,
            }
            for record in state.weights
        ],
        "inventory": [
            {
                "id": vial.id,
                "peptide": vial.compound_id,
                "totalSize": vial.total_size,
                "remaining": vial.remaining,
                "addedDate": vial.added_date.isoformat(),
            }
            for vial in state.inventory
        ],
        "cycles": dict(state.cycles),
        "targetWeight": _format_number(state.target_weight),
    }


def state_from_payload(payload: object) -> LedgerState:
    """Build a ledger state from a stored payload.

    Missing or malformed fields fall back to empty defaults and malformed
    items are skipped, so one bad entry never aborts the whole load.
    """
    if not isinstance(payload, dict):
        logger.warning("Ignoring saved state of type %s", type(payload).__name__)
        return LedgerState()

    injections = _parse_items(payload.get("injections"), _parse_injection, "injection")
    weights = _parse_items(payload.get("weights"), _parse_weight, "weight")
    inventory = _parse_items(payload.get("inventory"), _parse_vial, "vial")
    return LedgerState(
        injections=sorted(injections, key=lambda item: item.date),
        weights=sorted(weights, key=lambda item: item.date),
        inventory=inventory,
        cycles=_parse_cycles(payload.get("cycles")),
        target_weight=_parse_target(payload.get("targetWeight")),
    )


def _parse_items(
    raw: object, parser: Callable[[dict[str, object]], T], label: str
) -> list[T]:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Ignoring malformed %s collection", label)
        return []
    items: list[T] = []
    for entry in raw:
        if not isinstance(entry, dict):
            logger.warning("Skipping malformed %s entry: %r", label, entry)
            continue
        try:
            items.append(parser(entry))
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed %s entry: %r", label, entry)
    return items


def _parse_injection(entry: dict[str, object]) -> InjectionRecord:
    dose = _to_float(entry["dose"])
    if dose <= 0:
        raise ValueError("dose must be positive")
    return InjectionRecord(
        id=_to_id(entry["id"]),
        date=_to_date(entry["date"]),
        compound_id=str(entry["peptide"]),
        dose=round_amount(dose),
        vial_id=_to_id(entry["vialId"]),
    )


def _parse_weight(entry: dict[str, object]) -> WeightRecord:
    weight = _to_float(entry["weight"])
    if weight <= 0:
        raise ValueError("weight must be positive")
    return WeightRecord(
        id=_to_id(entry["id"]),
        date=_to_date(entry["date"]),
        weight=weight,
    )


def _parse_vial(entry: dict[str, object]) -> Vial:
    total = round_amount(_to_float(entry["totalSize"]))
    if total <= 0:
        raise ValueError("vial size must be positive")
    remaining = round_amount(_to_float(entry.get("remaining", total)))
    clamped = min(max(remaining, 0.0), total)
    if clamped != remaining:
        logger.warning(
            "Clamping remaining %s into [0, %s] for vial %s",
            remaining,
            total,
            entry["id"],
        )
    return Vial(
        id=_to_id(entry["id"]),
        compound_id=str(entry["peptide"]),
        total_size=total,
        remaining=clamped,
        added_date=_to_date(entry["addedDate"]),
    )


def _parse_cycles(raw: object) -> dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    cycles: dict[str, int] = {}
    for compound_id, value in raw.items():
        if compound_id not in COMPOUNDS:
            logger.warning("Dropping cycle for unknown compound %s", compound_id)
            continue
        try:
            days = int(value)
        except (TypeError, ValueError):
            logger.warning("Dropping malformed cycle for %s: %r", compound_id, value)
            continue
        if days > 0:
            cycles[compound_id] = days
    return cycles


def _parse_target(raw: object) -> float | None:
    if raw is None or raw == "" or isinstance(raw, bool):
        return None
    try:
        value = _to_float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed target weight: %r", raw)
        return None
    return value if value > 0 else None


def _to_id(value: object) -> str:
    if isinstance(value, bool) or value is None or value == "":
        raise ValueError("missing identifier")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _to_date(value: object) -> date:
    if not isinstance(value, str):
        raise TypeError("date must be a string")
    return date.fromisoformat(value[:10])


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if isinstance(value, int | float | str):
        number = float(value)
    else:
        raise TypeError("value is not a number")
    if not math.isfinite(number):
        raise ValueError(f"non-finite number: {value!r}")
    return number


def _format_number(value: float | None) -> str:
    if value is None:
        return ""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)
