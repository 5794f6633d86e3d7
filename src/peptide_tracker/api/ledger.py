"""Ledger API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from peptide_tracker.api.models import (
    CycleUpdate,
    InjectionCreate,
    TargetWeightUpdate,
    VialCreate,
    VialRemainingUpdate,
    WeightCreate,
)
from peptide_tracker.domain.catalog import COMPOUNDS, CompoundDefinition, get_compound
from peptide_tracker.services.persistence import state_to_payload

if TYPE_CHECKING:
    from peptide_tracker.containers import AppContainer
    from peptide_tracker.domain.models import InjectionRecord, Vial, WeightRecord
    from peptide_tracker.domain.schedule import NextDose
    from peptide_tracker.domain.weights import WeightSummary
    from peptide_tracker.services.tracker import TrackerService

DUE_SOON_DAYS = 3

router = APIRouter()


def _tracker(request: Request) -> TrackerService:
    container: AppContainer = request.app.state.container
    return container.tracker_service


@router.get("/compounds")
async def list_compounds() -> dict[str, object]:
    """Return the compound catalog."""
    return {"compounds": [_serialize_compound(item) for item in COMPOUNDS.values()]}


@router.get("/state")
async def get_state(request: Request) -> dict[str, object]:
    """Return the full ledger in its stored layout."""
    return state_to_payload(_tracker(request).state)


@router.get("/vials")
async def list_vials(
    request: Request, compound: str | None = None
) -> dict[str, object]:
    """Return all vials, or the vials of a compound that still hold content."""
    tracker = _tracker(request)
    if compound is None:
        vials = tracker.state.inventory
    else:
        get_compound(compound)
        vials = tracker.inventory.list_available(compound)
    return {"vials": [_serialize_vial(vial) for vial in vials]}


@router.post("/vials", status_code=201)
async def create_vial(payload: VialCreate, request: Request) -> dict[str, object]:
    """Register a new vial."""
    result = _tracker(request).add_vial(
        payload.compound_id, payload.size, payload.custom_size
    )
    return {"vial": _serialize_vial(result.value), "saved": result.saved}


@router.patch("/vials/{vial_id}")
async def update_vial(
    vial_id: str, payload: VialRemainingUpdate, request: Request
) -> dict[str, object]:
    """Correct a vial's remaining content."""
    result = _tracker(request).set_vial_remaining(vial_id, payload.remaining)
    return {"vial": _serialize_vial(result.value), "saved": result.saved}


@router.delete("/vials/{vial_id}")
async def delete_vial(vial_id: str, request: Request) -> dict[str, object]:
    """Delete a vial, reporting injection records left without a vial."""
    result = _tracker(request).delete_vial(vial_id)
    return {
        "vial": _serialize_vial(result.value.vial),
        "orphaned_injection_ids": result.value.orphaned_record_ids,
        "saved": result.saved,
    }


@router.get("/inventory/totals")
async def inventory_totals(request: Request) -> dict[str, object]:
    """Return remaining content per compound."""
    inventory = _tracker(request).inventory
    return {
        "totals": {
            compound_id: inventory.total_by_compound(compound_id)
            for compound_id in COMPOUNDS
        }
    }


@router.get("/injections")
async def list_injections(
    request: Request, compound: str | None = None
) -> dict[str, object]:
    """Return injection records in date order."""
    tracker = _tracker(request)
    if compound is None:
        records = tracker.state.injections
    else:
        get_compound(compound)
        records = tracker.injections.list_by_compound(compound)
    orphaned = {record.id for record in tracker.injections.orphaned()}
    return {
        "injections": [
            _serialize_injection(record, orphaned=record.id in orphaned)
            for record in records
        ]
    }


@router.post("/injections", status_code=201)
async def create_injection(
    payload: InjectionCreate, request: Request
) -> dict[str, object]:
    """Log a dose drawn from a vial."""
    result = _tracker(request).log_injection(
        payload.date, payload.compound_id, payload.dose, payload.vial_id
    )
    return {"injection": _serialize_injection(result.value), "saved": result.saved}


@router.delete("/injections/{record_id}")
async def delete_injection(record_id: str, request: Request) -> dict[str, object]:
    """Revoke an injection record."""
    result = _tracker(request).revoke_injection(record_id)
    return {
        "injection": _serialize_injection(result.value.record),
        "vial_restored": result.value.vial_restored,
        "saved": result.saved,
    }


@router.get("/schedule")
async def schedule(request: Request) -> dict[str, object]:
    """Return the next due dose for each compound with history."""
    projected = _tracker(request).schedule()
    return {"schedule": [_serialize_next_dose(item) for item in projected.values()]}


@router.get("/cycles")
async def list_cycles(request: Request) -> dict[str, object]:
    """Return the effective cycle length per compound."""
    return {"cycles": _tracker(request).cycles.effective()}


@router.put("/cycles/{compound_id}")
async def set_cycle(
    compound_id: str, payload: CycleUpdate, request: Request
) -> dict[str, object]:
    """Override a compound's cycle length."""
    result = _tracker(request).set_cycle(compound_id, payload.days)
    return {"compound_id": compound_id, "days": result.value, "saved": result.saved}


@router.delete("/cycles/{compound_id}")
async def reset_cycle(compound_id: str, request: Request) -> dict[str, object]:
    """Restore a compound's default cycle length."""
    result = _tracker(request).reset_cycle(compound_id)
    return {"compound_id": compound_id, "days": result.value, "saved": result.saved}


@router.get("/weights")
async def list_weights(request: Request) -> dict[str, object]:
    """Return weight records in date order."""
    records = _tracker(request).state.weights
    return {"weights": [_serialize_weight(record) for record in records]}


@router.post("/weights", status_code=201)
async def create_weight(payload: WeightCreate, request: Request) -> dict[str, object]:
    """Record a weight observation."""
    result = _tracker(request).record_weight(payload.date, payload.weight)
    return {"weight": _serialize_weight(result.value), "saved": result.saved}


@router.delete("/weights/{record_id}")
async def delete_weight(record_id: str, request: Request) -> dict[str, object]:
    """Remove a weight observation."""
    result = _tracker(request).remove_weight(record_id)
    return {"saved": result.saved}


@router.get("/weights/summary")
async def weight_summary(request: Request) -> dict[str, object]:
    """Return weight trend statistics and target progress."""
    return _serialize_summary(_tracker(request).weight_summary())


@router.put("/target-weight")
async def set_target_weight(
    payload: TargetWeightUpdate, request: Request
) -> dict[str, object]:
    """Set or clear the target weight."""
    result = _tracker(request).set_target_weight(payload.target_weight)
    return {"target_weight": result.value, "saved": result.saved}


def urgency(days_until: int) -> str:
    """Bucket a countdown into due, soon or later."""
    if days_until <= 0:
        return "due"
    if days_until <= DUE_SOON_DAYS:
        return "soon"
    return "later"


def _serialize_compound(compound: CompoundDefinition) -> dict[str, object]:
    return {
        "id": compound.id,
        "name": compound.name,
        "color": compound.color,
        "default_cycle_days": compound.default_cycle_days,
        "doses": list(compound.doses),
        "vial_sizes": list(compound.vial_sizes),
        "allows_custom_vial": compound.allows_custom_vial,
    }


def _serialize_vial(vial: Vial) -> dict[str, object]:
    return {
        "id": vial.id,
        "compound_id": vial.compound_id,
        "total_size": vial.total_size,
        "remaining": vial.remaining,
        "remaining_ratio": vial.remaining / vial.total_size,
        "added_date": vial.added_date.isoformat(),
    }


def _serialize_injection(
    record: InjectionRecord, orphaned: bool = False
) -> dict[str, object]:
    return {
        "id": record.id,
        "date": record.date.isoformat(),
        "compound_id": record.compound_id,
        "dose": record.dose,
        "vial_id": record.vial_id,
        "orphaned": orphaned,
    }


def _serialize_weight(record: WeightRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "date": record.date.isoformat(),
        "weight": record.weight,
    }


def _serialize_next_dose(item: NextDose) -> dict[str, object]:
    compound = get_compound(item.compound_id)
    return {
        "compound_id": item.compound_id,
        "name": compound.name,
        "color": compound.color,
        "last_dose_date": item.last_dose_date.isoformat(),
        "cycle_days": item.cycle_days,
        "next_due": item.next_due.isoformat(),
        "days_until": item.days_until,
        "urgency": urgency(item.days_until),
    }


def _serialize_summary(summary: WeightSummary) -> dict[str, object]:
    return {
        "count": summary.count,
        "start_weight": summary.start_weight,
        "current_weight": summary.current_weight,
        "lowest_weight": summary.lowest_weight,
        "highest_weight": summary.highest_weight,
        "net_change": summary.net_change,
        "percent_change": summary.percent_change,
        "target_weight": summary.target_weight,
        "progress": summary.progress,
        "progress_clamped": summary.progress_clamped,
        "progress_undefined": summary.progress_undefined,
        "series": [
            {"date": point.date.isoformat(), "weight": point.weight}
            for point in summary.series
        ],
    }
