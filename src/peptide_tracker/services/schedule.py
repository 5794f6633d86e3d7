"""Next-dose projection from injection history."""

from collections.abc import Mapping, Sequence
from datetime import date, timedelta

from peptide_tracker.domain.catalog import COMPOUNDS, get_compound
from peptide_tracker.domain.models import InjectionRecord
from peptide_tracker.domain.schedule import NextDose


def cycle_length(compound_id: str, cycles: Mapping[str, int]) -> int:
    """Return the configured interval for a compound, or its default."""
    override = cycles.get(compound_id)
    if override:
        return override
    return get_compound(compound_id).default_cycle_days


def project_schedule(
    injections: Sequence[InjectionRecord],
    cycles: Mapping[str, int],
    today: date,
) -> dict[str, NextDose]:
    """Project the next due date for every compound with a recorded dose.

    ``injections`` must be sorted ascending by date; the last record of each
    compound is taken as its most recent dose.
    """
    last_by_compound: dict[str, InjectionRecord] = {}
    for record in injections:
        last_by_compound[record.compound_id] = record

    schedule: dict[str, NextDose] = {}
    for compound_id in COMPOUNDS:
        last = last_by_compound.get(compound_id)
        if last is None:
            continue
        cycle = cycle_length(compound_id, cycles)
        next_due = last.date + timedelta(days=cycle)
        schedule[compound_id] = NextDose(
            compound_id=compound_id,
            last_dose_date=last.date,
            cycle_days=cycle,
            next_due=next_due,
            days_until=(next_due - today).days,
        )
    return schedule
