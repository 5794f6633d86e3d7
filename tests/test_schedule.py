"""Tests for next-dose projection."""

from datetime import date, timedelta

from peptide_tracker.domain.models import InjectionRecord
from peptide_tracker.services.schedule import cycle_length, project_schedule
from tests.conftest import TODAY


def _record(day: date, compound_id: str = "mounjaro") -> InjectionRecord:
    return InjectionRecord(
        id=f"{compound_id}-{day.isoformat()}",
        date=day,
        compound_id=compound_id,
        dose=1,
        vial_id="vial",
    )


def test_overdue_by_three_days() -> None:
    records = [_record(TODAY - timedelta(days=10))]

    schedule = project_schedule(records, {}, TODAY)

    next_dose = schedule["mounjaro"]
    assert next_dose.cycle_days == 7
    assert next_dose.next_due == TODAY - timedelta(days=3)
    assert next_dose.days_until == -3
    assert next_dose.is_due


def test_uses_last_record_per_compound() -> None:
    records = [
        _record(date(2024, 3, 1)),
        _record(date(2024, 3, 8)),
        _record(date(2024, 3, 9), "tesamorelin"),
    ]

    schedule = project_schedule(records, {}, TODAY)

    assert schedule["mounjaro"].last_dose_date == date(2024, 3, 8)
    assert schedule["mounjaro"].days_until == 5
    assert not schedule["mounjaro"].is_due
    assert schedule["tesamorelin"].next_due == TODAY
    assert schedule["tesamorelin"].days_until == 0
    assert schedule["tesamorelin"].is_due


def test_cycle_override_applies() -> None:
    records = [_record(date(2024, 3, 8))]

    schedule = project_schedule(records, {"mounjaro": 14}, TODAY)

    assert schedule["mounjaro"].next_due == date(2024, 3, 22)
    assert schedule["mounjaro"].days_until == 12


def test_compounds_without_records_are_omitted() -> None:
    assert project_schedule([], {}, TODAY) == {}
    schedule = project_schedule([_record(TODAY, "retatrutide")], {}, TODAY)
    assert list(schedule) == ["retatrutide"]


def test_projection_crosses_month_boundary() -> None:
    schedule = project_schedule([_record(date(2024, 2, 27))], {}, date(2024, 2, 28))

    assert schedule["mounjaro"].next_due == date(2024, 3, 5)
    assert schedule["mounjaro"].days_until == 6


def test_cycle_length_falls_back_to_default() -> None:
    assert cycle_length("tesamorelin", {}) == 1
    assert cycle_length("tesamorelin", {"tesamorelin": 3}) == 3
    assert cycle_length("tesamorelin", {"tesamorelin": 0}) == 1
