"""Tests for the inventory ledger."""

import pytest

from peptide_tracker.domain.errors import (
    InsufficientCapacity,
    InvalidCapacity,
    InvalidDose,
    OutOfRange,
    UnknownCompound,
    VialNotFound,
)
from peptide_tracker.domain.models import LedgerState
from peptide_tracker.services.inventory import InventoryLedger
from tests.conftest import TODAY


@pytest.fixture
def ledger() -> InventoryLedger:
    return InventoryLedger(LedgerState(), today=lambda: TODAY)


def test_create_vial_starts_full(ledger: InventoryLedger) -> None:
    vial = ledger.create_vial("mounjaro", 60)

    assert vial.total_size == 60
    assert vial.remaining == 60
    assert vial.added_date == TODAY
    assert ledger.state.inventory == [vial]


@pytest.mark.parametrize("size", [0, -5, float("inf"), float("nan")])
def test_create_vial_rejects_invalid_size(
    ledger: InventoryLedger, size: float
) -> None:
    with pytest.raises(InvalidCapacity):
        ledger.create_vial("mounjaro", size)
    assert ledger.state.inventory == []


def test_create_vial_rejects_unknown_compound(ledger: InventoryLedger) -> None:
    with pytest.raises(UnknownCompound):
        ledger.create_vial("aspirin", 10)


def test_vial_ids_are_unique(ledger: InventoryLedger) -> None:
    first = ledger.create_vial("mounjaro", 60)
    second = ledger.create_vial("mounjaro", 60)

    assert first.id != second.id


def test_list_available_skips_empty_and_other_compounds(
    ledger: InventoryLedger,
) -> None:
    first = ledger.create_vial("mounjaro", 60)
    empty = ledger.create_vial("mounjaro", 5)
    ledger.create_vial("tesamorelin", 5)
    third = ledger.create_vial("mounjaro", 50)
    ledger.allocate(empty.id, 5)

    available = ledger.list_available("mounjaro")

    assert [vial.id for vial in available] == [first.id, third.id]


def test_allocate_reduces_remaining(ledger: InventoryLedger) -> None:
    vial = ledger.create_vial("mounjaro", 60)

    updated = ledger.allocate(vial.id, 2.5)

    assert updated.remaining == 57.5
    assert ledger.get(vial.id).remaining == 57.5


def test_allocate_rejects_over_capacity(ledger: InventoryLedger) -> None:
    vial = ledger.create_vial("tesamorelin", 2)

    with pytest.raises(InsufficientCapacity):
        ledger.allocate(vial.id, 2.5)
    assert ledger.get(vial.id).remaining == 2


def test_allocate_unknown_vial(ledger: InventoryLedger) -> None:
    with pytest.raises(VialNotFound):
        ledger.allocate("missing", 1)


def test_allocate_then_release_restores_exactly(ledger: InventoryLedger) -> None:
    vial = ledger.create_vial("retatrutide", 10)
    for _ in range(3):
        ledger.allocate(vial.id, 0.1)
    for _ in range(3):
        ledger.release(vial.id, 0.1)

    assert ledger.get(vial.id).remaining == 10


def test_release_clamps_to_total(ledger: InventoryLedger) -> None:
    vial = ledger.create_vial("mounjaro", 60)
    ledger.allocate(vial.id, 5)

    updated = ledger.release(vial.id, 50)

    assert updated.remaining == 60


def test_set_remaining_within_range(ledger: InventoryLedger) -> None:
    vial = ledger.create_vial("mounjaro", 60)

    assert ledger.set_remaining(vial.id, 0).remaining == 0
    assert ledger.set_remaining(vial.id, 60).remaining == 60


@pytest.mark.parametrize("value", [-0.1, 60.5, float("nan"), float("inf")])
def test_set_remaining_out_of_range(ledger: InventoryLedger, value: float) -> None:
    vial = ledger.create_vial("mounjaro", 60)

    with pytest.raises(OutOfRange):
        ledger.set_remaining(vial.id, value)
    assert ledger.get(vial.id).remaining == 60


def test_total_by_compound_sums_matching_vials(ledger: InventoryLedger) -> None:
    a = ledger.create_vial("tesamorelin", 5)
    ledger.create_vial("mounjaro", 60)
    b = ledger.create_vial("tesamorelin", 10)
    ledger.allocate(a.id, 2)
    ledger.allocate(b.id, 1)

    assert ledger.total_by_compound("tesamorelin") == 12
    assert ledger.total_by_compound("retatrutide") == 0


def test_total_by_compound_independent_of_order() -> None:
    forward = InventoryLedger(LedgerState(), today=lambda: TODAY)
    backward = InventoryLedger(LedgerState(), today=lambda: TODAY)
    sizes = [("mounjaro", 50), ("tesamorelin", 2), ("mounjaro", 80)]
    for compound_id, size in sizes:
        forward.create_vial(compound_id, size)
    for compound_id, size in reversed(sizes):
        backward.create_vial(compound_id, size)

    assert forward.total_by_compound("mounjaro") == 130
    assert backward.total_by_compound("mounjaro") == 130


def test_delete_vial_removes_it(ledger: InventoryLedger) -> None:
    vial = ledger.create_vial("mounjaro", 60)

    removed = ledger.delete_vial(vial.id)

    assert removed == vial
    assert ledger.get(vial.id) is None
    with pytest.raises(VialNotFound):
        ledger.delete_vial(vial.id)


@pytest.mark.parametrize("amount", [0, -1, float("nan"), float("inf")])
def test_allocate_and_release_reject_invalid_amounts(
    ledger: InventoryLedger, amount: float
) -> None:
    vial = ledger.create_vial("mounjaro", 60)
    ledger.allocate(vial.id, 10)

    with pytest.raises(InvalidDose):
        ledger.allocate(vial.id, amount)
    with pytest.raises(InvalidDose):
        ledger.release(vial.id, amount)
    assert ledger.get(vial.id).remaining == 50
