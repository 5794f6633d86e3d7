"""Tests for cycle settings."""

import pytest

from peptide_tracker.domain.errors import InvalidCycle, UnknownCompound
from peptide_tracker.domain.models import LedgerState
from peptide_tracker.services.cycles import CycleSettings


def test_set_and_reset_cycle() -> None:
    settings = CycleSettings(LedgerState())

    assert settings.cycle_length("mounjaro") == 7
    settings.set_cycle("mounjaro", 10)
    assert settings.cycle_length("mounjaro") == 10
    assert settings.state.cycles == {"mounjaro": 10}

    assert settings.reset_cycle("mounjaro") == 7
    assert settings.state.cycles == {}


def test_effective_lists_every_compound() -> None:
    settings = CycleSettings(LedgerState(cycles={"tesamorelin": 2}))

    assert settings.effective() == {
        "mounjaro": 7,
        "tesamorelin": 2,
        "retatrutide": 7,
    }


@pytest.mark.parametrize("days", [0, -1, 2.5, True])
def test_set_cycle_rejects_invalid_days(days: object) -> None:
    settings = CycleSettings(LedgerState())

    with pytest.raises(InvalidCycle):
        settings.set_cycle("mounjaro", days)  # type: ignore[arg-type]
    assert settings.state.cycles == {}


def test_set_cycle_rejects_unknown_compound() -> None:
    settings = CycleSettings(LedgerState())

    with pytest.raises(UnknownCompound):
        settings.set_cycle("aspirin", 7)
