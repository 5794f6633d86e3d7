"""Body-weight ledger and progress statistics."""

import math
from dataclasses import dataclass
from datetime import date

from peptide_tracker.domain.errors import DegenerateTarget, InvalidWeight, NoData
from peptide_tracker.domain.models import LedgerState, WeightRecord, new_id
from peptide_tracker.domain.weights import WeightPoint, WeightSummary


def clamp_progress(value: float) -> float:
    """Clamp a raw progress percentage to the displayable 0-100 range."""
    return max(0.0, min(100.0, value))


def compute_progress(start: float, current: float, target: float) -> float:
    """Return the raw percentage of the way from start to target."""
    if start == target:
        raise DegenerateTarget(
            f"Target {target} equals the starting weight; progress is undefined"
        )
    return (start - current) / (start - target) * 100


@dataclass
class WeightLedger:
    """Owns weight observations and the optional target weight."""

    state: LedgerState

    @property
    def records(self) -> list[WeightRecord]:
        return self.state.weights

    @property
    def target(self) -> float | None:
        return self.state.target_weight

    def record(self, day: date, weight: float) -> WeightRecord:
        """Add a weight observation."""
        if not math.isfinite(weight) or weight <= 0:
            raise InvalidWeight(f"Weight must be positive, got {weight}")
        entry = WeightRecord(id=new_id(), date=day, weight=float(weight))
        self.state.weights = sorted(
            [*self.records, entry], key=lambda item: item.date
        )
        return entry

    def remove(self, record_id: str) -> None:
        """Remove a weight observation; unknown ids are ignored."""
        self.state.weights = [item for item in self.records if item.id != record_id]

    def set_target(self, value: float | None) -> float | None:
        """Set or clear the target weight."""
        if value is not None and (not math.isfinite(value) or value <= 0):
            raise InvalidWeight(f"Target weight must be positive, got {value}")
        self.state.target_weight = float(value) if value is not None else None
        return self.state.target_weight

    def start_weight(self) -> float:
        """Return the earliest recorded weight."""
        if not self.records:
            raise NoData("No weight records")
        return self.records[0].weight

    def current_weight(self) -> float:
        """Return the most recent recorded weight."""
        if not self.records:
            raise NoData("No weight records")
        return self.records[-1].weight

    def net_change(self) -> float:
        return self.current_weight() - self.start_weight()

    def percent_change(self) -> float:
        start = self.start_weight()
        if start == 0:
            raise DegenerateTarget("Starting weight is zero; change is undefined")
        return self.net_change() / start * 100

    def progress_toward(self, target: float) -> float:
        """Return raw progress from the starting weight toward a target."""
        return compute_progress(self.start_weight(), self.current_weight(), target)

    def summary(self) -> WeightSummary:
        """Return trend statistics for the recorded weights."""
        series = [
            WeightPoint(date=item.date, weight=item.weight) for item in self.records
        ]
        target = self.target
        if not series:
            return WeightSummary(
                count=0,
                start_weight=None,
                current_weight=None,
                lowest_weight=None,
                highest_weight=None,
                net_change=None,
                percent_change=None,
                target_weight=target,
                progress=None,
                progress_clamped=None,
                progress_undefined=False,
                series=[],
            )

        progress: float | None = None
        undefined = False
        if target is not None:
            try:
                progress = self.progress_toward(target)
            except DegenerateTarget:
                undefined = True

        values = [point.weight for point in series]
        return WeightSummary(
            count=len(series),
            start_weight=self.start_weight(),
            current_weight=self.current_weight(),
            lowest_weight=min(values),
            highest_weight=max(values),
            net_change=self.net_change(),
            percent_change=self.percent_change(),
            target_weight=target,
            progress=progress,
            progress_clamped=(
                clamp_progress(progress) if progress is not None else None
            ),
            progress_undefined=undefined,
            series=series,
        )
