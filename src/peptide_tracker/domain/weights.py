"""Domain models for weight tracking."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeightPoint:
    """A dated weight value for trend series."""

    date: date
    weight: float


@dataclass(frozen=True)
class WeightSummary:
    """Trend statistics over recorded weights."""

    count: int
    start_weight: float | None
    current_weight: float | None
    lowest_weight: float | None
    highest_weight: float | None
    net_change: float | None
    percent_change: float | None
    target_weight: float | None
    progress: float | None
    progress_clamped: float | None
    progress_undefined: bool
    series: list[WeightPoint]
