from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoxplotStats:
    min: float
    q1: float
    median: float
    q3: float
    max: float
    mean: float
    iqr: float
    whisker_low: float
    whisker_high: float
    outliers: tuple[float, ...] = ()


@dataclass(frozen=True)
class HistogramBin:
    start: float
    end: float
    count: int


@dataclass(frozen=True)
class SummaryStats:
    count: int
    mean: float
    median: float
    min: float
    max: float
    std_dev: float


@dataclass(frozen=True)
class StackedBand:
    series: str
    value: float
    y0: float
    y1: float


@dataclass(frozen=True)
class StackedLayout:
    categories: tuple[str, ...]
    series: tuple[str, ...]
    bands: dict[str, tuple[StackedBand, ...]]
    totals: dict[str, float]
    normalized: bool = False

    def max_total(self) -> float:
        """Upper bound for the value axis; 100 when normalized, never below 1."""
        if self.normalized:
            return 100.0
        return max([1.0, *self.totals.values()])


@dataclass(frozen=True)
class SplinePoint:
    x: float
    y: float


@dataclass(frozen=True)
class LayoutRect:
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    def inset(self, padding: float) -> "LayoutRect":
        width = max(0.0, self.width - 2.0 * padding)
        height = max(0.0, self.height - 2.0 * padding)
        return LayoutRect(x=self.x + padding, y=self.y + padding, width=width, height=height)


@dataclass(frozen=True)
class TreemapNode:
    label: str
    value: float
    color: str = ""
    children: tuple["TreemapNode", ...] = ()
    rect: LayoutRect | None = None


@dataclass(frozen=True)
class WaterfallStep:
    category: str
    value: float
    start: float
    end: float
    is_total: bool = False

    @property
    def is_positive(self) -> bool:
        return self.value >= 0


@dataclass(frozen=True)
class FunnelStage:
    label: str
    value: float
    color: str
    percentage: float
    conversion_rate: float | None = None
