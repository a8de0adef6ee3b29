from __future__ import annotations

from collections.abc import Iterable
import logging
import math
from typing import Any

import numpy as np

from dashplot.adapters import finite_values
from dashplot.series import BoxplotStats, HistogramBin, SummaryStats


LOGGER = logging.getLogger(__name__)

DEFAULT_WHISKER_FACTOR = 1.5


def compute_boxplot_stats(values: Iterable[Any], whisker_factor: float = DEFAULT_WHISKER_FACTOR) -> BoxplotStats | None:
    """Quartiles, whiskers and outliers for one boxplot column.

    Quartiles use nearest-rank indices ``floor(n*0.25)`` and ``floor(n*0.75)``;
    the median averages the middle pair for even ``n``. Whiskers reach
    ``whisker_factor * iqr`` past the quartiles but stop at the data extremes.
    Returns ``None`` for an empty series.
    """
    ordered = _sorted_finite(values)
    n = int(ordered.size)
    if n == 0:
        return None

    q1 = float(ordered[int(n * 0.25)])
    q3 = float(ordered[int(n * 0.75)])
    median = _median_of_sorted(ordered)
    iqr = q3 - q1
    lo = float(ordered[0])
    hi = float(ordered[-1])

    # Zero IQR collapses both whiskers onto the quartiles.
    whisker_low = max(lo, q1 - whisker_factor * iqr)
    whisker_high = min(hi, q3 + whisker_factor * iqr)

    outlier_mask = (ordered < whisker_low) | (ordered > whisker_high)
    outliers = tuple(float(v) for v in ordered[outlier_mask].tolist())

    return BoxplotStats(
        min=lo,
        q1=q1,
        median=median,
        q3=q3,
        max=hi,
        mean=float(np.mean(ordered)),
        iqr=iqr,
        whisker_low=whisker_low,
        whisker_high=whisker_high,
        outliers=outliers,
    )


def compute_histogram_bins(values: Iterable[Any], bin_count: int) -> list[HistogramBin]:
    arr = np.asarray(finite_values(values), dtype=np.float64)
    if arr.size == 0:
        return []
    if bin_count < 1:
        LOGGER.debug("bin_count=%r is below 1; using a single bin", bin_count)
        bin_count = 1
    bin_count = int(bin_count)

    lo = float(np.min(arr))
    hi = float(np.max(arr))
    span = hi - lo
    if math.isfinite(span):
        # Flat series: any positive width keeps the division finite.
        width = span / bin_count or 1.0
        offsets = (arr - lo) / width
    else:
        # The range itself overflows a float; measure in bin widths instead.
        width = hi / bin_count - lo / bin_count
        if not math.isfinite(width):
            LOGGER.debug("histogram range (%r, %r) is too wide to split; using one bin", lo, hi)
            return [HistogramBin(start=lo, end=hi, count=int(arr.size))]
        offsets = arr / width - lo / width

    idx = np.floor(offsets).astype(np.int64)
    # The maximum value lands exactly on the upper edge; keep it in the last bin.
    idx = np.clip(idx, 0, bin_count - 1)
    counts = np.bincount(idx, minlength=bin_count)

    bins: list[HistogramBin] = []
    for i in range(bin_count):
        start = lo + i * width
        end = lo + (i + 1) * width
        if i == bin_count - 1 and hi > lo:
            end = hi
        bins.append(HistogramBin(start=start, end=end, count=int(counts[i])))
    return bins


def compute_summary(values: Iterable[Any]) -> SummaryStats | None:
    ordered = _sorted_finite(values)
    if ordered.size == 0:
        return None
    return SummaryStats(
        count=int(ordered.size),
        mean=float(np.mean(ordered)),
        median=_median_of_sorted(ordered),
        min=float(ordered[0]),
        max=float(ordered[-1]),
        # Population deviation (ddof=0), matching the rest of the display layer.
        std_dev=float(np.std(ordered, ddof=0)),
    )


def _sorted_finite(values: Iterable[Any]) -> np.ndarray:
    return np.sort(np.asarray(finite_values(values), dtype=np.float64))


def _median_of_sorted(ordered: np.ndarray) -> float:
    n = int(ordered.size)
    mid = n // 2
    if n % 2 == 0:
        return float((ordered[mid - 1] + ordered[mid]) / 2.0)
    return float(ordered[mid])
