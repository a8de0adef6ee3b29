from __future__ import annotations

from collections.abc import Iterable
import logging

from dashplot.adapters import Row, category_label, coerce_finite
from dashplot.series import StackedBand, StackedLayout


LOGGER = logging.getLogger(__name__)


def build_stacked_bands(
    rows: Iterable[Row],
    category_column: str,
    series_column: str,
    value_column: str,
    normalized: bool = False,
) -> StackedLayout:
    """Cumulative ``[y0, y1]`` bands per category for stacked bar/area charts.

    Categories and series keep the order they are first seen in ``rows``;
    duplicate (category, series) pairs are summed. Every category carries a
    band for every series, with missing pairs contributing 0. With
    ``normalized`` each band is a percentage of its category total.
    """
    categories: dict[str, None] = {}
    series: dict[str, None] = {}
    sums: dict[str, dict[str, float]] = {}
    skipped = 0

    for row in rows:
        category = category_label(row.get(category_column))
        name = category_label(row.get(series_column))
        categories.setdefault(category, None)
        series.setdefault(name, None)
        per_series = sums.setdefault(category, {})
        value = coerce_finite(row.get(value_column))
        if value is None:
            skipped += 1
            continue
        per_series[name] = per_series.get(name, 0.0) + value

    if skipped:
        LOGGER.debug("skipped %d row(s) with non-numeric %r", skipped, value_column)

    bands: dict[str, tuple[StackedBand, ...]] = {}
    totals: dict[str, float] = {}
    for category in categories:
        values = sums.get(category, {})
        total = sum(values.get(name, 0.0) for name in series)
        pinned = normalized and total != 0
        if normalized and total == 0:
            LOGGER.debug("category %r has a zero total; its percentage bands are empty", category)
        stack: list[StackedBand] = []
        y0 = 0.0
        for name in series:
            value = values.get(name, 0.0)
            if normalized:
                # Zero total: every band is empty rather than NaN.
                value = value * 100.0 / total if total != 0 else 0.0
            y1 = y0 + value
            if pinned:
                # Summation drift must not push a band past 100.
                y1 = min(y1, 100.0)
            stack.append(StackedBand(series=name, value=value, y0=y0, y1=y1))
            y0 = y1
        if pinned and stack:
            last = stack[-1]
            stack[-1] = StackedBand(series=last.series, value=last.value, y0=last.y0, y1=100.0)
        bands[category] = tuple(stack)
        if normalized:
            totals[category] = 100.0 if total != 0 else 0.0
        else:
            totals[category] = total

    return StackedLayout(
        categories=tuple(categories),
        series=tuple(series),
        bands=bands,
        totals=totals,
        normalized=normalized,
    )
