from __future__ import annotations

from collections.abc import Iterable

from dashplot.adapters import Row, category_label, coerce_finite
from dashplot.palette import DEFAULT_PALETTE_ID, color_for_index
from dashplot.series import FunnelStage, WaterfallStep

TOTAL_LABEL = "Total"


def build_waterfall_steps(
    rows: Iterable[Row],
    category_column: str,
    value_column: str,
    show_total: bool = True,
) -> list[WaterfallStep]:
    steps: list[WaterfallStep] = []
    running = 0.0
    for row in rows:
        value = coerce_finite(row.get(value_column))
        if value is None:
            continue
        start = running
        running += value
        steps.append(
            WaterfallStep(category=category_label(row.get(category_column)), value=value, start=start, end=running)
        )
    if show_total and steps:
        steps.append(WaterfallStep(category=TOTAL_LABEL, value=running, start=0.0, end=running, is_total=True))
    return steps


def build_funnel_stages(
    rows: Iterable[Row],
    stage_column: str,
    value_column: str,
    palette_id: str = DEFAULT_PALETTE_ID,
) -> list[FunnelStage]:
    """Funnel stages, largest first, with width share and step conversion.

    ``percentage`` is relative to the top stage; ``conversion_rate`` is the
    share kept from the previous stage and is ``None`` where undefined.
    """
    raw: list[tuple[str, float, str]] = []
    for row in rows:
        value = coerce_finite(row.get(value_column))
        if value is None:
            continue
        # Colors follow source order so a stage keeps its color when values change.
        raw.append((category_label(row.get(stage_column)), value, color_for_index(palette_id, len(raw))))
    if not raw:
        return []

    ordered = sorted(raw, key=lambda item: -item[1])
    # A zero or negative top stage would divide by zero.
    top = ordered[0][1] if ordered[0][1] > 0 else 1.0

    stages: list[FunnelStage] = []
    previous: float | None = None
    for label, value, color in ordered:
        conversion = None
        if previous is not None and previous != 0:
            conversion = value / previous * 100.0
        stages.append(FunnelStage(label=label, value=value, color=color, percentage=value / top * 100.0, conversion_rate=conversion))
        previous = value
    return stages
