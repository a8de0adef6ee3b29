from __future__ import annotations

from collections.abc import Callable, Sequence
from decimal import Decimal, InvalidOperation
import logging
import math

import numpy as np


LOGGER = logging.getLogger(__name__)

LinearScale = Callable[[float], float]

_COMPACT_UNITS: tuple[tuple[float, str], ...] = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)
COMPACT_THRESHOLD = 10_000.0

# Below this the decimal count needed to clean ticks overflows 10.0**decimals.
_MIN_ROUGH_STEP = 1e-300
# Steps this large give whole-number ticks; rounding them can overflow.
_UNROUNDED_STEP = 1e7


def calculate_nice_ticks(vmin: float, vmax: float, target_count: int) -> list[float]:
    """Human-friendly axis ticks covering ``[vmin, vmax]``.

    The step is 1, 2, 5 or 10 times a power of ten chosen from the rough step
    ``(vmax - vmin) / (target_count - 1)``. Always returns at least two
    strictly increasing values; a flat range yields ``[vmin, vmin + 1]``.
    Ranges too wide or too narrow for a float step fall back to
    ``[vmin, vmax]``.
    """
    if not (math.isfinite(vmin) and math.isfinite(vmax)):
        LOGGER.debug("non-finite tick range (%r, %r); using [0, 1]", vmin, vmax)
        return [0.0, 1.0]
    vmin = float(vmin)
    vmax = float(vmax)
    if vmin > vmax:
        vmin, vmax = vmax, vmin
    if vmin == vmax:
        LOGGER.debug("flat tick range at %r; using [%r, %r]", vmin, vmin, vmin + 1.0)
        return [vmin, vmin + 1.0]

    target = max(2, int(target_count))
    span = vmax - vmin
    rough_step = span / (target - 1)
    if not math.isfinite(span) or not _MIN_ROUGH_STEP <= rough_step:
        LOGGER.debug("tick step for (%r, %r) is out of float range; using the bounds", vmin, vmax)
        return [vmin, vmax]

    step = _nice_step(rough_step)
    first = vmin / step
    last = vmax / step
    if not (math.isfinite(step) and math.isfinite(first) and math.isfinite(last)):
        LOGGER.debug("ticks for (%r, %r) overflow; using the bounds", vmin, vmax)
        return [vmin, vmax]
    tick_min = math.floor(first) * step
    tick_max = math.ceil(last) * step
    if not (math.isfinite(tick_min) and math.isfinite(tick_max)):
        LOGGER.debug("ticks for (%r, %r) overflow; using the bounds", vmin, vmax)
        return [vmin, vmax]
    count = int(round((tick_max - tick_min) / step)) + 1

    # Index-based generation; rounding removes drift such as 0.30000000000000004.
    decimals = _tick_decimals(step)
    ticks = _round_ticks(tick_min + np.arange(count, dtype=np.float64) * step, decimals)
    # Rounding may pull an end tick just inside the data range.
    if ticks[0] > vmin:
        ticks = np.insert(ticks, 0, _round_ticks(ticks[:1] - step, decimals))
    if ticks[-1] < vmax:
        ticks = np.append(ticks, _round_ticks(ticks[-1:] + step, decimals))
    ticks[ticks == 0.0] = 0.0
    ticks = np.unique(ticks)

    if ticks.size < 2 or not np.all(np.isfinite(ticks)):
        return [vmin, vmax]
    return [float(t) for t in ticks.tolist()]


def make_linear_scale(domain_min: float, domain_max: float, range_min: float, range_max: float) -> LinearScale:
    # Flat domain: divide by 1 so every value maps to a deterministic pixel.
    span = (domain_max - domain_min) or 1.0
    extent = range_max - range_min

    def scale(value: float) -> float:
        return range_min + (value - domain_min) / span * extent

    return scale


def format_tick(value: float, *, step: float | None = None) -> str:
    """Axis label for one tick, with just enough decimals for ``step``."""
    if not math.isfinite(value):
        return str(value)
    if step is not None and math.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        # Leftover drift next to zero prints as 0, not 1e-17.
        value = 0.0
    magnitude = abs(value)
    tiny_step = step is not None and abs(step) < 1e-4
    if magnitude != 0 and (magnitude >= 1e15 or magnitude < 1e-6 or tiny_step):
        return f"{value:.4e}"

    places = 6 if step is None else _decimals_from_step(step)
    exact = Decimal(str(value))
    try:
        exact = exact.quantize(Decimal(1).scaleb(-places))
    except InvalidOperation:
        pass
    return _trim_fraction(format(exact, "f"))


def format_ticks_for_axis(ticks: Sequence[float]) -> list[str]:
    """Format a whole tick vector using the spacing of its first pair."""
    values = [float(t) for t in ticks]
    if len(values) < 2:
        return [format_tick(v) for v in values]
    step = abs(values[1] - values[0])
    return [format_tick(v, step=step) for v in values]


def format_value(value: float, decimals: int = 2) -> str:
    """Display format for chart values: compact ``K/M/B/T`` from 10,000 up."""
    v = float(value)
    if not math.isfinite(v):
        return "—"
    if abs(v) < COMPACT_THRESHOLD:
        return _trim_fraction(f"{v:,.{decimals}f}")

    unit_index = next(i for i, (threshold, _) in enumerate(_COMPACT_UNITS) if abs(v) >= threshold)
    threshold, suffix = _COMPACT_UNITS[unit_index]
    scaled = v / threshold
    # 999,999 rounds to "1000K"; promote it to the next unit instead.
    if unit_index > 0 and round(abs(scaled), decimals) >= 1000:
        threshold, suffix = _COMPACT_UNITS[unit_index - 1]
        scaled = v / threshold
    return _trim_fraction(f"{scaled:,.{decimals}f}") + suffix


def _nice_step(rough_step: float) -> float:
    magnitude = 10 ** math.floor(math.log10(rough_step))
    residual = rough_step / magnitude
    if residual <= 1.5:
        nice = 1.0
    elif residual <= 3.0:
        nice = 2.0
    elif residual <= 7.0:
        nice = 5.0
    else:
        nice = 10.0
    return nice * magnitude


def _tick_decimals(step: float) -> int | None:
    if step >= _UNROUNDED_STEP:
        return None
    return max(10, 6 - int(math.floor(math.log10(step))))


def _round_ticks(ticks: np.ndarray, decimals: int | None) -> np.ndarray:
    if decimals is None:
        return ticks
    return np.round(ticks, decimals)


def _decimals_from_step(step: float) -> int:
    """Fractional digits in ``step`` itself, capped at 12."""
    if step <= 0 or not math.isfinite(step):
        return 6
    exponent = int(Decimal(repr(step)).normalize().as_tuple().exponent)
    return min(12, max(0, -exponent))


def _trim_fraction(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text
