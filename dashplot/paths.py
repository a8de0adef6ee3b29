from __future__ import annotations

from collections.abc import Sequence
import math

from dashplot.series import SplinePoint


def catmull_rom_path(points: Sequence[SplinePoint]) -> str:
    """Smooth SVG path through ``points`` as cubic Bezier segments.

    Each segment ``p1 -> p2`` uses control points ``p1 + (p2 - p0) / 6`` and
    ``p2 - (p3 - p1) / 6``, with ``p0``/``p3`` clamped to the ends of the
    sequence. ``n`` points give exactly ``n - 1`` ``C`` commands.
    """
    if len(points) < 2:
        return ""
    first = points[0]
    second = points[1]
    if len(points) == 2:
        return f"M {_num(first.x)} {_num(first.y)} L {_num(second.x)} {_num(second.y)}"

    last_index = len(points) - 1
    parts = [f"M {_num(first.x)} {_num(first.y)}"]
    for i in range(last_index):
        p0 = points[max(0, i - 1)]
        p1 = points[i]
        p2 = points[i + 1]
        p3 = points[min(last_index, i + 2)]

        cp1x = p1.x + (p2.x - p0.x) / 6
        cp1y = p1.y + (p2.y - p0.y) / 6
        cp2x = p2.x - (p3.x - p1.x) / 6
        cp2y = p2.y - (p3.y - p1.y) / 6
        parts.append(f"C {_num(cp1x)} {_num(cp1y)}, {_num(cp2x)} {_num(cp2y)}, {_num(p2.x)} {_num(p2.y)}")
    return " ".join(parts)


def polyline_path(points: Sequence[SplinePoint]) -> str:
    if len(points) < 2:
        return ""
    head = points[0]
    parts = [f"M {_num(head.x)} {_num(head.y)}"]
    parts.extend(f"L {_num(p.x)} {_num(p.y)}" for p in points[1:])
    return " ".join(parts)


def build_area_path(line_d: str, first: SplinePoint, last: SplinePoint, baseline_y: float) -> str:
    if not line_d:
        return ""
    return f"{line_d} L {_num(last.x)} {_num(baseline_y)} L {_num(first.x)} {_num(baseline_y)} Z"


def build_band_path(top: Sequence[SplinePoint], bottom: Sequence[SplinePoint], *, smooth: bool = True) -> str:
    """Closed stacked-area band: upper edge left to right, lower edge back."""
    if len(top) < 2 or len(bottom) < 2:
        return ""
    edge = catmull_rom_path if smooth else polyline_path
    upper = edge(top)
    lower = edge(list(reversed(bottom)))
    # Replace the lower edge's initial move with a line so the outline stays connected.
    return f"{upper} L{lower[1:]} Z"


def describe_arc(cx: float, cy: float, radius: float, start_deg: float, end_deg: float) -> str:
    start_rad = math.radians(start_deg)
    end_rad = math.radians(end_deg)
    x1 = cx + radius * math.cos(start_rad)
    y1 = cy + radius * math.sin(start_rad)
    x2 = cx + radius * math.cos(end_rad)
    y2 = cy + radius * math.sin(end_rad)
    large_arc = 0 if end_deg - start_deg <= 180 else 1
    return f"M {_num(x1)} {_num(y1)} A {_num(radius)} {_num(radius)} 0 {large_arc} 1 {_num(x2)} {_num(y2)}"


def _num(value: float) -> str:
    v = float(value)
    if v == 0:
        return "0"
    if math.isfinite(v) and v.is_integer() and abs(v) < 1e21:
        return str(int(v))
    return repr(v)
