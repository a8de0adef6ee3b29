from __future__ import annotations

from collections.abc import Iterable, Sequence
import dataclasses
import logging
import math
from typing import Any

from dashplot.adapters import Row, category_label, coerce_finite
from dashplot.palette import DEFAULT_PALETTE_ID, color_for_index, lighten_color
from dashplot.series import LayoutRect, TreemapNode


LOGGER = logging.getLogger(__name__)

_EPS = 1e-9

_Weighted = tuple[TreemapNode, float]


def squarify(nodes: Sequence[TreemapNode], rect: LayoutRect, total_value: float) -> list[TreemapNode]:
    """Squarified treemap layout (Bruls, Huizing and van Wijk).

    Nodes are taken largest first. A row grows along the short side of the
    remaining rectangle while that does not worsen its worst aspect ratio;
    the row is then fixed and the rectangle shrinks by the row's thickness.
    Each cell's area is ``value / total_value`` of ``rect``; when the values
    sum to ``total_value`` the cells tile ``rect`` exactly.

    Values may be any scalar ``coerce_finite`` accepts (numpy, ``Decimal``).
    Nodes with non-positive or non-finite values come last, with a zero-size
    rect at the container origin. Inputs are never mutated.
    """
    if not nodes:
        return []
    if len(nodes) == 1:
        return [dataclasses.replace(nodes[0], rect=rect)]

    positive: list[_Weighted] = []
    empty: list[TreemapNode] = []
    for node in nodes:
        weight = _weight(node.value)
        if weight is None:
            empty.append(node)
        else:
            positive.append((node, weight))
    if empty:
        LOGGER.debug("treemap: %d node(s) without a positive value get zero-size cells", len(empty))

    positive_sum = sum(w for _, w in positive)
    total = _weight(total_value) or 0.0
    if total < positive_sum:
        # Never let cells overflow the container.
        total = positive_sum

    ordered = sorted(positive, key=lambda item: -item[1])
    placed = _layout_rows(ordered, rect, total)
    origin = LayoutRect(x=rect.x, y=rect.y, width=0.0, height=0.0)
    placed.extend(dataclasses.replace(n, rect=origin) for n in empty)
    return placed


def layout_treemap(nodes: Sequence[TreemapNode], rect: LayoutRect, padding: float = 0.0) -> list[TreemapNode]:
    """Lay out ``nodes`` and, recursively, their children inside each parent cell."""
    total = sum(w for w in (_weight(n.value) for n in nodes) if w is not None)
    out: list[TreemapNode] = []
    for node in squarify(nodes, rect, total):
        if node.children and node.rect is not None and node.rect.area > 0:
            inner = node.rect.inset(padding)
            node = dataclasses.replace(node, children=tuple(layout_treemap(node.children, inner, padding)))
        out.append(node)
    return out


def build_treemap_nodes(
    rows: Iterable[Row],
    category_column: str,
    value_column: str,
    subcategory_column: str | None = None,
    palette_id: str = DEFAULT_PALETTE_ID,
) -> tuple[tuple[TreemapNode, ...], float]:
    if not subcategory_column:
        flat: list[TreemapNode] = []
        for row in rows:
            value = coerce_finite(row.get(value_column))
            if value is None:
                continue
            flat.append(
                TreemapNode(
                    label=category_label(row.get(category_column)),
                    value=value,
                    color=color_for_index(palette_id, len(flat)),
                )
            )
        return tuple(flat), sum(n.value for n in flat)

    groups: dict[str, list[tuple[str, float]]] = {}
    for row in rows:
        value = coerce_finite(row.get(value_column))
        if value is None:
            continue
        category = category_label(row.get(category_column))
        groups.setdefault(category, []).append((category_label(row.get(subcategory_column)), value))

    grouped: list[TreemapNode] = []
    for index, (category, items) in enumerate(groups.items()):
        base = color_for_index(palette_id, index)
        children = tuple(
            TreemapNode(label=label, value=value, color=lighten_color(base, 0.1 + i * 0.1))
            for i, (label, value) in enumerate(items)
        )
        grouped.append(
            TreemapNode(label=category, value=sum(v for _, v in items), color=base, children=children)
        )
    return tuple(grouped), sum(n.value for n in grouped)


def _layout_rows(nodes: list[_Weighted], rect: LayoutRect, total: float) -> list[TreemapNode]:
    placed: list[TreemapNode] = []
    remaining = nodes
    remaining_rect = rect
    remaining_total = total
    while remaining:
        if remaining_rect.width <= 0 or remaining_rect.height <= 0 or remaining_total <= 0:
            flat = LayoutRect(x=remaining_rect.x, y=remaining_rect.y, width=0.0, height=0.0)
            placed.extend(dataclasses.replace(n, rect=flat) for n, _ in remaining)
            break
        scale = remaining_rect.area / remaining_total
        row, rest = _take_row(remaining, _short_side(remaining_rect), scale)
        row_value = sum(w for _, w in row)
        cells, next_rect = _place_row(row, row_value, remaining_rect, scale, fills_rest=not rest and _close(row_value, remaining_total))
        placed.extend(cells)
        remaining, remaining_rect, remaining_total = rest, next_rect, remaining_total - row_value
    return placed


def _take_row(nodes: list[_Weighted], short_side: float, scale: float) -> tuple[list[_Weighted], list[_Weighted]]:
    row = [nodes[0]]
    current = _worst_ratio([w for _, w in row], short_side, scale)
    for i in range(1, len(nodes)):
        candidate = _worst_ratio([w for _, w in row] + [nodes[i][1]], short_side, scale)
        if candidate > current:
            return row, nodes[i:]
        row.append(nodes[i])
        current = candidate
    return row, []


def _worst_ratio(weights: list[float], short_side: float, scale: float) -> float:
    thickness = sum(weights) * scale / short_side
    if thickness <= 0:
        return math.inf
    worst = 0.0
    for weight in weights:
        length = weight * scale / thickness
        if length <= 0:
            return math.inf
        worst = max(worst, length / thickness, thickness / length)
    return worst


def _place_row(
    row: list[_Weighted],
    row_value: float,
    rect: LayoutRect,
    scale: float,
    *,
    fills_rest: bool,
) -> tuple[list[TreemapNode], LayoutRect]:
    vertical_strip = rect.width >= rect.height
    short = rect.height if vertical_strip else rect.width
    long = rect.width if vertical_strip else rect.height
    thickness = long if fills_rest else min(long, row_value * scale / short)

    cells: list[TreemapNode] = []
    offset = 0.0
    for i, (node, weight) in enumerate(row):
        # The last cell absorbs rounding so the row spans the full short side.
        length = short - offset if i == len(row) - 1 else weight / row_value * short
        if vertical_strip:
            cell = LayoutRect(x=rect.x, y=rect.y + offset, width=thickness, height=length)
        else:
            cell = LayoutRect(x=rect.x + offset, y=rect.y, width=length, height=thickness)
        cells.append(dataclasses.replace(node, rect=cell))
        offset += length

    if vertical_strip:
        rest = LayoutRect(x=rect.x + thickness, y=rect.y, width=rect.width - thickness, height=rect.height)
    else:
        rest = LayoutRect(x=rect.x, y=rect.y + thickness, width=rect.width, height=rect.height - thickness)
    return cells, rest


def _short_side(rect: LayoutRect) -> float:
    return min(rect.width, rect.height)


def _weight(value: Any) -> float | None:
    weight = coerce_finite(value)
    return weight if weight is not None and weight > 0 else None


def _close(a: float, b: float) -> bool:
    return abs(a - b) <= _EPS * max(1.0, abs(b))
