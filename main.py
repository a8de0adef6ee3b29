from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
import sys
from typing import Any, Sequence

from dashplot import (
    EngineConfig,
    LayoutRect,
    build_stacked_bands,
    build_treemap_nodes,
    calculate_nice_ticks,
    compute_boxplot_stats,
    compute_histogram_bins,
    compute_summary,
    layout_treemap,
)
from dashplot.adapters import numeric_column
from dashplot.errors import ChartDataError


def main(argv: Sequence[str] | None = None) -> int:
    config = EngineConfig.from_env()
    parser = argparse.ArgumentParser(prog="dashplot")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    ticks = sub.add_parser("ticks", help="Print nice axis ticks for a value range.")
    ticks.add_argument("--min", dest="vmin", type=float, required=True)
    ticks.add_argument("--max", dest="vmax", type=float, required=True)
    ticks.add_argument("--count", type=int, default=config.tick_count)

    stats = sub.add_parser("stats", help="Boxplot and summary statistics for one column.")
    stats.add_argument("--rows", type=Path, required=True, help="JSON file holding a list of row objects.")
    stats.add_argument("--column", required=True)
    stats.add_argument("--whisker-factor", type=float, default=config.whisker_factor)

    histogram = sub.add_parser("histogram", help="Equal-width histogram bins for one column.")
    histogram.add_argument("--rows", type=Path, required=True)
    histogram.add_argument("--column", required=True)
    histogram.add_argument("--bins", type=int, default=config.bin_count)

    stack = sub.add_parser("stack", help="Stacked bands per category and series.")
    stack.add_argument("--rows", type=Path, required=True)
    stack.add_argument("--category", required=True)
    stack.add_argument("--series", required=True)
    stack.add_argument("--value", required=True)
    stack.add_argument("--normalized", action="store_true")

    treemap = sub.add_parser("treemap", help="Squarified treemap rectangles.")
    treemap.add_argument("--rows", type=Path, required=True)
    treemap.add_argument("--category", required=True)
    treemap.add_argument("--value", required=True)
    treemap.add_argument("--subcategory", default=None)
    treemap.add_argument("--width", type=float, default=600.0)
    treemap.add_argument("--height", type=float, default=400.0)
    treemap.add_argument("--padding", type=float, default=config.treemap_padding)
    treemap.add_argument("--palette", default=config.palette_id)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "ticks":
        _emit(calculate_nice_ticks(args.vmin, args.vmax, args.count))
        return 0

    try:
        rows = _load_rows(args.rows)
    except ChartDataError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.command == "stats":
        values = numeric_column(rows, args.column)
        _emit(
            {
                "boxplot": compute_boxplot_stats(values, whisker_factor=args.whisker_factor),
                "summary": compute_summary(values),
            }
        )
        return 0

    if args.command == "histogram":
        _emit(compute_histogram_bins(numeric_column(rows, args.column), args.bins))
        return 0

    if args.command == "stack":
        layout = build_stacked_bands(rows, args.category, args.series, args.value, normalized=args.normalized)
        _emit(layout)
        return 0

    if args.command == "treemap":
        nodes, _ = build_treemap_nodes(
            rows,
            args.category,
            args.value,
            subcategory_column=args.subcategory,
            palette_id=args.palette,
        )
        rect = LayoutRect(x=0.0, y=0.0, width=args.width, height=args.height)
        _emit(layout_treemap(nodes, rect, padding=args.padding))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


def _load_rows(path: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ChartDataError(f"cannot read rows file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ChartDataError(f"rows file {path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list) or not all(isinstance(row, dict) for row in payload):
        raise ChartDataError(f"rows file {path} must hold a JSON list of objects")
    return payload


def _emit(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), indent=2))


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


if __name__ == "__main__":
    raise SystemExit(main())
