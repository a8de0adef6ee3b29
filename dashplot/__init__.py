from dashplot.config import DEFAULT_CONFIG, EngineConfig, validate_engine_config
from dashplot.errors import ChartConfigError, ChartDataError
from dashplot.labels import get_spaced_indices, truncate_label
from dashplot.palette import color_for_index, generate_color_scale, get_palette, lighten_color, palette_colors
from dashplot.paths import build_area_path, build_band_path, catmull_rom_path, describe_arc, polyline_path
from dashplot.scales import calculate_nice_ticks, format_tick, format_ticks_for_axis, format_value, make_linear_scale
from dashplot.sequences import build_funnel_stages, build_waterfall_steps
from dashplot.series import (
    BoxplotStats,
    FunnelStage,
    HistogramBin,
    LayoutRect,
    SplinePoint,
    StackedBand,
    StackedLayout,
    SummaryStats,
    TreemapNode,
    WaterfallStep,
)
from dashplot.stacking import build_stacked_bands
from dashplot.stats import compute_boxplot_stats, compute_histogram_bins, compute_summary
from dashplot.treemap import build_treemap_nodes, layout_treemap, squarify

__all__ = [
    "BoxplotStats",
    "ChartConfigError",
    "ChartDataError",
    "DEFAULT_CONFIG",
    "EngineConfig",
    "FunnelStage",
    "HistogramBin",
    "LayoutRect",
    "SplinePoint",
    "StackedBand",
    "StackedLayout",
    "SummaryStats",
    "TreemapNode",
    "WaterfallStep",
    "build_area_path",
    "build_band_path",
    "build_funnel_stages",
    "build_stacked_bands",
    "build_treemap_nodes",
    "build_waterfall_steps",
    "calculate_nice_ticks",
    "catmull_rom_path",
    "color_for_index",
    "compute_boxplot_stats",
    "compute_histogram_bins",
    "compute_summary",
    "describe_arc",
    "format_tick",
    "format_ticks_for_axis",
    "format_value",
    "generate_color_scale",
    "get_palette",
    "get_spaced_indices",
    "layout_treemap",
    "lighten_color",
    "make_linear_scale",
    "palette_colors",
    "polyline_path",
    "squarify",
    "truncate_label",
    "validate_engine_config",
]
