from __future__ import annotations

from dataclasses import dataclass
import re

from dashplot.errors import ChartConfigError

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")

DEFAULT_PALETTE_ID = "default"


@dataclass(frozen=True)
class ColorPalette:
    id: str
    name: str
    colors: tuple[str, ...]
    description: str = ""


PALETTES: tuple[ColorPalette, ...] = (
    ColorPalette(
        id="default",
        name="Default",
        colors=("#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#ec4899", "#06b6d4", "#84cc16"),
        description="Vibrant, balanced color palette",
    ),
    ColorPalette(
        id="corporate",
        name="Corporate",
        colors=("#0f172a", "#334155", "#64748b", "#94a3b8", "#1e40af", "#1d4ed8", "#3b82f6", "#60a5fa"),
        description="Professional blues and grays",
    ),
    ColorPalette(
        id="nature",
        name="Nature",
        colors=("#166534", "#15803d", "#22c55e", "#4ade80", "#854d0e", "#ca8a04", "#365314", "#84cc16"),
        description="Earth tones and greens",
    ),
    ColorPalette(
        id="ocean",
        name="Ocean",
        colors=("#0c4a6e", "#0369a1", "#0ea5e9", "#38bdf8", "#164e63", "#0891b2", "#06b6d4", "#22d3ee"),
        description="Cool blues and teals",
    ),
    ColorPalette(
        id="sunset",
        name="Sunset",
        colors=("#9a3412", "#ea580c", "#fb923c", "#fed7aa", "#b91c1c", "#ef4444", "#fca5a5", "#fecaca"),
        description="Warm oranges and reds",
    ),
    ColorPalette(
        id="berry",
        name="Berry",
        colors=("#701a75", "#a21caf", "#d946ef", "#f0abfc", "#581c87", "#7c3aed", "#a855f7", "#c084fc"),
        description="Purples and magentas",
    ),
    ColorPalette(
        id="monochrome",
        name="Monochrome",
        colors=("#030712", "#1f2937", "#374151", "#6b7280", "#9ca3af", "#d1d5db", "#e5e7eb", "#f9fafb"),
        description="Grayscale",
    ),
    ColorPalette(
        id="rainbow",
        name="Rainbow",
        colors=("#ef4444", "#f97316", "#eab308", "#22c55e", "#06b6d4", "#3b82f6", "#8b5cf6", "#ec4899"),
        description="Full spectrum",
    ),
    ColorPalette(
        id="pastel",
        name="Pastel",
        colors=("#fca5a5", "#fdba74", "#fde047", "#86efac", "#67e8f9", "#93c5fd", "#c4b5fd", "#f9a8d4"),
        description="Soft, muted colors",
    ),
    ColorPalette(
        id="bold",
        name="Bold",
        colors=("#dc2626", "#d97706", "#ca8a04", "#16a34a", "#0891b2", "#2563eb", "#7c3aed", "#db2777"),
        description="High contrast, vivid",
    ),
)

_BY_ID: dict[str, ColorPalette] = {p.id: p for p in PALETTES}


def get_palette(palette_id: str | None) -> ColorPalette:
    """Palette by id; unknown or missing ids fall back to ``default``."""
    return _BY_ID.get(palette_id or DEFAULT_PALETTE_ID, _BY_ID[DEFAULT_PALETTE_ID])


def palette_colors(palette_id: str | None) -> tuple[str, ...]:
    return get_palette(palette_id).colors


def color_for_index(palette_id: str | None, index: int) -> str:
    colors = palette_colors(palette_id)
    return colors[int(index) % len(colors)]


def lighten_color(hex_color: str, factor: float) -> str:
    r, g, b = _parse_hex(hex_color)
    f = max(0.0, min(1.0, float(factor)))
    return _to_hex(
        min(255, round(r + (255 - r) * f)),
        min(255, round(g + (255 - g) * f)),
        min(255, round(b + (255 - b) * f)),
    )


def generate_color_scale(base_color: str, steps: int = 5) -> list[str]:
    """White-to-``base_color`` ramp, e.g. for heatmap legends."""
    if steps <= 0:
        return []
    if steps == 1:
        return [_to_hex(*_parse_hex(base_color))]
    r, g, b = _parse_hex(base_color)
    out: list[str] = []
    for i in range(steps):
        ratio = i / (steps - 1)
        out.append(
            _to_hex(
                round(255 + (r - 255) * ratio),
                round(255 + (g - 255) * ratio),
                round(255 + (b - 255) * ratio),
            )
        )
    return out


def _parse_hex(value: str) -> tuple[int, int, int]:
    match = _HEX_COLOR.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ChartConfigError(f"color must be a hex color (#RRGGBB): {value!r}")
    raw = match.group(1)
    return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16))


def _to_hex(r: int, g: int, b: int) -> str:
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"
