from __future__ import annotations

from dataclasses import asdict, dataclass
import os
from typing import Any, Mapping

from dashplot.errors import ChartConfigError
from dashplot.palette import DEFAULT_PALETTE_ID, PALETTES

ENV_PREFIX = "DASHPLOT_"


@dataclass(frozen=True)
class EngineConfig:
    """Caller-facing defaults; the engine functions themselves take explicit arguments."""

    tick_count: int = 5
    bin_count: int = 10
    max_labels: int = 8
    palette_id: str = DEFAULT_PALETTE_ID
    whisker_factor: float = 1.5
    treemap_padding: float = 0.0

    def __post_init__(self) -> None:
        if self.tick_count < 2:
            raise ChartConfigError("tick_count must be >= 2")
        if self.bin_count < 1:
            raise ChartConfigError("bin_count must be >= 1")
        if self.max_labels < 2:
            raise ChartConfigError("max_labels must be >= 2")
        if self.palette_id not in {p.id for p in PALETTES}:
            raise ChartConfigError(f"unknown palette: {self.palette_id}")
        if self.whisker_factor < 0:
            raise ChartConfigError("whisker_factor must be >= 0")
        if self.treemap_padding < 0:
            raise ChartConfigError("treemap_padding must be >= 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            tick_count=_env_int(env, "TICK_COUNT", defaults.tick_count, minimum=2),
            bin_count=_env_int(env, "BIN_COUNT", defaults.bin_count, minimum=1),
            max_labels=_env_int(env, "MAX_LABELS", defaults.max_labels, minimum=2),
            palette_id=_env_palette(env, defaults.palette_id),
            whisker_factor=_env_float(env, "WHISKER_FACTOR", defaults.whisker_factor),
            treemap_padding=_env_float(env, "TREEMAP_PADDING", defaults.treemap_padding),
        )


DEFAULT_CONFIG = EngineConfig()


def validate_engine_config(overrides: Mapping[str, Any] | None = None) -> EngineConfig:
    """Merge ``overrides`` onto the defaults, rejecting unknown keys and bad types."""
    raw: dict[str, Any] = asdict(DEFAULT_CONFIG)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ChartConfigError(f"Unknown engine setting: {key}")
            raw[key] = value

    for key in ("tick_count", "bin_count", "max_labels"):
        if isinstance(raw[key], bool) or not isinstance(raw[key], int):
            raise ChartConfigError(f"Setting `{key}` must be an integer")
    for key in ("whisker_factor", "treemap_padding"):
        if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)):
            raise ChartConfigError(f"Setting `{key}` must be a number")
    if not isinstance(raw["palette_id"], str):
        raise ChartConfigError("Setting `palette_id` must be a string")

    return EngineConfig(
        tick_count=int(raw["tick_count"]),
        bin_count=int(raw["bin_count"]),
        max_labels=int(raw["max_labels"]),
        palette_id=str(raw["palette_id"]),
        whisker_factor=float(raw["whisker_factor"]),
        treemap_padding=float(raw["treemap_padding"]),
    )


def _env_int(env: Mapping[str, str], name: str, default: int, *, minimum: int) -> int:
    raw = env.get(ENV_PREFIX + name, "").strip()
    if raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(ENV_PREFIX + name, "").strip()
    if raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_palette(env: Mapping[str, str], default: str) -> str:
    raw = env.get(ENV_PREFIX + "PALETTE", "").strip()
    if raw in {p.id for p in PALETTES}:
        return raw
    return default
