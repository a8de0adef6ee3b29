from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when input rows cannot be read at an optional boundary."""


class ChartConfigError(ValueError):
    """Raised for invalid engine configuration (palettes, defaults, overrides)."""
