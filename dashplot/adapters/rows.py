from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
import logging
import math
from typing import Any

import numpy as np

from dashplot.errors import ChartDataError


LOGGER = logging.getLogger(__name__)

Row = Mapping[str, Any]


def coerce_finite(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` when it is not numeric.

    Booleans, blanks and unparsable strings are rejected rather than coerced
    to zero, so they never distort a statistic.
    """
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    if isinstance(value, (int, float, Decimal, np.integer, np.floating)):
        out = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            out = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(out):
        return None
    return out


def numeric_column(rows: Iterable[Row], column: str) -> list[float]:
    values: list[float] = []
    dropped = 0
    for row in rows:
        v = coerce_finite(row.get(column))
        if v is None:
            dropped += 1
            continue
        values.append(v)
    if dropped:
        LOGGER.debug("dropped %d non-numeric value(s) from column %r", dropped, column)
    return values


def finite_values(values: Iterable[Any]) -> list[float]:
    out: list[float] = []
    for raw in values:
        v = coerce_finite(raw)
        if v is not None:
            out.append(v)
    return out


def category_label(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)):
        f = float(value)
        if math.isfinite(f) and f.is_integer():
            return str(int(f))
        return repr(f) if math.isfinite(f) else str(f)
    return str(value)


def rows_from_dataframe(frame: Any) -> list[dict[str, Any]]:
    try:
        import pandas as pd
    except Exception as exc:  # pragma: no cover - optional dependency
        raise ChartDataError("pandas is required to convert a DataFrame into rows") from exc

    if not isinstance(frame, pd.DataFrame):
        raise ChartDataError("`frame` must be a pandas DataFrame")

    cleaned = frame.astype(object).where(pd.notna(frame), None)
    rows: list[dict[str, Any]] = []
    for record in cleaned.to_dict(orient="records"):
        rows.append({str(k): v for k, v in record.items()})
    return rows
