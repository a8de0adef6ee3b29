from .rows import Row, category_label, coerce_finite, finite_values, numeric_column, rows_from_dataframe

__all__ = [
    "Row",
    "category_label",
    "coerce_finite",
    "finite_values",
    "numeric_column",
    "rows_from_dataframe",
]
