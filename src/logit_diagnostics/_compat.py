"""Input compatibility layer for residual sequences.

The residual check accepts NumPy arrays, plain sequences, pandas
Series, and pandas DataFrames together with a column name (the shape
of the original ``test_residuals(df, residuals, which)`` call).  This
module adds transparent support for Polars: a ``polars.Series``,
``polars.DataFrame`` or ``polars.LazyFrame`` is converted to pandas at
the boundary so that the numerical code only ever sees a float array.

Polars is **not** a required dependency.  If it is not installed, the
converter simply handles pandas and NumPy inputs.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from .errors import InvalidInput

# Optional Polars support.
try:
    import polars as pl

    _HAS_POLARS = True
except ImportError:
    _HAS_POLARS = False


def _to_pandas(obj: Any) -> Any:
    """Convert Polars containers to their pandas equivalents."""
    if _HAS_POLARS:
        if isinstance(obj, pl.LazyFrame):
            return obj.collect().to_pandas()
        if isinstance(obj, (pl.DataFrame, pl.Series)):
            return obj.to_pandas()
    return obj


def _ensure_float_array(
    obj: Any,
    *,
    column: str | None = None,
    name: str = "residuals",
) -> np.ndarray:
    """Convert *obj* to a one-dimensional finite ``float`` array.

    Accepted types:
        * ``pandas.DataFrame`` / ``polars.DataFrame`` / ``polars.LazyFrame``
          — *column* selects the residual column.  A single-column
          frame may omit *column*.
        * ``pandas.Series`` / ``polars.Series`` — values are used as-is.
        * ``numpy.ndarray`` or any sequence of numbers.

    Args:
        obj: The residual container.
        column: Column name when *obj* is a data frame.
        name: Label used in error messages.

    Returns:
        A 1-D ``float64`` array.  May be empty; callers decide whether
        emptiness is an error.

    Raises:
        InvalidInput: If the column is missing, the values are not
            numeric, or any value is NaN or infinite.
    """
    obj = _to_pandas(obj)

    if isinstance(obj, pd.DataFrame):
        if column is None:
            if obj.shape[1] != 1:
                raise InvalidInput(
                    f"'{name}' is a DataFrame with {obj.shape[1]} columns; "
                    f"pass column= to select the residuals."
                )
            obj = obj.iloc[:, 0]
        elif column not in obj.columns:
            raise InvalidInput(f"Column '{column}' not found in '{name}'.")
        else:
            obj = obj[column]
    elif column is not None:
        raise InvalidInput(
            f"column='{column}' given but '{name}' is a "
            f"{type(obj).__name__}, not a DataFrame."
        )

    try:
        values = np.asarray(obj, dtype=float)
    except (TypeError, ValueError):
        raise InvalidInput(f"'{name}' must contain numeric values.") from None

    if values.ndim > 1 and values.size != max(values.shape):
        raise InvalidInput(
            f"'{name}' must be one-dimensional, got shape {values.shape}."
        )
    values = np.ravel(values)
    if not np.all(np.isfinite(values)):
        raise InvalidInput(f"'{name}' contains NaN or infinite values.")
    return values
