"""Typed result objects for logistic regression diagnostics.

Frozen dataclasses that provide:

* **Attribute access** — ``result.overall.hosmer``, ``row.odds_ratio``.
* **Dict-like access** — ``result["overall"]``, ``row.get("sig")``,
  ``"hosmer" in stats`` for consumers that prefer bracket syntax.
* **Serialisation** — ``.to_dict()`` returns a plain ``dict[str, Any]``
  with all NumPy types converted to native Python.
* **Tabular output** — ``.to_frame()`` / ``coefficient_frame()``
  return pandas DataFrames for downstream reporting.

All types are frozen to communicate that results are a snapshot of a
completed computation.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar

import numpy as np
import pandas as pd

# ------------------------------------------------------------------ #
# Serialisation helper
# ------------------------------------------------------------------ #


def _numpy_to_python(obj: Any) -> Any:
    """Recursively convert NumPy scalars/arrays to Python-native types.

    Handles nested dataclass results, dicts, lists, np.ndarray,
    np.integer and np.floating so that :meth:`to_dict` returns a fully
    JSON-serialisable structure.
    """
    if isinstance(obj, _DictAccessMixin):
        return obj.to_dict()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, dict):
        return {k: _numpy_to_python(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        converted = [_numpy_to_python(item) for item in obj]
        return type(obj)(converted)
    return obj


# ------------------------------------------------------------------ #
# Dict-compatibility mixin
# ------------------------------------------------------------------ #


class _DictAccessMixin:
    """Dict-like access convenience for result dataclasses.

    Supports three access patterns:

    1. ``result["key"]``      — raises ``KeyError`` on miss
    2. ``result.get(key, d)`` — returns *d* on miss (default ``None``)
    3. ``"key" in result``    — membership test
    """

    _EXCLUDE_FROM_DICT: ClassVar[frozenset[str]] = frozenset()

    def __getitem__(self, key: str) -> Any:
        """Attribute lookup via bracket syntax."""
        try:
            return getattr(self, key)
        except AttributeError:
            raise KeyError(key) from None

    def get(self, key: str, default: Any = None) -> Any:
        """Attribute lookup with a fallback default."""
        return getattr(self, key, default)

    def __contains__(self, key: object) -> bool:
        """Membership test: ``"key" in result``."""
        if not isinstance(key, str):
            return False
        return key in {f.name for f in fields(self)}  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain, JSON-serialisable dictionary."""
        result: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            if f.name in self._EXCLUDE_FROM_DICT:
                continue
            result[f.name] = _numpy_to_python(getattr(self, f.name))
        return result


# ------------------------------------------------------------------ #
# Coefficient table
# ------------------------------------------------------------------ #

# Column order of the coefficient table.
COEFFICIENT_COLUMNS: tuple[str, ...] = (
    "predictor",
    "beta",
    "p_value",
    "sig",
    "lower_ci",
    "odds_ratio",
    "upper_ci",
)


@dataclass(frozen=True)
class CoefficientRow(_DictAccessMixin):
    """One predictor's odds ratio, bounds and significance marker."""

    predictor: str
    """Predictor label as reported by the fitted model."""

    beta: float
    """Log-odds coefficient."""

    p_value: float
    """Two-sided p-value for the coefficient."""

    sig: str
    """Significance marker: ``""``, ``"*"`` or ``"**"``."""

    odds_ratio: float | None
    """``exp(beta)``; ``None`` for the intercept."""

    lower_ci: float | None
    """Lower odds-ratio confidence bound; ``None`` for the intercept."""

    upper_ci: float | None
    """Upper odds-ratio confidence bound; ``None`` for the intercept."""

    is_intercept: bool = False
    """Whether this row is the model intercept."""


@dataclass(frozen=True)
class OverallFitStats(_DictAccessMixin):
    """Model-level likelihood-ratio test and pseudo R² measures."""

    diff_deviance: float
    """Null deviance minus residual deviance (the χ² statistic)."""

    diff_df: float
    """Null minus residual degrees of freedom."""

    chisq_prob: float
    """Upper-tail χ² probability of ``diff_deviance`` on ``diff_df``."""

    cox_snell: float
    """Cox and Snell pseudo R²."""

    nagelkerke: float
    """Nagelkerke pseudo R² (Cox-Snell rescaled to a maximum of 1)."""

    hosmer: float
    """Hosmer-Lemeshow pseudo R² (proportional deviance reduction)."""

    n_observations: int
    """Number of fitted values used as *n*."""

    def to_frame(self) -> pd.DataFrame:
        """Return the statistics as a one-row DataFrame."""
        return pd.DataFrame([self.to_dict()])


@dataclass(frozen=True)
class LogitCheckResult(_DictAccessMixin):
    """Result of :func:`~logit_diagnostics.check_logit`.

    Attributes mirror the two tables of the report: ``coefficients``
    (one row per predictor, in model order) and ``overall``.
    """

    coefficients: list[CoefficientRow]
    """Per-predictor rows in the fitted model's order."""

    overall: OverallFitStats
    """Model-level fit statistics."""

    p_value_threshold_one: float = 0.05
    """Threshold used for the ``"*"`` marker."""

    p_value_threshold_two: float = 0.01
    """Threshold used for the ``"**"`` marker."""

    @property
    def intercept(self) -> CoefficientRow | None:
        """The intercept row, or ``None`` if the model has none."""
        for row in self.coefficients:
            if row.is_intercept:
                return row
        return None

    def coefficient_frame(self) -> pd.DataFrame:
        """Return the coefficient table as a DataFrame.

        Null odds ratios and bounds become NaN; the frame is indexed
        by predictor name and keeps the ``predictor`` column.
        """
        records = [
            {col: getattr(row, col) for col in COEFFICIENT_COLUMNS}
            for row in self.coefficients
        ]
        frame = pd.DataFrame.from_records(records, columns=list(COEFFICIENT_COLUMNS))
        for col in ("lower_ci", "odds_ratio", "upper_ci"):
            frame[col] = frame[col].astype(float)
        frame.index = pd.Index(frame["predictor"], name=None)
        return frame

    def overall_frame(self) -> pd.DataFrame:
        """Return the overall fit statistics as a one-row DataFrame."""
        return self.overall.to_frame()


# ------------------------------------------------------------------ #
# Residual check
# ------------------------------------------------------------------ #


@dataclass(frozen=True)
class ResidualOutlierSummary(_DictAccessMixin):
    """Outlier proportions of a residual sequence at both levels.

    Under approximate normality about 5% of standardised residuals lie
    beyond ±1.96 SD and about 1% beyond ±2.58 SD; proportions above
    those figures suggest the model fits some observations poorly.
    """

    n_observations: int
    mean: float
    sd: float
    rate_5: float
    """Fraction of residuals beyond ±1.96 SD of the mean."""

    rate_1: float
    """Fraction of residuals beyond ±2.58 SD of the mean."""

    exceeds_5: bool
    """``rate_5 > 0.05``."""

    exceeds_1: bool
    """``rate_1 > 0.01``."""

    def to_frame(self) -> pd.DataFrame:
        """Return a two-row DataFrame, one row per level."""
        return pd.DataFrame(
            {
                "level": ["5%", "1%"],
                "sd_multiplier": [1.96, 2.58],
                "rate": [self.rate_5, self.rate_1],
                "expected": [0.05, 0.01],
                "exceeds": [self.exceeds_5, self.exceeds_1],
            }
        )
