"""Residual outlier check for logistic regression.

If standardised (or studentised) residuals are approximately normal,
about 5% of them should lie beyond ±1.96 standard deviations of their
mean and about 1% beyond ±2.58.  The proportion actually observed
outside those bounds is a quick screen for a model that fits a subset
of observations poorly:

    upper = mean + k·sd,   lower = mean − k·sd
    rate  = (#{r_i > upper} + #{r_i < lower}) / n

with ``sd`` the sample standard deviation (ddof = 1) and k = 1.96 or
2.58.  A rate well above 0.05 (or 0.01) is the warning sign.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import numpy as np

from ._compat import _ensure_float_array
from ._results import ResidualOutlierSummary
from ._typing import ArrayLike
from .errors import InvalidInput
from .model import StatsmodelsFittedModel, as_fitted_model

logger = logging.getLogger(__name__)


class OutlierLevel(Enum):
    """Two-sided outlier level and its standard-deviation multiplier."""

    FIVE_PERCENT = "5%"
    ONE_PERCENT = "1%"

    @property
    def multiplier(self) -> float:
        """Number of standard deviations defining an outlier."""
        return _MULTIPLIERS[self]

    @property
    def expected_rate(self) -> float:
        """Proportion expected beyond the bounds under normality."""
        return _EXPECTED_RATES[self]

    @classmethod
    def parse(cls, level: OutlierLevel | str) -> OutlierLevel:
        """Resolve *level* to an ``OutlierLevel``.

        Accepts members, their values (``"5%"``, ``"1%"``) and the
        aliases ``"sd5"`` / ``"sd1"``.

        Raises:
            InvalidInput: If *level* is not recognised.
        """
        if isinstance(level, cls):
            return level
        if isinstance(level, str):
            key = level.strip().lower()
            if key in _ALIASES:
                return _ALIASES[key]
        raise InvalidInput(
            f"Unknown outlier level {level!r}. Choose from: "
            f"{sorted(_ALIASES)}"
        )


# Every member must appear in each table; lookups never fall through.
_MULTIPLIERS: dict[OutlierLevel, float] = {
    OutlierLevel.FIVE_PERCENT: 1.96,
    OutlierLevel.ONE_PERCENT: 2.58,
}

_EXPECTED_RATES: dict[OutlierLevel, float] = {
    OutlierLevel.FIVE_PERCENT: 0.05,
    OutlierLevel.ONE_PERCENT: 0.01,
}

_ALIASES: dict[str, OutlierLevel] = {
    "5%": OutlierLevel.FIVE_PERCENT,
    "sd5": OutlierLevel.FIVE_PERCENT,
    "1%": OutlierLevel.ONE_PERCENT,
    "sd1": OutlierLevel.ONE_PERCENT,
}


def _mean_sd(values: np.ndarray) -> tuple[float, float]:
    """Return the mean and sample SD; SD is 0 for a single value."""
    # Exact for constant input, where np.mean may round off the value.
    if np.all(values == values[0]):
        return float(values[0]), 0.0
    return float(np.mean(values)), float(np.std(values, ddof=1))


def _rate(values: np.ndarray, mean: float, sd: float, k: float) -> float:
    upper = mean + k * sd
    lower = mean - k * sd
    n_out = int(np.sum(values > upper)) + int(np.sum(values < lower))
    return n_out / values.size


def _prepare(residuals: Any, column: str | None) -> np.ndarray:
    values = _ensure_float_array(residuals, column=column, name="residuals")
    if values.size == 0:
        raise InvalidInput("residuals is empty; the outlier rate is undefined.")
    return values


def residual_outlier_rate(
    residuals: ArrayLike,
    level: OutlierLevel | str = OutlierLevel.FIVE_PERCENT,
    *,
    column: str | None = None,
) -> float:
    """Fraction of residuals lying beyond ±k standard deviations.

    Args:
        residuals: Residual values: an array, sequence, pandas Series,
            or a DataFrame together with *column*.  Polars inputs are
            accepted when Polars is installed.
        level: ``"5%"`` (k = 1.96) or ``"1%"`` (k = 2.58), or an
            :class:`OutlierLevel`.  ``"sd5"`` / ``"sd1"`` are aliases.
        column: Residual column name when *residuals* is a DataFrame.

    Returns:
        The outlier proportion, in ``[0, 1]``.  A constant sequence
        has SD 0 and returns 0.

    Raises:
        InvalidInput: If *residuals* is empty, non-numeric or
            non-finite, or *level* is unrecognised.
    """
    lvl = OutlierLevel.parse(level)
    values = _prepare(residuals, column)
    mean, sd = _mean_sd(values)
    rate = _rate(values, mean, sd, lvl.multiplier)
    logger.debug(
        "Outlier rate at %s (k=%.2f): %.4f over n=%d",
        lvl.value,
        lvl.multiplier,
        rate,
        values.size,
    )
    return rate


def check_residuals(
    residuals: Any,
    *,
    column: str | None = None,
    kind: str = "studentized",
) -> ResidualOutlierSummary:
    """Evaluate the outlier rate at both levels.

    Args:
        residuals: Residual values as accepted by
            :func:`residual_outlier_rate`, or a statsmodels Binomial
            GLM / Logit result whose residuals are extracted first.
        column: Residual column name when *residuals* is a DataFrame.
        kind: Residual flavour pulled from a statsmodels result:
            ``"studentized"``, ``"deviance"`` or ``"pearson"``.

    Returns:
        A :class:`ResidualOutlierSummary`; ``exceeds_5`` /
        ``exceeds_1`` flag rates above 5% / 1%.

    Raises:
        InvalidInput: As for :func:`residual_outlier_rate`.
    """
    if _is_model_like(residuals):
        fitted = as_fitted_model(residuals)
        if not isinstance(fitted, StatsmodelsFittedModel):
            raise InvalidInput(
                f"Cannot extract residuals from {type(residuals).__name__}; "
                f"pass the residual values instead."
            )
        residuals = fitted.residuals(kind)

    values = _prepare(residuals, column)
    mean, sd = _mean_sd(values)
    five, one = OutlierLevel.FIVE_PERCENT, OutlierLevel.ONE_PERCENT
    rate_5 = _rate(values, mean, sd, five.multiplier)
    rate_1 = _rate(values, mean, sd, one.multiplier)

    return ResidualOutlierSummary(
        n_observations=int(values.size),
        mean=mean,
        sd=sd,
        rate_5=rate_5,
        rate_1=rate_1,
        exceeds_5=rate_5 > five.expected_rate,
        exceeds_1=rate_1 > one.expected_rate,
    )


def _is_model_like(obj: Any) -> bool:
    """Return ``True`` for fitted-model objects rather than residual data."""
    return hasattr(obj, "params") or isinstance(obj, StatsmodelsFittedModel)
