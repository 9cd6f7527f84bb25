"""Coefficient and overall-fit diagnostics for logistic regression.

Per-predictor statistics
------------------------
A logistic coefficient β_j is the change in log-odds of the outcome per
unit increase in X_j.  Exponentiating gives the odds ratio

    OR_j = exp(β_j)

the multiplicative change in odds per unit of X_j.  Because exp() is
monotone, the odds-ratio confidence interval is obtained by
exponentiating the log-odds bounds supplied by the fitting library:

    [exp(lo_j), exp(hi_j)]

The intercept is the log-odds when every predictor is zero, not an
effect, so its odds ratio and bounds are reported as null.

Significance markers escalate: ``"*"`` when p < 0.05, overwritten by
``"**"`` when p < 0.01.

Overall model fit
-----------------
The deviance D = −2·log L.  Comparing the fitted model to the
intercept-only (null) model gives the likelihood-ratio statistic

    χ² = D_null − D_model,   df = df_null − df_model

which is asymptotically χ²(df) under H₀: all slopes are zero.

Three pseudo R² measures summarise the improvement, with n the number
of fitted values:

* Cox & Snell (1989):  R²_CS = 1 − exp((D_model − D_null) / n)
* Nagelkerke (1991):   R²_N  = R²_CS / (1 − exp(−D_null / n))
* Hosmer & Lemeshow:   R²_L  = (D_null − D_model) / D_null

R²_CS cannot reach 1 even for a perfect fit; Nagelkerke divides by its
maximum to rescale onto [0, 1].  R²_L is the proportional reduction in
deviance (numerically McFadden's R² for 0/1 outcomes).

References:
    Cox, D. R. & Snell, E. J. (1989). *Analysis of Binary Data*
    (2nd ed.). Chapman & Hall.

    Nagelkerke, N. J. D. (1991). A note on a general definition of the
    coefficient of determination. *Biometrika*, 78(3), 691–692.

    Hosmer, D. W. & Lemeshow, S. (2000). *Applied Logistic Regression*
    (2nd ed.). Wiley.
"""

from __future__ import annotations

import logging
import math
import numbers
import warnings
from typing import Any

import numpy as np
from scipy import stats

from ._config import get_significance_thresholds
from ._results import CoefficientRow, LogitCheckResult, OverallFitStats
from .errors import InvalidModel
from .model import FittedModel, as_fitted_model

logger = logging.getLogger(__name__)


def significance_marker(
    p_value: float,
    p_value_threshold_one: float = 0.05,
    p_value_threshold_two: float = 0.01,
) -> str:
    """Return ``""``, ``"*"`` or ``"**"`` for *p_value*.

    The stricter check runs last and overwrites the looser one, so a
    p-value below both thresholds is marked ``"**"``, never ``"***"``.
    NaN p-values are unmarked.
    """
    sig = ""
    if p_value < p_value_threshold_one:
        sig = "*"
    if p_value < p_value_threshold_two:
        sig = "**"
    return sig


def _require_number(model: Any, attr: str) -> float:
    """Read *attr* from *model* as a finite float or raise ``InvalidModel``."""
    try:
        value = getattr(model, attr)
    except AttributeError:
        raise InvalidModel(f"Fitted model has no '{attr}' field.") from None
    # bool is an Integral; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidModel(
            f"'{attr}' must be numeric, got {type(value).__name__}."
        )
    value = float(value)
    if not math.isfinite(value):
        raise InvalidModel(f"'{attr}' must be finite, got {value}.")
    return value


def _n_fitted(model: Any) -> int:
    try:
        fitted = model.fitted_values
    except AttributeError:
        raise InvalidModel("Fitted model has no 'fitted_values' field.") from None
    if fitted is None:
        raise InvalidModel("Fitted model has no fitted values (n = 0).")
    n = int(np.size(fitted))
    if n == 0:
        raise InvalidModel("Fitted model has no fitted values (n = 0).")
    return n


def compute_coefficient_table(
    model: FittedModel,
    p_value_threshold_one: float | None = None,
    p_value_threshold_two: float | None = None,
) -> list[CoefficientRow]:
    """Compute odds ratios, bounds and significance per predictor.

    Args:
        model: A fitted model (or anything :func:`as_fitted_model`
            accepts).
        p_value_threshold_one: Threshold for ``"*"``.  Defaults to the
            configured value (0.05).
        p_value_threshold_two: Threshold for ``"**"``.  Defaults to
            the configured value (0.01).

    Returns:
        One :class:`CoefficientRow` per coefficient, in model order.

    Raises:
        InvalidModel: If p-values or confidence bounds are not aligned
            with the coefficients, or the intercept index is out of
            range.
    """
    model = as_fitted_model(model)
    one, two = _resolve_thresholds(p_value_threshold_one, p_value_threshold_two)

    coefs = model.coefficients
    pvals = model.p_values
    ci = model.conf_int

    if len(pvals) != len(coefs) or len(ci) != len(coefs):
        raise InvalidModel(
            f"Expected {len(coefs)} p-values and confidence bounds, got "
            f"{len(pvals)} and {len(ci)}."
        )
    if not pvals.index.equals(coefs.index) or not ci.index.equals(coefs.index):
        raise InvalidModel(
            "p-values and confidence bounds must be indexed like the coefficients."
        )

    intercept_index = model.intercept_index
    if intercept_index is not None and not 0 <= intercept_index < len(coefs):
        raise InvalidModel(
            f"intercept_index {intercept_index} is out of range for "
            f"{len(coefs)} coefficients."
        )

    beta = coefs.to_numpy(dtype=float)
    p = pvals.to_numpy(dtype=float)
    lower = ci["lower"].to_numpy(dtype=float)
    upper = ci["upper"].to_numpy(dtype=float)

    # Vectorised exponentiation; the intercept entry is discarded below.
    with np.errstate(over="ignore"):
        odds_ratio = np.exp(beta)
        lower_or = np.exp(lower)
        upper_or = np.exp(upper)

    rows: list[CoefficientRow] = []
    for i, name in enumerate(coefs.index):
        is_intercept = i == intercept_index
        rows.append(
            CoefficientRow(
                predictor=str(name),
                beta=float(beta[i]),
                p_value=float(p[i]),
                sig=significance_marker(p[i], one, two),
                odds_ratio=None if is_intercept else float(odds_ratio[i]),
                lower_ci=None if is_intercept else float(lower_or[i]),
                upper_ci=None if is_intercept else float(upper_or[i]),
                is_intercept=is_intercept,
            )
        )
    return rows


def compute_overall_fit(model: FittedModel) -> OverallFitStats:
    """Compute the likelihood-ratio test and pseudo R² measures.

    Args:
        model: A fitted model (or anything :func:`as_fitted_model`
            accepts).

    Returns:
        An :class:`OverallFitStats` instance.  ``chisq_prob`` is NaN
        when ``diff_df <= 0``.  R's ``1 - pchisq(q, 0)`` gives 0 there
        instead, a value that does not come from a χ² test.

    Raises:
        InvalidModel: If a deviance or degrees-of-freedom field is
            missing or non-numeric, there are no fitted values, or the
            null deviance is zero.
    """
    model = as_fitted_model(model)

    null_deviance = _require_number(model, "null_deviance")
    residual_deviance = _require_number(model, "residual_deviance")
    null_df = _require_number(model, "null_df")
    residual_df = _require_number(model, "residual_df")
    n = _n_fitted(model)

    if null_deviance == 0.0:
        raise InvalidModel(
            "null_deviance is zero; pseudo R² measures are undefined "
            "(is the outcome constant?)."
        )

    # Positive when the model improves on the null model.
    diff_deviance = null_deviance - residual_deviance
    diff_df = null_df - residual_df

    if diff_deviance < 0:
        warnings.warn(
            f"Residual deviance ({residual_deviance:.4f}) exceeds null "
            f"deviance ({null_deviance:.4f}): the model fits worse than "
            f"the intercept-only model.",
            UserWarning,
            stacklevel=2,
        )

    # Upper tail of χ²(diff_df); sf() is 1 − cdf() without cancellation.
    if diff_df > 0:
        chisq_prob = float(stats.chi2.sf(diff_deviance, diff_df))
    else:
        chisq_prob = float("nan")

    cox_snell = 1.0 - math.exp((residual_deviance - null_deviance) / n)
    nagelkerke = cox_snell / (1.0 - math.exp(-(null_deviance / n)))
    hosmer = diff_deviance / null_deviance

    logger.debug(
        "Overall fit: chi2=%.4f df=%g p=%.4g R2_CS=%.4f R2_N=%.4f R2_L=%.4f n=%d",
        diff_deviance,
        diff_df,
        chisq_prob,
        cox_snell,
        nagelkerke,
        hosmer,
        n,
    )

    return OverallFitStats(
        diff_deviance=diff_deviance,
        diff_df=diff_df,
        chisq_prob=chisq_prob,
        cox_snell=cox_snell,
        nagelkerke=nagelkerke,
        hosmer=hosmer,
        n_observations=n,
    )


def check_logit(
    model: Any,
    *,
    p_value_threshold_one: float | None = None,
    p_value_threshold_two: float | None = None,
    confidence_level: float = 0.95,
) -> LogitCheckResult:
    """Check logistic regression coefficients and overall model fit.

    Args:
        model: A :class:`~logit_diagnostics.model.FittedModel`, or a
            statsmodels Binomial ``GLM`` / ``Logit`` result.
        p_value_threshold_one: Threshold for ``"*"`` (default from
            configuration, 0.05).
        p_value_threshold_two: Threshold for ``"**"`` (default from
            configuration, 0.01).
        confidence_level: Coverage of the odds-ratio confidence
            bounds requested from a statsmodels result.  Ignored when
            *model* already satisfies ``FittedModel``.

    Returns:
        A :class:`LogitCheckResult` holding the per-predictor table
        and the overall fit statistics.

    Raises:
        InvalidModel: If the model cannot be read or carries malformed
            fields.
    """
    fitted = as_fitted_model(model, confidence_level=confidence_level)
    one, two = _resolve_thresholds(p_value_threshold_one, p_value_threshold_two)

    rows = compute_coefficient_table(fitted, one, two)
    overall = compute_overall_fit(fitted)
    logger.debug("check_logit: %d coefficient rows", len(rows))

    return LogitCheckResult(
        coefficients=rows,
        overall=overall,
        p_value_threshold_one=one,
        p_value_threshold_two=two,
    )


def _resolve_thresholds(
    one: float | None,
    two: float | None,
) -> tuple[float, float]:
    """Fill unspecified thresholds from the active configuration."""
    default_one, default_two = get_significance_thresholds()
    one = default_one if one is None else float(one)
    two = default_two if two is None else float(two)
    if not two < one:
        raise ValueError(
            f"p_value_threshold_two ({two}) must be smaller than "
            f"p_value_threshold_one ({one})."
        )
    return one, two
