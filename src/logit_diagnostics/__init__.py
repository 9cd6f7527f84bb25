"""logit_diagnostics — Diagnostic statistics for fitted logistic regressions.

Computes per-predictor odds ratios with confidence bounds and
significance markers, overall model fit (likelihood-ratio χ² test,
Cox-Snell, Nagelkerke and Hosmer-Lemeshow pseudo R²), and the
proportion of residuals lying beyond ±1.96 or ±2.58 standard
deviations.  Model fitting is left to statsmodels (or any routine
exposed through the ``FittedModel`` protocol).

Public API:
    .. autosummary::
        check_logit
        compute_coefficient_table
        compute_overall_fit
        significance_marker
        residual_outlier_rate
        check_residuals
        OutlierLevel
        FittedModel
        ModelSummary
        StatsmodelsFittedModel
        as_fitted_model
        print_logit_table
        print_residual_table
        get_significance_thresholds
        set_significance_thresholds
        CoefficientRow
        OverallFitStats
        LogitCheckResult
        ResidualOutlierSummary
        InvalidModel
        InvalidInput
"""

from ._config import get_significance_thresholds, set_significance_thresholds
from ._results import (
    CoefficientRow,
    LogitCheckResult,
    OverallFitStats,
    ResidualOutlierSummary,
)
from .coefficients import (
    check_logit,
    compute_coefficient_table,
    compute_overall_fit,
    significance_marker,
)
from .display import print_logit_table, print_residual_table
from .errors import InvalidInput, InvalidModel
from .model import FittedModel, ModelSummary, StatsmodelsFittedModel, as_fitted_model
from .residuals import OutlierLevel, check_residuals, residual_outlier_rate

__all__ = [
    "CoefficientRow",
    "LogitCheckResult",
    "OverallFitStats",
    "ResidualOutlierSummary",
    "check_logit",
    "compute_coefficient_table",
    "compute_overall_fit",
    "significance_marker",
    "residual_outlier_rate",
    "check_residuals",
    "OutlierLevel",
    "FittedModel",
    "ModelSummary",
    "StatsmodelsFittedModel",
    "as_fitted_model",
    "print_logit_table",
    "print_residual_table",
    "get_significance_thresholds",
    "set_significance_thresholds",
    "InvalidInput",
    "InvalidModel",
]

__version__ = "0.1.0"
