"""Fitted-model protocol and adapters.

The ``FittedModel`` protocol is the only thing the diagnostics code
knows about a logistic regression fit.  It decouples the closed-form
statistics in :mod:`~logit_diagnostics.coefficients` from any specific
fitting library: coefficients, p-values, confidence bounds, deviances,
degrees of freedom and fitted values are all read, never computed.

Two implementations ship with the package:

* :class:`ModelSummary` — a frozen dataclass holding plain values,
  for callers whose fitting routine is not statsmodels (or who have
  the numbers from a published table).
* :class:`StatsmodelsFittedModel` — a thin read-only view over a
  statsmodels ``GLMResults`` (Binomial family) or discrete ``Logit``
  result.

:func:`as_fitted_model` resolves an arbitrary object to one of these,
in the same spirit as ``resolve_family`` resolving a family string.

Intercept detection
~~~~~~~~~~~~~~~~~~~
The intercept is identified by *position* (``intercept_index``), not
by matching a label such as ``"(Intercept)"``, ``"Intercept"`` or
``"const"``.  For statsmodels results the position comes from the
library's own constant detection (``model.data.const_idx``), which
works for both the array and the formula interfaces.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import numpy as np
import pandas as pd
import statsmodels.api as sm

from .errors import InvalidInput, InvalidModel

logger = logging.getLogger(__name__)

_RESIDUAL_KINDS = ("studentized", "deviance", "pearson")


# ------------------------------------------------------------------ #
# FittedModel protocol
# ------------------------------------------------------------------ #
#
# ``runtime_checkable`` lets as_fitted_model() pass through any object
# that already exposes the capability, without requiring inheritance.


@runtime_checkable
class FittedModel(Protocol):
    """Read-only capability supplied by a logistic regression fit.

    Attributes:
        coefficients: Estimated log-odds coefficients indexed by
            predictor name, in model order.
        p_values: Per-coefficient p-values, aligned with
            ``coefficients``.
        conf_int: Confidence bounds on the log-odds scale with columns
            ``"lower"`` and ``"upper"``, aligned with ``coefficients``.
        null_deviance: Deviance of the intercept-only model.
        residual_deviance: Deviance of the fitted model.
        null_df: Residual degrees of freedom of the null model.
        residual_df: Residual degrees of freedom of the fitted model.
        fitted_values: Fitted probabilities, one per observation.
        intercept_index: Position of the intercept within
            ``coefficients``, or ``None`` for a model without one.
    """

    @property
    def coefficients(self) -> pd.Series: ...

    @property
    def p_values(self) -> pd.Series: ...

    @property
    def conf_int(self) -> pd.DataFrame: ...

    @property
    def null_deviance(self) -> float: ...

    @property
    def residual_deviance(self) -> float: ...

    @property
    def null_df(self) -> float: ...

    @property
    def residual_df(self) -> float: ...

    @property
    def fitted_values(self) -> np.ndarray: ...

    @property
    def intercept_index(self) -> int | None: ...


# ------------------------------------------------------------------ #
# Plain-value implementation
# ------------------------------------------------------------------ #


# eq=False: pandas fields do not support truth-valued equality.
@dataclass(frozen=True, eq=False)
class ModelSummary:
    """A :class:`FittedModel` built from already-extracted values.

    ``coefficients`` and ``p_values`` may be given as mappings or
    Series; ``p_values`` may also be a plain sequence in coefficient
    order.  ``conf_int`` may be a DataFrame (a default RangeIndex is
    read positionally) or a sequence of ``(lower, upper)`` pairs.
    Everything is normalised to pandas in ``__post_init__`` so that
    downstream code sees one shape.

    Raises:
        InvalidModel: If a value is non-numeric, or positional p-values
            or bounds do not match the number of coefficients.

    Example::

        summary = ModelSummary(
            coefficients={"(Intercept)": -1.2, "age": 0.04},
            p_values={"(Intercept)": 0.003, "age": 0.02},
            conf_int=[(-2.0, -0.4), (0.01, 0.07)],
            null_deviance=100.0,
            residual_deviance=80.0,
            null_df=99,
            residual_df=98,
            fitted_values=probs,
        )
    """

    coefficients: pd.Series
    p_values: pd.Series
    conf_int: pd.DataFrame
    null_deviance: float
    residual_deviance: float
    null_df: float
    residual_df: float
    fitted_values: np.ndarray = field(repr=False)
    intercept_index: int | None = 0

    def __post_init__(self) -> None:
        coefs = _float_series(self.coefficients, "coefficients")
        pvals = _float_series(self.p_values, "p_values")
        if not isinstance(self.p_values, (Mapping, pd.Series)):
            pvals = _align_positional(pvals, coefs.index, "p_values")

        if isinstance(self.conf_int, pd.DataFrame):
            if self.conf_int.shape[1] != 2:
                raise InvalidModel(
                    f"conf_int must have two columns, got {self.conf_int.shape[1]}."
                )
            try:
                ci = self.conf_int.astype(float)
            except (TypeError, ValueError):
                raise InvalidModel("conf_int must contain numeric values.") from None
            ci.columns = ["lower", "upper"]
            if isinstance(ci.index, pd.RangeIndex):
                ci = _align_positional(ci, coefs.index, "conf_int")
        else:
            try:
                bounds = np.asarray(self.conf_int, dtype=float)
            except (TypeError, ValueError):
                raise InvalidModel("conf_int must contain numeric values.") from None
            if bounds.size % 2:
                raise InvalidModel(
                    f"conf_int must hold (lower, upper) pairs, got {bounds.size} values."
                )
            bounds = bounds.reshape(-1, 2)
            if len(bounds) != len(coefs):
                raise InvalidModel(
                    f"conf_int has {len(bounds)} rows, expected {len(coefs)} "
                    f"(one per coefficient)."
                )
            ci = pd.DataFrame(bounds, index=coefs.index, columns=["lower", "upper"])

        # Frozen dataclass: bypass __setattr__ for normalisation.
        object.__setattr__(self, "coefficients", coefs)
        object.__setattr__(self, "p_values", pvals)
        object.__setattr__(self, "conf_int", ci)
        object.__setattr__(
            self, "fitted_values", np.asarray(self.fitted_values, dtype=float)
        )


def _float_series(values: Any, name: str) -> pd.Series:
    try:
        return pd.Series(values, dtype=float)
    except (TypeError, ValueError):
        raise InvalidModel(f"{name} must contain numeric values.") from None


def _align_positional(obj, index: pd.Index, name: str):
    """Label positional *obj* with the coefficient *index*."""
    if len(obj) != len(index):
        raise InvalidModel(
            f"{name} has {len(obj)} entries, expected {len(index)} "
            f"(one per coefficient)."
        )
    obj = obj.copy()
    obj.index = index
    return obj


# ------------------------------------------------------------------ #
# statsmodels adapter
# ------------------------------------------------------------------ #


class StatsmodelsFittedModel:
    """Read-only :class:`FittedModel` view over a statsmodels result.

    Supports ``GLMResults`` fitted with ``sm.families.Binomial()`` and
    ``BinaryResults`` from ``sm.Logit``.  For ``Logit`` the deviances
    are derived from the log-likelihoods (``-2·llnull`` and
    ``-2·llf``), which equal the binomial GLM deviances for 0/1
    outcomes.

    Args:
        results: The fitted statsmodels result.
        confidence_level: Coverage of the confidence bounds requested
            from ``results.conf_int``.
    """

    def __init__(self, results: Any, confidence_level: float = 0.95) -> None:
        if not 0.0 < confidence_level < 1.0:
            raise ValueError(
                f"confidence_level must be in (0, 1), got {confidence_level}."
            )
        self._results = results
        self._alpha = 1.0 - confidence_level
        self._is_glm = hasattr(results, "null_deviance")
        if self._is_glm:
            family = getattr(results.model, "family", None)
            if not isinstance(family, sm.families.Binomial):
                raise InvalidModel(
                    f"GLM results must use a Binomial family, got "
                    f"{type(family).__name__}."
                )

    @property
    def results(self) -> Any:
        """The wrapped statsmodels result object."""
        return self._results

    @property
    def predictor_names(self) -> list[str]:
        return list(self._results.model.exog_names)

    def _as_series(self, values: Any) -> pd.Series:
        if isinstance(values, pd.Series):
            return values.astype(float)
        return pd.Series(
            np.asarray(values, dtype=float), index=self.predictor_names
        )

    @property
    def coefficients(self) -> pd.Series:
        return self._as_series(self._results.params)

    @property
    def p_values(self) -> pd.Series:
        return self._as_series(self._results.pvalues)

    @property
    def conf_int(self) -> pd.DataFrame:
        ci = self._results.conf_int(alpha=self._alpha)
        return pd.DataFrame(
            np.asarray(ci, dtype=float),
            index=self.predictor_names,
            columns=["lower", "upper"],
        )

    @property
    def null_deviance(self) -> float:
        if self._is_glm:
            return float(self._results.null_deviance)
        return -2.0 * float(self._results.llnull)

    @property
    def residual_deviance(self) -> float:
        if self._is_glm:
            return float(self._results.deviance)
        return -2.0 * float(self._results.llf)

    @property
    def null_df(self) -> float:
        # The null model is intercept-only: n - 1 with an intercept and
        # n without one.  GLM.df_model always subtracts one, so it is
        # not used here.
        return float(self._results.nobs) - float(self._results.model.k_constant)

    @property
    def residual_df(self) -> float:
        return float(self._results.df_resid)

    @property
    def fitted_values(self) -> np.ndarray:
        # Logit.fittedvalues is the linear predictor; predict() gives
        # probabilities for both result types.
        return np.asarray(self._results.predict(), dtype=float)

    @property
    def intercept_index(self) -> int | None:
        const_idx = getattr(self._results.model.data, "const_idx", None)
        return None if const_idx is None else int(const_idx)

    def residuals(self, kind: str = "studentized") -> np.ndarray:
        """Return per-observation residuals of the requested flavour.

        Args:
            kind: ``"studentized"`` (Pearson residuals scaled by
                ``sqrt(1 - h_i)``, from the statsmodels influence API),
                ``"deviance"`` or ``"pearson"``.

        Returns:
            Residual array of shape ``(n,)``.

        Raises:
            InvalidInput: If *kind* is not recognised.
        """
        if kind == "studentized":
            influence = self._results.get_influence()
            return np.asarray(influence.resid_studentized, dtype=float)
        if kind == "deviance":
            attr = "resid_deviance" if self._is_glm else "resid_dev"
            return np.asarray(getattr(self._results, attr), dtype=float)
        if kind == "pearson":
            return np.asarray(self._results.resid_pearson, dtype=float)
        raise InvalidInput(
            f"Unknown residual kind '{kind}'. Choose from: {list(_RESIDUAL_KINDS)}"
        )

    def __repr__(self) -> str:
        kind = "GLM" if self._is_glm else "Logit"
        return f"StatsmodelsFittedModel({kind}, predictors={self.predictor_names})"


def _is_statsmodels_logit(obj: Any) -> bool:
    """Return ``True`` for a statsmodels Binomial GLM or Logit result."""
    model = getattr(obj, "model", None)
    if model is None or not hasattr(obj, "params"):
        return False
    if isinstance(model, sm.Logit):
        return True
    return isinstance(model, sm.GLM) and hasattr(obj, "null_deviance")


def as_fitted_model(
    model: Any,
    *,
    confidence_level: float = 0.95,
) -> FittedModel:
    """Resolve *model* to a :class:`FittedModel`.

    Objects that already satisfy the protocol are returned as-is
    (pass-through), so pre-built :class:`ModelSummary` instances and
    user adapters skip resolution entirely.

    Args:
        model: A ``FittedModel`` or a statsmodels Binomial GLM / Logit
            result.
        confidence_level: Coverage of the confidence bounds requested
            from statsmodels.  Ignored for pass-through objects.

    Returns:
        A ``FittedModel`` ready for the diagnostics functions.

    Raises:
        InvalidModel: If *model* is neither.
    """
    if isinstance(model, FittedModel):
        return model
    if _is_statsmodels_logit(model):
        logger.debug("Wrapping %s in StatsmodelsFittedModel", type(model).__name__)
        return StatsmodelsFittedModel(model, confidence_level=confidence_level)
    raise InvalidModel(
        f"Cannot read a fitted logistic model from {type(model).__name__}; "
        f"expected a FittedModel or a statsmodels Binomial GLM/Logit result."
    )

