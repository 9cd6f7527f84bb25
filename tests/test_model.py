"""Tests for the fitted-model protocol and statsmodels adapter."""

import numpy as np
import pandas as pd
import pytest
import statsmodels.api as sm
import statsmodels.formula.api as smf

from logit_diagnostics import InvalidInput, InvalidModel, compute_coefficient_table
from logit_diagnostics.model import (
    FittedModel,
    ModelSummary,
    StatsmodelsFittedModel,
    as_fitted_model,
)


# ── Fixtures ─────────────────────────────────────────────────────── #


def _make_binary_data(n=300, seed=42):
    rng = np.random.default_rng(seed)
    X = pd.DataFrame({
        "x1": rng.standard_normal(n),
        "x2": rng.standard_normal(n),
    })
    logits = 0.3 + 2.0 * X["x1"].values + 0.0 * X["x2"].values
    probs = 1.0 / (1.0 + np.exp(-logits))
    y = rng.binomial(1, probs).astype(float)
    return X, y


@pytest.fixture(scope="module")
def binary_data():
    return _make_binary_data()


@pytest.fixture(scope="module")
def glm_results(binary_data):
    X, y = binary_data
    return sm.GLM(y, sm.add_constant(X), family=sm.families.Binomial()).fit()


@pytest.fixture(scope="module")
def logit_results(binary_data):
    X, y = binary_data
    return sm.Logit(y, sm.add_constant(X)).fit(disp=0)


# ── ModelSummary ────────────────────────────────────────────────── #


class TestModelSummary:
    def _summary(self, **overrides):
        kwargs = dict(
            coefficients={"(Intercept)": -1.2, "age": 0.04},
            p_values={"(Intercept)": 0.003, "age": 0.02},
            conf_int=[(-2.0, -0.4), (0.01, 0.07)],
            null_deviance=100.0,
            residual_deviance=80.0,
            null_df=99,
            residual_df=98,
            fitted_values=np.full(100, 0.3),
        )
        kwargs.update(overrides)
        return ModelSummary(**kwargs)

    def test_satisfies_protocol(self):
        assert isinstance(self._summary(), FittedModel)

    def test_normalises_to_pandas(self):
        s = self._summary()
        assert isinstance(s.coefficients, pd.Series)
        assert isinstance(s.p_values, pd.Series)
        assert list(s.conf_int.columns) == ["lower", "upper"]
        assert list(s.conf_int.index) == ["(Intercept)", "age"]
        assert s.fitted_values.dtype == float

    def test_renames_dataframe_bounds(self):
        ci = pd.DataFrame([[-2.0, -0.4], [0.01, 0.07]], index=["(Intercept)", "age"])
        s = self._summary(conf_int=ci)
        assert list(s.conf_int.columns) == ["lower", "upper"]
        assert s.conf_int.loc["age", "upper"] == 0.07

    def test_rejects_three_column_bounds(self):
        ci = pd.DataFrame(np.zeros((2, 3)), index=["(Intercept)", "age"])
        with pytest.raises(InvalidModel, match="two columns"):
            self._summary(conf_int=ci)

    def test_short_bounds_sequence_raises(self):
        with pytest.raises(InvalidModel, match="conf_int has 1 rows"):
            self._summary(conf_int=[(-2.0, -0.4)])

    def test_odd_length_bounds_sequence_raises(self):
        with pytest.raises(InvalidModel, match="pairs"):
            self._summary(conf_int=[-2.0, -0.4, 0.01])

    def test_non_numeric_bounds_raise(self):
        with pytest.raises(InvalidModel, match="conf_int must contain numeric"):
            self._summary(conf_int=[("a", -0.4), (0.01, 0.07)])

    def test_string_p_value_raises(self):
        with pytest.raises(InvalidModel, match="p_values must contain numeric"):
            self._summary(p_values={"(Intercept)": "x", "age": 0.02})

    def test_string_coefficient_raises(self):
        with pytest.raises(InvalidModel, match="coefficients must contain numeric"):
            self._summary(coefficients={"(Intercept)": -1.2, "age": "big"})

    def test_positional_p_values_take_coefficient_labels(self):
        s = self._summary(p_values=[0.003, 0.02])
        assert list(s.p_values.index) == ["(Intercept)", "age"]
        assert s.p_values["age"] == 0.02

    def test_positional_p_values_wrong_length_raise(self):
        with pytest.raises(InvalidModel, match="p_values has 3 entries"):
            self._summary(p_values=[0.003, 0.02, 0.5])

    def test_range_indexed_bounds_take_coefficient_labels(self):
        ci = pd.DataFrame([[-2.0, -0.4], [0.01, 0.07]])
        s = self._summary(conf_int=ci)
        assert list(s.conf_int.index) == ["(Intercept)", "age"]
        assert s.conf_int.loc["age", "lower"] == 0.01

    def test_range_indexed_bounds_pass_coefficient_table(self):
        s = self._summary(
            p_values=[0.003, 0.02],
            conf_int=pd.DataFrame([[-2.0, -0.4], [0.01, 0.07]]),
        )
        rows = compute_coefficient_table(s)
        assert rows[1].lower_ci == pytest.approx(np.exp(0.01))

    def test_default_intercept_is_first(self):
        assert self._summary().intercept_index == 0

    def test_is_frozen(self):
        s = self._summary()
        with pytest.raises(AttributeError):
            s.null_deviance = 1.0


# ── statsmodels adapter ─────────────────────────────────────────── #


class TestStatsmodelsAdapter:
    def test_glm_resolves_to_adapter(self, glm_results):
        fitted = as_fitted_model(glm_results)
        assert isinstance(fitted, StatsmodelsFittedModel)
        assert isinstance(fitted, FittedModel)
        assert fitted.results is glm_results

    def test_logit_resolves_to_adapter(self, logit_results):
        assert isinstance(as_fitted_model(logit_results), StatsmodelsFittedModel)

    def test_predictor_names_and_intercept(self, glm_results):
        fitted = as_fitted_model(glm_results)
        assert list(fitted.coefficients.index) == ["const", "x1", "x2"]
        assert fitted.intercept_index == 0

    def test_degrees_of_freedom(self, glm_results, binary_data):
        n = len(binary_data[1])
        fitted = as_fitted_model(glm_results)
        assert fitted.null_df == n - 1
        assert fitted.residual_df == n - 3

    def test_fitted_values_are_probabilities(self, logit_results, binary_data):
        fitted = as_fitted_model(logit_results)
        assert fitted.fitted_values.shape == (len(binary_data[1]),)
        assert np.all((fitted.fitted_values > 0) & (fitted.fitted_values < 1))

    def test_glm_and_logit_agree(self, glm_results, logit_results):
        a = as_fitted_model(glm_results)
        b = as_fitted_model(logit_results)
        np.testing.assert_allclose(a.coefficients, b.coefficients, rtol=1e-4)
        np.testing.assert_allclose(a.null_deviance, b.null_deviance, rtol=1e-6)
        np.testing.assert_allclose(
            a.residual_deviance, b.residual_deviance, rtol=1e-6
        )
        assert a.null_df == b.null_df
        assert a.residual_df == b.residual_df

    def test_conf_int_matches_statsmodels(self, glm_results):
        fitted = as_fitted_model(glm_results)
        np.testing.assert_allclose(
            fitted.conf_int.to_numpy(), np.asarray(glm_results.conf_int())
        )

    def test_confidence_level_narrows_bounds(self, glm_results):
        wide = as_fitted_model(glm_results, confidence_level=0.99).conf_int
        narrow = as_fitted_model(glm_results, confidence_level=0.90).conf_int
        assert np.all(narrow["lower"] > wide["lower"])
        assert np.all(narrow["upper"] < wide["upper"])

    def test_invalid_confidence_level(self, glm_results):
        with pytest.raises(ValueError, match="confidence_level"):
            StatsmodelsFittedModel(glm_results, confidence_level=1.5)

    def test_constant_not_first(self, binary_data):
        X, y = binary_data
        res = sm.Logit(y, sm.add_constant(X, prepend=False)).fit(disp=0)
        fitted = as_fitted_model(res)
        assert list(fitted.coefficients.index) == ["x1", "x2", "const"]
        assert fitted.intercept_index == 2

    def test_no_constant(self, binary_data):
        X, y = binary_data
        res = sm.GLM(y, X, family=sm.families.Binomial()).fit()
        fitted = as_fitted_model(res)
        assert fitted.intercept_index is None
        assert fitted.null_df == len(y)

    def test_formula_interface(self, binary_data):
        X, y = binary_data
        data = X.assign(y=y)
        res = smf.glm("y ~ x1 + x2", data, family=sm.families.Binomial()).fit()
        fitted = as_fitted_model(res)
        assert list(fitted.coefficients.index) == ["Intercept", "x1", "x2"]
        assert fitted.intercept_index == 0

    def test_numpy_design_matrix(self, binary_data):
        X, y = binary_data
        res = sm.Logit(y, sm.add_constant(X.to_numpy())).fit(disp=0)
        fitted = as_fitted_model(res)
        assert list(fitted.coefficients.index) == ["const", "x1", "x2"]
        assert list(fitted.p_values.index) == ["const", "x1", "x2"]

    def test_non_binomial_glm_rejected(self, binary_data):
        X, y = binary_data
        res = sm.GLM(y, sm.add_constant(X), family=sm.families.Poisson()).fit()
        with pytest.raises(InvalidModel, match="Binomial"):
            as_fitted_model(res)

    def test_ols_rejected(self, binary_data):
        X, y = binary_data
        res = sm.OLS(y, sm.add_constant(X)).fit()
        with pytest.raises(InvalidModel, match="Cannot read"):
            as_fitted_model(res)


class TestAdapterResiduals:
    def test_deviance_residuals_match_glm(self, glm_results):
        fitted = as_fitted_model(glm_results)
        np.testing.assert_allclose(
            fitted.residuals("deviance"), glm_results.resid_deviance
        )

    def test_deviance_residuals_match_logit(self, logit_results):
        fitted = as_fitted_model(logit_results)
        np.testing.assert_allclose(
            fitted.residuals("deviance"), logit_results.resid_dev
        )

    def test_pearson_residuals(self, glm_results, binary_data):
        fitted = as_fitted_model(glm_results)
        assert fitted.residuals("pearson").shape == (len(binary_data[1]),)

    def test_studentized_residuals(self, glm_results, binary_data):
        fitted = as_fitted_model(glm_results)
        stud = fitted.residuals("studentized")
        assert stud.shape == (len(binary_data[1]),)
        assert np.all(np.isfinite(stud))

    def test_unknown_kind(self, glm_results):
        with pytest.raises(InvalidInput, match="Unknown residual kind"):
            as_fitted_model(glm_results).residuals("raw")


class TestAsFittedModel:
    def test_passthrough(self):
        s = ModelSummary(
            coefficients={"x": 0.1},
            p_values={"x": 0.5},
            conf_int=[(0.0, 0.2)],
            null_deviance=10.0,
            residual_deviance=9.0,
            null_df=9,
            residual_df=8,
            fitted_values=np.full(10, 0.5),
            intercept_index=None,
        )
        assert as_fitted_model(s) is s

    @pytest.mark.parametrize("obj", [None, 3.0, "model", [1, 2, 3]])
    def test_rejects_other_objects(self, obj):
        with pytest.raises(InvalidModel, match="Cannot read"):
            as_fitted_model(obj)
