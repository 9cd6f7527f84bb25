"""Tests for the typed result objects."""

import json
import math

import numpy as np
import pandas as pd
import pytest

from logit_diagnostics import ModelSummary, check_logit, check_residuals
from logit_diagnostics._results import (
    COEFFICIENT_COLUMNS,
    CoefficientRow,
    OverallFitStats,
    _numpy_to_python,
)


@pytest.fixture
def result():
    summary = ModelSummary(
        coefficients={"(Intercept)": -0.5, "x1": 0.693147, "x2": -0.2},
        p_values={"(Intercept)": 0.3, "x1": 0.004, "x2": 0.03},
        conf_int=[(-1.0, 0.0), (0.2, 1.2), (-0.4, 0.0)],
        null_deviance=100.0,
        residual_deviance=80.0,
        null_df=5,
        residual_df=3,
        fitted_values=np.full(6, 0.5),
    )
    return check_logit(summary)


class TestNumpyToPython:
    def test_scalars(self):
        assert type(_numpy_to_python(np.float64(1.5))) is float
        assert type(_numpy_to_python(np.int64(3))) is int
        assert type(_numpy_to_python(np.bool_(True))) is bool

    def test_nested(self):
        out = _numpy_to_python({"a": [np.float64(1.0)], "b": np.arange(2)})
        assert out == {"a": [1.0], "b": [0, 1]}


class TestDictAccess:
    def test_bracket_and_get(self, result):
        assert result["overall"] is result.overall
        assert result.overall["hosmer"] == pytest.approx(0.2)
        assert result.get("missing", "d") == "d"

    def test_bracket_miss_raises_key_error(self, result):
        with pytest.raises(KeyError):
            result["missing"]

    def test_contains(self, result):
        assert "coefficients" in result
        assert "intercept" not in result  # property, not a field
        assert 3 not in result

    def test_frozen(self, result):
        with pytest.raises(AttributeError):
            result.overall.hosmer = 0.5


class TestSerialisation:
    def test_to_dict_is_json_serialisable(self, result):
        payload = json.dumps(result.to_dict())
        data = json.loads(payload)
        assert data["overall"]["diff_deviance"] == 20.0
        assert data["coefficients"][0]["odds_ratio"] is None
        assert data["coefficients"][1]["sig"] == "**"

    def test_row_to_dict(self):
        row = CoefficientRow("x", 0.0, 0.5, "", 1.0, 0.5, 2.0)
        assert row.to_dict() == {
            "predictor": "x",
            "beta": 0.0,
            "p_value": 0.5,
            "sig": "",
            "odds_ratio": 1.0,
            "lower_ci": 0.5,
            "upper_ci": 2.0,
            "is_intercept": False,
        }


class TestFrames:
    def test_coefficient_frame_columns_and_order(self, result):
        frame = result.coefficient_frame()
        assert list(frame.columns) == list(COEFFICIENT_COLUMNS)
        assert list(frame.index) == ["(Intercept)", "x1", "x2"]

    def test_intercept_cells_are_nan(self, result):
        frame = result.coefficient_frame()
        assert frame.loc["(Intercept)", ["lower_ci", "odds_ratio", "upper_ci"]].isna().all()
        assert frame["odds_ratio"].dtype == float

    def test_odds_ratio_column(self, result):
        frame = result.coefficient_frame()
        assert frame.loc["x1", "odds_ratio"] == pytest.approx(2.0, rel=1e-5)

    def test_overall_frame(self, result):
        frame = result.overall_frame()
        assert frame.shape == (1, 7)
        assert frame.loc[0, "diff_df"] == 2.0

    def test_overall_stats_to_frame(self):
        stats = OverallFitStats(20.0, 2.0, math.exp(-10), 0.9, 0.95, 0.2, 6)
        assert list(stats.to_frame().columns)[:3] == [
            "diff_deviance",
            "diff_df",
            "chisq_prob",
        ]

    def test_residual_summary_frame(self):
        frame = check_residuals(np.array([0.0] * 8 + [10.0, -10.0])).to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert frame["level"].tolist() == ["5%", "1%"]
        assert frame["exceeds"].tolist() == [True, False]
