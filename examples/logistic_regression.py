"""
Logistic Regression Diagnostics (Binary Outcome)
Breast Cancer Wisconsin (Diagnostic) dataset (UCI ML Repository ID=17)

Demonstrates:
- ``check_logit`` on a statsmodels ``GLM`` (Binomial) and ``Logit`` fit
- Odds ratios, confidence bounds and significance markers
- Likelihood-ratio χ² test and Cox-Snell / Nagelkerke / Hosmer-Lemeshow R²
- ``check_residuals`` / ``residual_outlier_rate`` on studentized and
  deviance residuals
- ``ModelSummary`` for numbers that did not come from statsmodels
"""

import numpy as np
import statsmodels.api as sm
from ucimlrepo import fetch_ucirepo

from logit_diagnostics import (
    ModelSummary,
    check_logit,
    check_residuals,
    print_logit_table,
    print_residual_table,
    residual_outlier_rate,
)

# ============================================================================
# Load data
# ============================================================================

breast_cancer = fetch_ucirepo(id=17)
X_bc = breast_cancer.data.features
y_bc = breast_cancer.data.targets

# Convert target to binary: malignant (M) -> 1, benign (B) -> 0
y_bc = (y_bc == "M").astype(int)

selected_features = ["radius1", "texture1", "smoothness1"]
X_bc = sm.add_constant(X_bc[selected_features])

# ============================================================================
# GLM (Binomial) fit
# ============================================================================

glm_bc = sm.GLM(np.ravel(y_bc), X_bc, family=sm.families.Binomial()).fit()

result_glm = check_logit(glm_bc)
print_logit_table(result_glm, title="GLM Binomial: Breast Cancer Wisconsin")
print(result_glm.coefficient_frame())
print(result_glm.overall_frame())

assert result_glm.intercept is not None
assert result_glm.intercept.odds_ratio is None

# ============================================================================
# Logit fit gives the same overall statistics
# ============================================================================

logit_bc = sm.Logit(np.ravel(y_bc), X_bc).fit(disp=0)
result_logit = check_logit(logit_bc, confidence_level=0.99)
print_logit_table(result_logit, title="Logit (99% bounds): Breast Cancer Wisconsin")

assert np.isclose(result_logit.overall.diff_deviance, logit_bc.llr)
assert np.isclose(result_logit.overall.hosmer, logit_bc.prsquared)

# ============================================================================
# Residual outliers
# ============================================================================

print_residual_table(check_residuals(glm_bc), title="Studentized residuals")
print_residual_table(
    check_residuals(glm_bc, kind="deviance"), title="Deviance residuals"
)

resid_df = X_bc.assign(dev_res=np.asarray(glm_bc.resid_deviance))
print(f"5% outlier rate: {residual_outlier_rate(resid_df, '5%', column='dev_res'):.4f}")
print(f"1% outlier rate: {residual_outlier_rate(resid_df, '1%', column='dev_res'):.4f}")

# ============================================================================
# Hand-entered model summary
# ============================================================================

summary = ModelSummary(
    coefficients={"(Intercept)": -1.2, "age": 0.04, "smoker": 0.693147},
    p_values={"(Intercept)": 0.003, "age": 0.02, "smoker": 0.004},
    conf_int=[(-2.0, -0.4), (0.01, 0.07), (0.2, 1.2)],
    null_deviance=100.0,
    residual_deviance=80.0,
    null_df=99,
    residual_df=97,
    fitted_values=np.full(100, 0.3),
)
print_logit_table(check_logit(summary), title="Hand-entered summary")
