"""Formatted ASCII table display for logistic regression diagnostics.

These tables mirror the statsmodels summary style: the overall
model-fit statistics sit in the top panel and the per-predictor odds
ratios with their confidence bounds and significance markers in the
bottom panel.  Output is 80 columns wide.
"""

from __future__ import annotations

import math
import textwrap
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._results import LogitCheckResult, ResidualOutlierSummary


def _truncate(name: str, max_len: int) -> str:
    """Truncate *name* to *max_len*, appending ``'...'`` if needed."""
    if len(name) <= max_len:
        return name
    return name[: max_len - 3] + "..."


def _fmt_num(val: float | None, digits: int = 4) -> str:
    """Format a number for display; ``None`` and NaN become ``'N/A'``."""
    if val is None or (isinstance(val, float) and math.isnan(val)):
        return "N/A"
    return f"{val:.{digits}f}"


def _fmt_p(p: float) -> str:
    """Format a p-value: scientific notation if tiny, 4 dp otherwise."""
    if math.isnan(p):
        return "N/A"
    if p < 0.0001:
        return f"{p:.2e}"
    return f"{p:.4f}"


def _print_title(title: str) -> None:
    print("=" * 80)
    for line in textwrap.wrap(title, width=78):
        print(f"{line:^80}")
    print("=" * 80)


def print_logit_table(
    result: LogitCheckResult,
    *,
    title: str = "Logistic Regression Diagnostics",
) -> None:
    """Print coefficient and overall-fit diagnostics as an ASCII table.

    Args:
        result: Result returned by :func:`~logit_diagnostics.check_logit`.
        title: Title for the output table.
    """
    over = result.overall
    _print_title(title)

    col1 = 40
    col2 = 38
    header = [
        ("No. Observations:", str(over.n_observations), "Cox-Snell R2:", _fmt_num(over.cox_snell)),
        ("Model Chi2:", _fmt_num(over.diff_deviance), "Nagelkerke R2:", _fmt_num(over.nagelkerke)),
        ("Df (Chi2):", f"{over.diff_df:g}", "Hosmer-Lemeshow R2:", _fmt_num(over.hosmer)),
        ("Prob > Chi2:", _fmt_p(over.chisq_prob), "", ""),
    ]
    for ll, lv, rl, rv in header:
        left = f"{ll:<20}{lv:<{col1 - 20}}"
        right = f"{rl:>{col2 - 11}} {rv:>10}" if rl else ""
        print(f"{left}{right}")

    print("-" * 80)

    # ── Table geometry (W = 80 chars) ─────────────────────────── #
    #
    #   Predictor (fc=22, left) | Beta (10) | P>|z| (10) | sig (4)
    #   | Lower (11) | OR (11) | Upper (11)
    #   Total: 22 + 10 + 10 + 4 + 11 + 11 + 11 = 79
    fc = 22
    print(
        f"{'Predictor':<{fc}}{'Beta':>10}{'P>|z|':>10}{'':<4}"
        f"{'[OR lower':>11}{'Odds Ratio':>11}{'OR upper]':>11}"
    )
    print("-" * 80)

    for row in result.coefficients:
        name = _truncate(row.predictor, fc)
        print(
            f"{name:<{fc}}{row.beta:>10.4f}{_fmt_p(row.p_value):>10}{row.sig:<4}"
            f"{_fmt_num(row.lower_ci):>11}{_fmt_num(row.odds_ratio):>11}"
            f"{_fmt_num(row.upper_ci):>11}"
        )

    print("=" * 80)

    notes: list[str] = [
        f"(**) p < {result.p_value_threshold_two:g}, "
        f"(*) p < {result.p_value_threshold_one:g}.",
    ]
    if result.intercept is not None:
        notes.append("Odds ratios are not reported for the intercept.")
    if over.diff_deviance < 0:
        notes.append(
            "Residual deviance exceeds null deviance: the model fits "
            "worse than the intercept-only model."
        )

    print("Notes:")
    for note in notes:
        print(f"  {note}")


def print_residual_table(
    summary: ResidualOutlierSummary,
    *,
    title: str = "Residual Outlier Check",
) -> None:
    """Print the two-level residual outlier check as an ASCII table.

    Args:
        summary: Result returned by
            :func:`~logit_diagnostics.check_residuals`.
        title: Title for the output table.
    """
    _print_title(title)
    print(
        f"{'No. Observations:':<20}{summary.n_observations:<20}"
        f"{'Mean:':>27} {_fmt_num(summary.mean):>10}"
    )
    print(f"{'':<40}{'Std. Dev.:':>27} {_fmt_num(summary.sd):>10}")
    print("-" * 80)
    print(f"{'Level':<16}{'Bound':>16}{'Observed':>16}{'Expected':>16}{'Flag':>16}")
    print("-" * 80)
    rows = [
        ("5%", "+/- 1.96 SD", summary.rate_5, 0.05, summary.exceeds_5),
        ("1%", "+/- 2.58 SD", summary.rate_1, 0.01, summary.exceeds_1),
    ]
    for level, bound, rate, expected, exceeds in rows:
        flag = "HIGH" if exceeds else ""
        print(f"{level:<16}{bound:>16}{rate:>16.4f}{expected:>16.2f}{flag:>16}")
    print("=" * 80)
