"""Significance-threshold configuration for the logit_diagnostics package.

Controls the two p-value cut-offs used to assign significance markers
(``"*"`` and ``"**"``) in the coefficient table.

Resolution order (first match wins):
    1. Programmatic override via :func:`set_significance_thresholds`.
    2. The ``LOGIT_DIAGNOSTICS_THRESHOLDS`` environment variable,
       formatted as ``"<one>,<two>"`` (e.g. ``"0.05,0.01"``).
    3. The defaults ``(0.05, 0.01)``.

Thresholds must satisfy ``0 < two < one < 1`` so that the marker
escalates monotonically: anything below *two* is also below *one*.

Examples:
    Tighten the thresholds from the shell::

        export LOGIT_DIAGNOSTICS_THRESHOLDS=0.01,0.001

    Tighten them programmatically::

        import logit_diagnostics
        logit_diagnostics.set_significance_thresholds(0.01, 0.001)

    Restore the default resolution order::

        logit_diagnostics.set_significance_thresholds()
"""

from __future__ import annotations

import os

DEFAULT_THRESHOLDS: tuple[float, float] = (0.05, 0.01)

ENV_VAR = "LOGIT_DIAGNOSTICS_THRESHOLDS"

# Sentinel indicating "no programmatic override has been set".
_threshold_override: tuple[float, float] | None = None


def _validate(one: float, two: float) -> tuple[float, float]:
    """Return ``(one, two)`` as floats or raise ``ValueError``."""
    one, two = float(one), float(two)
    if not (0.0 < two < one < 1.0):
        raise ValueError(
            f"Significance thresholds must satisfy 0 < two < one < 1, "
            f"got one={one}, two={two}."
        )
    return one, two


def _parse_env(raw: str) -> tuple[float, float]:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ValueError(
            f"{ENV_VAR} must hold two comma-separated values, got '{raw}'."
        )
    try:
        one, two = float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError(
            f"{ENV_VAR} must hold numeric values, got '{raw}'."
        ) from None
    return _validate(one, two)


def get_significance_thresholds() -> tuple[float, float]:
    """Return the active ``(threshold_one, threshold_two)`` pair.

    Resolution order:
        1. Value set by :func:`set_significance_thresholds`.
        2. ``LOGIT_DIAGNOSTICS_THRESHOLDS`` environment variable.
        3. ``(0.05, 0.01)``.

    Returns:
        The first (looser) and second (stricter) significance levels.

    Raises:
        ValueError: If the environment variable is malformed.
    """
    # 1. Programmatic override
    if _threshold_override is not None:
        return _threshold_override

    # 2. Environment variable
    env = os.environ.get(ENV_VAR, "").strip()
    if env:
        return _parse_env(env)

    # 3. Defaults
    return DEFAULT_THRESHOLDS


def set_significance_thresholds(
    one: float | None = None,
    two: float | None = None,
) -> None:
    """Override the significance thresholds.

    Args:
        one: First significance level, marked ``"*"``.
        two: Second, stricter significance level, marked ``"**"``.
            Calling with neither argument clears the override and
            restores the default resolution order.

    Raises:
        ValueError: If only one argument is given or the pair does not
            satisfy ``0 < two < one < 1``.
    """
    global _threshold_override
    if one is None and two is None:
        _threshold_override = None
        return
    if one is None or two is None:
        raise ValueError("Provide both thresholds, or neither to reset.")
    _threshold_override = _validate(one, two)
