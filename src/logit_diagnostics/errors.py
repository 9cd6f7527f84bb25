"""Exception types raised by the logit_diagnostics package.

Both exceptions subclass :class:`ValueError` so that callers who
already guard statistical routines with ``except ValueError`` keep
working unchanged.
"""

from __future__ import annotations


class InvalidModel(ValueError):
    """A fitted model is missing, or carries malformed, required fields.

    Raised when deviances or degrees of freedom are absent or
    non-numeric, when the model has no fitted values (``n = 0``), when
    the null deviance is zero, or when p-values and confidence bounds
    are not aligned with the coefficients.
    """


class InvalidInput(ValueError):
    """A residual sequence or level selector cannot be evaluated.

    Raised for empty, non-numeric or non-finite residuals and for an
    unrecognised outlier level.
    """
