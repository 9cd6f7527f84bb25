"""Shared type aliases for the logit_diagnostics package."""

from collections.abc import Sequence

import numpy as np
import pandas as pd

# Residual inputs accepted by the public API.
ArrayLike = np.ndarray | pd.Series | pd.DataFrame | Sequence[float]
