"""
Statistical primitives: correlation, OLS slope, z-score.

All three are pure and deterministic. Degenerate input (fewer than two
points, or a series with no variation) yields 0 / zeros rather than NaN,
which downstream reads as "no detectable effect".
"""
from typing import Sequence, Union

import numpy as np
from scipy import stats

from nof1_engine.config import VARIANCE_EPS

ArrayLike = Union[Sequence[float], np.ndarray]


def _as_array(values: ArrayLike) -> np.ndarray:
    return np.asarray(values, dtype=float).ravel()


def _paired(x: ArrayLike, y: ArrayLike):
    x = _as_array(x)
    y = _as_array(y)
    if len(x) != len(y):
        raise ValueError(f"Paired series differ in length: {len(x)} vs {len(y)}")
    return x, y


def is_constant(values: ArrayLike) -> bool:
    """True if the population std is zero up to floating-point residue."""
    arr = _as_array(values)
    if len(arr) == 0:
        return True
    mean = float(np.mean(arr))
    std = float(np.std(arr))
    return std <= VARIANCE_EPS * max(1.0, abs(mean))


def population_std(values: ArrayLike) -> float:
    """Standard deviation with divisor n; 0 for constant or empty series."""
    arr = _as_array(values)
    if is_constant(arr):
        return 0.0
    return float(np.std(arr))


def pearson(x: ArrayLike, y: ArrayLike) -> float:
    """Pearson correlation of paired series. 0 if n < 2 or either side is constant."""
    x, y = _paired(x, y)
    if len(x) < 2 or is_constant(x) or is_constant(y):
        return 0.0

    dx = x - x.mean()
    dy = y - y.mean()
    denominator = np.sqrt(np.sum(dx * dx) * np.sum(dy * dy))
    if denominator == 0:
        return 0.0
    r = float(np.sum(dx * dy) / denominator)
    return float(np.clip(r, -1.0, 1.0))


def regression_slope(x: ArrayLike, y: ArrayLike) -> float:
    """OLS slope of y on x (cov / var(x)). 0 if n < 2 or x is constant."""
    x, y = _paired(x, y)
    if len(x) < 2 or is_constant(x):
        return 0.0

    dx = x - x.mean()
    den = float(np.sum(dx * dx))
    if den == 0:
        return 0.0
    return float(np.sum(dx * (y - y.mean())) / den)


def standardize(values: ArrayLike) -> np.ndarray:
    """
    Z-score with population mean and std (divisor n).
    A constant series maps to all zeros of the same length.
    """
    arr = _as_array(values)
    if is_constant(arr):
        return np.zeros(len(arr), dtype=float)
    return stats.zscore(arr, ddof=0)
