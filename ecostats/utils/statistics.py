"""
Numerical helper functions shared by the analysis services.

Provides utilities for:
- Ordinary least-squares line fitting with R²
- Sample and weighted standard errors, confidence bounds
"""
from dataclasses import dataclass
from typing import Optional, Sequence
import numpy as np
from scipy import stats
import logging

from ecostats.domain.errors import InsufficientDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinearFit:
    """Result of a least-squares fit of y = intercept + slope * x."""
    slope: float
    intercept: float
    r_squared: float
    n: int


def least_squares_line(
    x: Sequence[float],
    y: Sequence[float],
) -> LinearFit:
    """
    Fit a straight line by ordinary least squares.

    Args:
        x: Predictor values
        y: Response values (same length as x)

    Returns:
        LinearFit with slope, intercept and coefficient of determination

    Raises:
        InsufficientDataError: If fewer than 2 points or all x values are equal
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)

    if x_arr.shape != y_arr.shape:
        raise ValueError(f"x and y must have the same length ({x_arr.size} != {y_arr.size})")

    n = int(x_arr.size)
    if n < 2:
        raise InsufficientDataError(f"A line fit needs at least 2 points, got {n}")

    x_mean = x_arr.mean()
    y_mean = y_arr.mean()
    dx = x_arr - x_mean
    dy = y_arr - y_mean

    ss_xx = float(np.sum(dx * dx))
    if ss_xx == 0.0:
        raise InsufficientDataError("A line fit needs at least 2 distinct x values")

    slope = float(np.sum(dx * dy)) / ss_xx
    intercept = float(y_mean - slope * x_mean)

    residuals = y_arr - (intercept + slope * x_arr)
    ss_res = float(np.sum(residuals * residuals))
    ss_tot = float(np.sum(dy * dy))

    if ss_tot == 0.0:
        # Constant response: a flat line reproduces it exactly
        r_squared = 1.0 if np.isclose(ss_res, 0.0) else 0.0
    else:
        r_squared = 1.0 - ss_res / ss_tot

    r_squared = min(1.0, max(0.0, r_squared))

    logger.debug(f"Least squares: n={n}, slope={slope:.4f}, intercept={intercept:.4f}, "
                 f"r²={r_squared:.4f}")

    return LinearFit(slope=slope, intercept=intercept, r_squared=r_squared, n=n)


def weighted_mean(
    values: Sequence[float],
    weights: Optional[Sequence[float]] = None,
) -> float:
    """Arithmetic mean, or weighted mean when weights are given."""
    arr = np.asarray(values, dtype=float)
    if weights is None:
        return float(arr.mean())
    w = np.asarray(weights, dtype=float)
    return float(np.average(arr, weights=w / w.max()))


def standard_error(values: Sequence[float]) -> float:
    """
    Standard error of the mean using the Bessel-corrected sample deviation.

    Returns 0.0 for a single value.
    """
    arr = np.asarray(values, dtype=float)
    n = arr.size
    if n < 2:
        return 0.0
    return float(np.std(arr, ddof=1) / np.sqrt(n))


def weighted_standard_error(
    values: Sequence[float],
    weights: Sequence[float],
) -> tuple[float, float]:
    """
    Standard error of a weighted mean and the Kish effective sample size.

    The weighted variance is bias-corrected with n_eff = (Σw)² / Σw², so equal
    weights reproduce standard_error(values) with n_eff = n.

    Returns:
        (standard error, effective sample size); the error is 0.0 when
        n_eff does not exceed 1
    """
    arr = np.asarray(values, dtype=float)
    w = np.asarray(weights, dtype=float)
    # Scale to max 1 so the sums of squares cannot overflow
    w = w / w.max()

    w_sum = float(w.sum())
    n_eff = w_sum * w_sum / float(np.sum(w * w))
    if n_eff <= 1.0 or arr.size < 2:
        return 0.0, n_eff

    mean = float(np.sum(w * arr)) / w_sum
    variance = float(np.sum(w * (arr - mean) ** 2)) / w_sum * n_eff / (n_eff - 1.0)
    return float(np.sqrt(variance / n_eff)), n_eff


def confidence_bounds(
    mean: float,
    std_error: float,
    sample_count: float,
    confidence_level: float,
    lower_limit: float = 0.0,
    upper_limit: float = 1.0,
) -> tuple[float, float]:
    """
    Two-sided Student t confidence bounds around a mean, clipped to a range.

    Args:
        mean: Sample mean
        std_error: Standard error of the mean
        sample_count: Number of samples behind the mean, or the effective
            number for a weighted mean (degrees of freedom = count - 1)
        confidence_level: e.g. 0.95
        lower_limit: Smallest admissible value
        upper_limit: Largest admissible value

    Returns:
        (lower, upper) bounds
    """
    if sample_count <= 1 or std_error == 0.0:
        bound = min(upper_limit, max(lower_limit, mean))
        return bound, bound

    t_value = float(stats.t.ppf((1.0 + confidence_level) / 2.0, df=sample_count - 1))
    margin = t_value * std_error
    if not np.isfinite(margin):
        # Effective count barely above 1: the interval spans the whole range
        return lower_limit, upper_limit

    lower = min(upper_limit, max(lower_limit, mean - margin))
    upper = min(upper_limit, max(lower_limit, mean + margin))
    return lower, upper
