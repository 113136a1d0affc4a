"""Smoothing, differentiation and baseline correction of a y series."""

import numpy as np
from scipy.signal import savgol_filter

from ..errors import FitError

SMOOTHING_METHODS = ("moving_average", "savgol")
BASELINE_METHODS = ("linear", "polynomial")


def _finite_array(values, name: str = "y") -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1 or arr.size == 0:
        raise FitError(f"{name} must be a non-empty 1-D array")
    if not np.all(np.isfinite(arr)):
        raise FitError(f"{name} must contain only finite numbers")
    return arr


def smooth_data(y, window: int = 5, method: str = "moving_average", polyorder: int = 2) -> np.ndarray:
    """Smooth y, returning an array of the same length.

    moving_average: centered mean over `window` points, edges padded with the
    end values. savgol: Savitzky-Golay filter (window must be odd and larger
    than polyorder).
    """
    y = _finite_array(y)
    if window < 1 or window > y.size:
        raise FitError(f"Smoothing window must be between 1 and {y.size} (got {window})")

    if method == "moving_average":
        left = window // 2
        padded = np.pad(y, (left, window - 1 - left), mode="edge")
        return np.convolve(padded, np.ones(window) / window, mode="valid")
    if method == "savgol":
        if window % 2 == 0 or window <= polyorder:
            raise FitError(
                f"Savitzky-Golay window must be odd and greater than polyorder {polyorder} (got {window})"
            )
        return savgol_filter(y, window, polyorder)
    raise FitError(f"Unknown smoothing method: {method} (expected one of {', '.join(SMOOTHING_METHODS)})")


def calculate_derivative(x, y) -> np.ndarray:
    """dy/dx by central differences (one-sided at the ends)."""
    x = _finite_array(x, "x")
    y = _finite_array(y)
    if x.size != y.size:
        raise FitError(f"x and y must have the same length (got {x.size} and {y.size})")
    if y.size < 2:
        raise FitError("Need at least 2 points to differentiate")
    if np.any(np.diff(x) == 0):
        raise FitError("x must not contain repeated consecutive values")
    return np.gradient(y, x)


def correct_baseline(x, y, method: str = "linear", order: int = 1) -> np.ndarray:
    """Subtract a baseline from y.

    linear: straight line through the first and last points.
    polynomial: least-squares polynomial of `order` over all points.
    """
    x = _finite_array(x, "x")
    y = _finite_array(y)
    if x.size != y.size:
        raise FitError(f"x and y must have the same length (got {x.size} and {y.size})")

    if method == "linear":
        if x[-1] == x[0]:
            baseline = np.full_like(y, y[0])
        else:
            slope = (y[-1] - y[0]) / (x[-1] - x[0])
            baseline = y[0] + slope * (x - x[0])
    elif method == "polynomial":
        if order < 0 or x.size <= order:
            raise FitError(f"Need more than {order} points for a polynomial baseline of order {order}")
        baseline = np.polyval(np.polyfit(x, y, order), x)
    else:
        raise FitError(f"Unknown baseline method: {method} (expected one of {', '.join(BASELINE_METHODS)})")

    return y - baseline
