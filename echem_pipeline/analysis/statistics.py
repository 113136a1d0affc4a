"""Descriptive statistics for one numeric array."""

import numpy as np

from ..errors import FitError
from ..types import StatisticsResult


def _median_sorted(values: np.ndarray) -> float:
    """Midpoint of a sorted array; mean of the two middles for even counts."""
    n = values.size
    mid = n // 2
    if n % 2:
        return float(values[mid])
    return float((values[mid - 1] + values[mid]) / 2)


def calculate_statistics(values) -> StatisticsResult:
    """Mean, median, population standard deviation, range and quartiles.

    Quartiles are the medians of the lower and upper halves of the sorted
    data; for odd counts the middle element belongs to neither half. A single
    value is its own quartiles.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise FitError("Cannot compute statistics of an empty array")
    if not np.all(np.isfinite(arr)):
        raise FitError("Statistics input must contain only finite numbers")

    ordered = np.sort(arr)
    n = ordered.size
    if n == 1:
        q1 = q3 = float(ordered[0])
    else:
        q1 = _median_sorted(ordered[: n // 2])
        q3 = _median_sorted(ordered[(n + 1) // 2:])

    return StatisticsResult(
        mean=float(arr.mean()),
        median=_median_sorted(ordered),
        std_dev=float(arr.std(ddof=0)),
        min=float(ordered[0]),
        max=float(ordered[-1]),
        q1=q1,
        q3=q3,
        count=int(n),
    )
