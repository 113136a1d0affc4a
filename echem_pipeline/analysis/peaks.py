"""Local-maximum peak detection with a prominence threshold."""

import numpy as np
from scipy.signal import peak_prominences

from ..errors import FitError
from ..types import PeakResult

# Default threshold as a fraction of the y range
DEFAULT_PROMINENCE_FRACTION = 0.1


def local_maxima(y: np.ndarray) -> np.ndarray:
    """Indices i with y[i-1] < y[i] > y[i+1]. End points never qualify."""
    if y.size < 3:
        return np.array([], dtype=int)
    interior = (y[1:-1] > y[:-2]) & (y[1:-1] > y[2:])
    return np.nonzero(interior)[0] + 1


def find_peaks(x, y, min_prominence: float | None = None) -> list[PeakResult]:
    """Find local maxima whose prominence is at least min_prominence.

    Prominence is the smallest drop from the peak needed to reach a higher
    point or a series boundary on either side.

    Args:
        x: Positions, same length as y
        y: Values
        min_prominence: Threshold; defaults to 10% of the y range

    Returns:
        Peaks in series order
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if y.size == 0:
        raise FitError("No data points to search for peaks")
    if x.shape != y.shape or y.ndim != 1:
        raise FitError(f"x and y must have the same length (got {x.size} and {y.size})")
    if not np.all(np.isfinite(y)):
        raise FitError("Peak search input must contain only finite numbers")

    if min_prominence is None:
        min_prominence = DEFAULT_PROMINENCE_FRACTION * float(np.ptp(y))

    candidates = local_maxima(y)
    if candidates.size == 0:
        return []

    prominences = peak_prominences(y, candidates)[0]
    return [
        PeakResult(index=int(i), x=float(x[i]), y=float(y[i]), prominence=float(p))
        for i, p in zip(candidates, prominences)
        if p >= min_prominence
    ]
