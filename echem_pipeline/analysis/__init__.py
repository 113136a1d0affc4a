"""Curve fitting, statistics, peak detection and signal helpers."""

from .fitting import (
    FIT_FUNCTIONS,
    MAX_POLYNOMIAL_ORDER,
    fit_curve,
    fit_exponential,
    fit_linear,
    fit_logarithmic,
    fit_polynomial,
    fit_power,
    r_squared,
)
from .peaks import DEFAULT_PROMINENCE_FRACTION, find_peaks
from .signal import calculate_derivative, correct_baseline, smooth_data
from .statistics import calculate_statistics


__all__ = [
    # Fitting
    "FIT_FUNCTIONS",
    "MAX_POLYNOMIAL_ORDER",
    "fit_curve",
    "fit_linear",
    "fit_polynomial",
    "fit_exponential",
    "fit_logarithmic",
    "fit_power",
    "r_squared",
    # Statistics
    "calculate_statistics",
    # Peaks
    "DEFAULT_PROMINENCE_FRACTION",
    "find_peaks",
    # Signal
    "smooth_data",
    "calculate_derivative",
    "correct_baseline",
]
