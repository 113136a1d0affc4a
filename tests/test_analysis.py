import math

import numpy as np
import pytest

from echem_pipeline import (
    FitError,
    calculate_derivative,
    calculate_statistics,
    correct_baseline,
    find_peaks,
    fit_curve,
    fit_exponential,
    fit_linear,
    fit_logarithmic,
    fit_polynomial,
    fit_power,
    smooth_data,
)


# Fitting

def test_fit_linear_exact():
    result = fit_linear([1, 2, 3], [2, 4, 6])

    assert result.type == "linear"
    assert result.coefficients == pytest.approx([2.0, 0.0])
    assert result.r2 == pytest.approx(1.0)
    assert result.equation == "y = 2x + 0"


def test_fit_linear_negative_intercept():
    result = fit_linear([0, 1, 2, 3], [-1, 1, 3, 5])
    assert result.coefficients == pytest.approx([2.0, -1.0])
    assert result.equation == "y = 2x - 1"


def test_fit_linear_noisy_r2_below_one():
    result = fit_linear([0, 1, 2, 3, 4], [0.1, 0.9, 2.2, 2.8, 4.1])
    assert 0.9 < result.r2 < 1.0


def test_fit_linear_large_offset_x():
    x = 1.7e9 + np.arange(10, dtype=float)
    result = fit_linear(x, 2 * (x - 1.7e9) + 1)

    assert result.coefficients[0] == pytest.approx(2.0, rel=1e-9)
    assert result.evaluate(1.7e9) == pytest.approx(1.0, abs=1e-3)
    assert result.r2 == pytest.approx(1.0)


def test_fit_linear_closely_spaced_x():
    x = 1e5 + np.arange(0, 1, 0.01)
    result = fit_linear(x, 3 * x)
    assert result.coefficients[0] == pytest.approx(3.0, rel=1e-8)


def test_fit_exponential_offset_x():
    x = 1e6 + np.linspace(0, 1, 20)
    result = fit_exponential(x, np.exp(0.5 * (x - 1e6)))
    assert result.coefficients[1] == pytest.approx(0.5, rel=1e-6)


def test_fit_linear_constant_y():
    result = fit_linear([0, 1, 2], [5, 5, 5])
    assert result.coefficients == pytest.approx([0.0, 5.0])
    assert result.r2 == 1.0


def test_fit_polynomial_quadratic():
    x = np.arange(6, dtype=float)
    result = fit_polynomial(x, 3 * x**2 - 2 * x + 1, order=2)

    assert result.coefficients == pytest.approx([3.0, -2.0, 1.0], abs=1e-9)
    assert result.r2 == pytest.approx(1.0)
    assert result.equation.startswith("y = 3x^2 - 2x + 1")


@pytest.mark.parametrize("order", [0, 7])
def test_fit_polynomial_order_out_of_range(order):
    with pytest.raises(FitError, match="order"):
        fit_polynomial([0, 1, 2, 3, 4, 5, 6, 7], [0, 1, 2, 3, 4, 5, 6, 7], order=order)


def test_fit_polynomial_too_few_points():
    with pytest.raises(FitError, match="at least 3 points"):
        fit_polynomial([0, 1], [0, 1], order=2)


def test_fit_exponential():
    x = np.linspace(0, 2, 5)
    result = fit_exponential(x, 2 * np.exp(0.5 * x))
    assert result.coefficients == pytest.approx([2.0, 0.5])
    assert result.r2 == pytest.approx(1.0)


def test_fit_exponential_rejects_non_positive_y():
    with pytest.raises(FitError, match="y values > 0"):
        fit_exponential([0, 1, 2], [1, 0, 2])


def test_fit_logarithmic():
    x = np.array([1.0, 2.0, 4.0, 8.0])
    result = fit_logarithmic(x, 1 + 2 * np.log(x))
    assert result.coefficients == pytest.approx([1.0, 2.0])


def test_fit_logarithmic_rejects_non_positive_x():
    with pytest.raises(FitError):
        fit_logarithmic([0, 1, 2], [1, 2, 3])


def test_fit_power():
    x = np.array([1.0, 2.0, 3.0, 4.0])
    result = fit_power(x, 3 * x**2)
    assert result.coefficients == pytest.approx([3.0, 2.0])
    assert result.evaluate(5.0) == pytest.approx(75.0)


@pytest.mark.parametrize("x,y,message", [
    ([], [], "No data points"),
    ([1, 2], [1], "same length"),
    ([1, 1, 1], [1, 2, 3], "identical"),
    ([1.0, float("nan")], [1, 2], "finite"),
    ([1], [1], "at least 2 points"),
])
def test_fit_invalid_input(x, y, message):
    with pytest.raises(FitError, match=message):
        fit_linear(x, y)


def test_fit_curve_dispatch():
    assert fit_curve([0, 1, 2], [0, 1, 4], kind="polynomial", order=2).type == "polynomial"
    with pytest.raises(FitError, match="Unknown fit type"):
        fit_curve([0, 1], [0, 1], kind="spline")


def test_fit_result_to_dict_nan_r2():
    result = fit_linear([0, 1, 2], [5, 5, 5])
    result.r2 = float("nan")
    assert result.to_dict()["r2"] is None


# Statistics

def test_statistics_even_count():
    stats = calculate_statistics([4, 1, 3, 2])

    assert stats.mean == 2.5
    assert stats.median == 2.5
    assert stats.std_dev == pytest.approx(math.sqrt(1.25))
    assert (stats.min, stats.max) == (1.0, 4.0)
    assert (stats.q1, stats.q3) == (1.5, 3.5)
    assert stats.count == 4


def test_statistics_odd_count_excludes_middle_from_halves():
    stats = calculate_statistics([1, 2, 3, 4, 5])
    assert stats.median == 3.0
    assert (stats.q1, stats.q3) == (1.5, 4.5)


def test_statistics_single_value():
    stats = calculate_statistics([7])
    assert stats.mean == stats.median == stats.q1 == stats.q3 == 7.0
    assert stats.std_dev == 0.0


def test_statistics_empty():
    with pytest.raises(FitError):
        calculate_statistics([])


def test_statistics_to_dict_keys():
    assert set(calculate_statistics([1, 2]).to_dict()) == {
        "mean", "median", "stdDev", "min", "max", "q1", "q3", "count"
    }


# Peaks

def test_find_peaks_prominence_threshold():
    y = [0, 1, 0, 5, 0, 1, 0]
    peaks = find_peaks(list(range(len(y))), y, min_prominence=2)

    assert [p.index for p in peaks] == [3]
    assert peaks[0].y == 5.0
    assert peaks[0].prominence == 5.0


def test_find_peaks_default_threshold():
    y = [0, 1, 0, 5, 0, 1, 0]
    peaks = find_peaks(list(range(len(y))), y)
    assert [p.index for p in peaks] == [1, 3, 5]


def test_find_peaks_ignores_end_points_and_plateaus():
    assert find_peaks([0, 1, 2], [5, 1, 0]) == []
    assert find_peaks([0, 1, 2, 3], [0, 1, 1, 0]) == []


def test_find_peaks_uses_x_positions():
    peaks = find_peaks([0.1, 0.2, 0.3], [0, 2, 0])
    assert peaks[0].x == 0.2


def test_find_peaks_mismatched_lengths():
    with pytest.raises(FitError):
        find_peaks([0, 1], [0, 1, 0])


# Signal helpers

def test_moving_average_keeps_length():
    smoothed = smooth_data([0, 0, 3, 0, 0], window=3)
    assert np.allclose(smoothed, [0, 1, 1, 1, 0])


def test_savgol_preserves_quadratic():
    x = np.arange(9, dtype=float)
    y = x**2
    assert np.allclose(smooth_data(y, window=5, method="savgol", polyorder=2), y)


def test_savgol_even_window():
    with pytest.raises(FitError, match="odd"):
        smooth_data(np.arange(9.0), window=4, method="savgol")


def test_smooth_unknown_method():
    with pytest.raises(FitError, match="Unknown smoothing method"):
        smooth_data([1, 2, 3], window=3, method="lowess")


def test_derivative_of_line():
    assert np.allclose(calculate_derivative([0, 1, 2, 3], [0, 2, 4, 6]), [2, 2, 2, 2])


def test_derivative_repeated_x():
    with pytest.raises(FitError):
        calculate_derivative([0, 1, 1, 2], [0, 1, 2, 3])


def test_linear_baseline_through_end_points():
    corrected = correct_baseline([0, 1, 2], [1, 3, 3])
    assert np.allclose(corrected, [0, 1, 0])


def test_polynomial_baseline_removes_trend():
    x = np.arange(5, dtype=float)
    assert np.allclose(correct_baseline(x, 2 * x + 1, method="polynomial", order=1), 0)
