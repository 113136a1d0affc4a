"""Regression fits over paired numeric arrays.

Exponential, logarithmic and power fits are linearized with logarithms and
solved by ordinary least squares; R² is always reported on the original y
scale.
"""

import numpy as np

from ..errors import FitError
from ..types import FitResult

MIN_POLYNOMIAL_ORDER = 1
MAX_POLYNOMIAL_ORDER = 6


def _as_arrays(x, y, min_points: int = 2) -> tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.size == 0 or y.size == 0:
        raise FitError("No data points to fit")
    if x.shape != y.shape or x.ndim != 1:
        raise FitError(f"x and y must have the same length (got {x.size} and {y.size})")
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise FitError("x and y must contain only finite numbers")
    if x.size < min_points:
        raise FitError(f"Need at least {min_points} points to fit (got {x.size})")
    if np.ptp(x) == 0:
        raise FitError("All x values are identical; the fit is undefined")
    return x, y


def _least_squares_line(x: np.ndarray, y: np.ndarray) -> tuple[float, float]:
    """OLS slope and intercept over mean-centred data."""
    x_mean, y_mean = x.mean(), y.mean()
    dx = x - x_mean
    slope = np.dot(dx, y - y_mean) / np.dot(dx, dx)
    intercept = y_mean - slope * x_mean
    return float(slope), float(intercept)


def r_squared(y: np.ndarray, y_pred: np.ndarray) -> float:
    """Coefficient of determination, 1 - SSres/SStot.

    Constant y gives 1.0 for an exact fit and NaN otherwise.
    """
    ss_res = float(np.sum((y - y_pred) ** 2))
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    if ss_tot == 0:
        return 1.0 if np.isclose(ss_res, 0.0) else float("nan")
    return 1.0 - ss_res / ss_tot


def _num(value: float) -> str:
    return f"{value:.4g}"


def _signed(value: float) -> str:
    return f"+ {_num(value)}" if value >= 0 else f"- {_num(-value)}"


def fit_linear(x, y) -> FitResult:
    """y = m*x + b."""
    x, y = _as_arrays(x, y)
    slope, intercept = _least_squares_line(x, y)
    return FitResult(
        type="linear",
        equation=f"y = {_num(slope)}x {_signed(intercept)}",
        coefficients=[slope, intercept],
        r2=r_squared(y, slope * x + intercept),
    )


def fit_polynomial(x, y, order: int = 2) -> FitResult:
    """Least-squares polynomial of the given order (1-6)."""
    if not MIN_POLYNOMIAL_ORDER <= order <= MAX_POLYNOMIAL_ORDER:
        raise FitError(
            f"Polynomial order must be between {MIN_POLYNOMIAL_ORDER} and "
            f"{MAX_POLYNOMIAL_ORDER} (got {order})"
        )
    x, y = _as_arrays(x, y, min_points=order + 1)
    coeffs = np.polyfit(x, y, order)

    terms = []
    for power, coef in zip(range(order, -1, -1), coeffs):
        if power == 0:
            body = _num(abs(coef)) if terms else _num(coef)
        else:
            var = "x" if power == 1 else f"x^{power}"
            body = f"{_num(abs(coef)) if terms else _num(coef)}{var}"
        if terms:
            terms.append(("+ " if coef >= 0 else "- ") + body)
        else:
            terms.append(body)

    return FitResult(
        type="polynomial",
        equation="y = " + " ".join(terms),
        coefficients=[float(c) for c in coeffs],
        r2=r_squared(y, np.polyval(coeffs, x)),
    )


def fit_exponential(x, y) -> FitResult:
    """y = a*e^(b*x), fitted as ln(y) = ln(a) + b*x. Requires y > 0."""
    x, y = _as_arrays(x, y)
    if np.any(y <= 0):
        raise FitError("Exponential fit requires all y values > 0")
    b, ln_a = _least_squares_line(x, np.log(y))
    a = float(np.exp(ln_a))
    return FitResult(
        type="exponential",
        equation=f"y = {_num(a)}·e^({_num(b)}x)",
        coefficients=[a, b],
        r2=r_squared(y, a * np.exp(b * x)),
    )


def fit_logarithmic(x, y) -> FitResult:
    """y = a + b*ln(x). Requires x > 0."""
    x, y = _as_arrays(x, y)
    if np.any(x <= 0):
        raise FitError("Logarithmic fit requires all x values > 0")
    b, a = _least_squares_line(np.log(x), y)
    return FitResult(
        type="logarithmic",
        equation=f"y = {_num(a)} {_signed(b)}·ln(x)",
        coefficients=[a, b],
        r2=r_squared(y, a + b * np.log(x)),
    )


def fit_power(x, y) -> FitResult:
    """y = a*x^b, fitted as ln(y) = ln(a) + b*ln(x). Requires x > 0 and y > 0."""
    x, y = _as_arrays(x, y)
    if np.any(x <= 0) or np.any(y <= 0):
        raise FitError("Power fit requires all x and y values > 0")
    b, ln_a = _least_squares_line(np.log(x), np.log(y))
    a = float(np.exp(ln_a))
    return FitResult(
        type="power",
        equation=f"y = {_num(a)}·x^{_num(b)}",
        coefficients=[a, b],
        r2=r_squared(y, a * np.power(x, b)),
    )


FIT_FUNCTIONS = {
    "linear": fit_linear,
    "polynomial": fit_polynomial,
    "exponential": fit_exponential,
    "logarithmic": fit_logarithmic,
    "power": fit_power,
}


def fit_curve(x, y, kind: str = "linear", order: int = 2) -> FitResult:
    """Dispatch to a fit by name."""
    if kind not in FIT_FUNCTIONS:
        raise FitError(f"Unknown fit type: {kind} (expected one of {', '.join(FIT_FUNCTIONS)})")
    if kind == "polynomial":
        return fit_polynomial(x, y, order)
    return FIT_FUNCTIONS[kind](x, y)
