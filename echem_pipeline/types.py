"""Data types for echem_pipeline."""

from dataclasses import dataclass, field
from enum import Enum
import math

import numpy as np
import polars as pl
import pint

# Initialize unit registry
ureg = pint.UnitRegistry()


class Technique(str, Enum):
    """Electrochemical technique assigned to a parsed file."""

    CV = "CV"
    EIS = "EIS"
    BATTERY_CYCLING = "BatteryCycling"
    CA = "CA"
    CP = "CP"
    UNKNOWN = "Unknown"


class PlotType(str, Enum):
    """Plot families the plot builders can emit."""

    CV = "cv_plot"
    NYQUIST = "nyquist"
    BODE = "bode"
    BATTERY_CYCLING = "battery_cycling"
    LINE = "line"


@dataclass
class RawFile:
    """An uploaded file, consumed once by a reader."""

    name: str
    content: bytes

    @property
    def extension(self) -> str:
        """Lower-cased extension including the dot ('' if none)."""
        base = self.name.rsplit("/", 1)[-1]
        if "." not in base:
            return ""
        return "." + base.rsplit(".", 1)[-1].lower()


@dataclass
class TabularData:
    """File rows in column order.

    Every row has exactly one cell per column. Cells are floats where the
    reader could coerce them, otherwise the original string.
    """

    columns: list[str]
    rows: list[list[float | str]] = field(default_factory=list)

    def index(self, column: str) -> int:
        return self.columns.index(column)

    def column_values(self, column: str) -> list[float | str]:
        idx = self.columns.index(column)
        return [row[idx] for row in self.rows]

    def to_dict(self) -> dict:
        return {"columns": list(self.columns), "rows": [list(r) for r in self.rows]}


@dataclass
class ParsedData:
    """Normalized result of parsing one instrument file."""

    technique: Technique
    instrument: str
    data: TabularData
    metadata: dict = field(default_factory=dict)
    units: dict[str, str] = field(default_factory=dict)

    @property
    def columns(self) -> list[str]:
        return self.data.columns

    @property
    def rows(self) -> list[list[float | str]]:
        return self.data.rows

    def column_values(self, column: str) -> list[float | str]:
        return self.data.column_values(column)

    def to_frame(self) -> pl.DataFrame:
        """Build a polars DataFrame.

        Columns whose cells are all numbers become Float64, any column holding
        a string is kept as String.
        """
        series = []
        for idx, name in enumerate(self.data.columns):
            values = [row[idx] for row in self.data.rows]
            if all(isinstance(v, (int, float)) for v in values):
                series.append(pl.Series(name, [float(v) for v in values], dtype=pl.Float64))
            else:
                series.append(pl.Series(name, [_cell_text(v) for v in values], dtype=pl.String))
        return pl.DataFrame(series)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "technique": self.technique.value,
            "instrument": self.instrument,
            "metadata": self.metadata,
            "data": self.data.to_dict(),
            "units": dict(self.units),
        }


def _cell_text(value: float | str) -> str:
    if isinstance(value, str):
        return value
    return repr(float(value))


@dataclass
class Axis:
    column: str
    label: str
    scale: str = "linear"  # 'linear' or 'log'

    def to_dict(self) -> dict:
        return {"column": self.column, "label": self.label, "scale": self.scale}


@dataclass
class Trace:
    """One plotted series; style holds renderer hints such as line/marker."""

    x: list[float]
    y: list[float]
    name: str
    render_mode: str = "lines"
    style: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "x": list(self.x),
            "y": list(self.y),
            "type": "scatter",
            "mode": self.render_mode,
            "name": self.name,
            **self.style,
        }


@dataclass
class PlotConfig:
    """Declarative plot description, independent of any charting library."""

    type: PlotType
    x_axis: Axis
    y_axis: Axis
    data: list[Trace]
    layout: dict = field(default_factory=dict)

    @property
    def title(self) -> str | None:
        return self.layout.get("title")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "type": self.type.value,
            "xAxis": self.x_axis.to_dict(),
            "yAxis": self.y_axis.to_dict(),
            "data": [trace.to_dict() for trace in self.data],
            "layout": self.layout,
        }


@dataclass
class FitResult:
    """Result of a regression fit.

    Coefficient order per fit type:
    - linear: [slope, intercept]
    - polynomial: highest power first (numpy.polyfit order)
    - exponential, power: [a, b]
    - logarithmic: [a, b] for y = a + b*ln(x)
    """

    type: str
    equation: str
    coefficients: list[float]
    r2: float

    def evaluate(self, x):
        """Evaluate the fitted curve at x (scalar or array-like)."""
        x = np.asarray(x, dtype=float)
        c = self.coefficients
        if self.type == "linear":
            return c[0] * x + c[1]
        if self.type == "polynomial":
            return np.polyval(c, x)
        if self.type == "exponential":
            return c[0] * np.exp(c[1] * x)
        if self.type == "logarithmic":
            return c[0] + c[1] * np.log(x)
        if self.type == "power":
            return c[0] * np.power(x, c[1])
        raise ValueError(f"Unknown fit type: {self.type}")

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "equation": self.equation,
            "coefficients": [float(c) for c in self.coefficients],
            "r2": _json_float(self.r2),
        }


@dataclass
class StatisticsResult:
    mean: float
    median: float
    std_dev: float
    min: float
    max: float
    q1: float
    q3: float
    count: int

    def to_dict(self) -> dict:
        return {
            "mean": self.mean,
            "median": self.median,
            "stdDev": self.std_dev,
            "min": self.min,
            "max": self.max,
            "q1": self.q1,
            "q3": self.q3,
            "count": self.count,
        }


@dataclass
class PeakResult:
    index: int
    x: float
    y: float
    prominence: float

    def to_dict(self) -> dict:
        return {"index": self.index, "x": self.x, "y": self.y, "prominence": self.prominence}


def _json_float(value: float) -> float | None:
    return None if value is None or math.isnan(value) else float(value)


def convert_units(value: float, source_unit: str, target_unit: str) -> float:
    """Convert a value from source unit to target unit using pint.

    Args:
        value: The numeric value to convert
        source_unit: Unit string (e.g., "mA")
        target_unit: Target unit string (e.g., "A")

    Returns:
        Converted value
    """
    if not source_unit or not target_unit or source_unit == target_unit:
        return value
    return ureg.Quantity(value, source_unit).to(target_unit).magnitude

