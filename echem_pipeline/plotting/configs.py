"""Technique-specific plot configurations.

Builders return PlotConfig values only; rendering is left to the caller. A
builder that cannot locate a required column raises ColumnNotFoundError and
never falls back to a different column.
"""

import logging

from ..errors import ColumnNotFoundError, PlotConfigError
from ..types import Axis, ParsedData, PlotConfig, PlotType, Technique, Trace
from ..transforms import paired_values
from .columns import require_column

logger = logging.getLogger(__name__)

PRIMARY_COLOR = "#2563eb"
SECONDARY_COLOR = "#dc2626"

# Default plot family per technique
DEFAULT_PLOT_TYPES = {
    Technique.CV: PlotType.CV,
    Technique.EIS: PlotType.NYQUIST,
    Technique.BATTERY_CYCLING: PlotType.BATTERY_CYCLING,
}

# Default x/y column roles for techniques plotted as a plain line
TECHNIQUE_DEFAULTS = {
    Technique.CA: {"x": "time", "y": "current"},
    Technique.CP: {"x": "time", "y": "potential"},
}


def _line_style(color: str = PRIMARY_COLOR, marker_size: int | None = None) -> dict:
    style = {"line": {"color": color, "width": 2}}
    if marker_size is not None:
        style["marker"] = {"size": marker_size, "color": color}
    return style


def normalize_negative_imaginary(values: list[float]) -> list[float]:
    """Nyquist sign convention: negative values are kept, others negated."""
    return [v if v < 0 else -v for v in values]


def create_cv_plot(data: ParsedData) -> PlotConfig:
    """Current vs potential, single line trace."""
    potential_col = require_column(data.columns, "potential", "CV plot")
    current_col = require_column(data.columns, "current", "CV plot")
    potential, current = paired_values(data, [potential_col, current_col])

    return PlotConfig(
        type=PlotType.CV,
        x_axis=Axis(column=potential_col, label=potential_col),
        y_axis=Axis(column=current_col, label=current_col),
        data=[Trace(x=potential, y=current, name="CV Curve", render_mode="lines",
                    style=_line_style())],
        layout={
            "title": "Cyclic Voltammogram",
            "xaxis": {"title": potential_col, "zeroline": True, "zerolinewidth": 1, "zerolinecolor": "#999"},
            "yaxis": {"title": current_col, "zeroline": True, "zerolinewidth": 1, "zerolinecolor": "#999"},
            "hovermode": "closest",
            "showlegend": False,
        },
    )


def create_nyquist_plot(data: ParsedData) -> PlotConfig:
    """-Im(Z) vs Re(Z) with equal axis scaling so arcs render as circles."""
    real_col = require_column(data.columns, "z_real", "Nyquist plot")
    imag_col = require_column(data.columns, "z_imag", "Nyquist plot")
    z_real, z_imag = paired_values(data, [real_col, imag_col])

    return PlotConfig(
        type=PlotType.NYQUIST,
        x_axis=Axis(column=real_col, label="Z' (Ω)"),
        y_axis=Axis(column=imag_col, label="-Z'' (Ω)"),
        data=[Trace(x=z_real, y=normalize_negative_imaginary(z_imag), name="Nyquist",
                    render_mode="lines+markers", style=_line_style(marker_size=6))],
        layout={
            "title": "Nyquist Plot",
            "xaxis": {"title": "Z' (Ω)"},
            "yaxis": {"title": "-Z'' (Ω)", "scaleanchor": "x", "scaleratio": 1},
            "hovermode": "closest",
            "showlegend": False,
        },
    )


def create_bode_plot(data: ParsedData) -> list[PlotConfig]:
    """Two panels sharing the frequency column: |Z| (log/log) and phase (log/linear)."""
    freq_col = require_column(data.columns, "frequency", "Bode plot")
    mag_col = require_column(data.columns, "z_magnitude", "Bode plot")
    phase_col = require_column(data.columns, "z_phase", "Bode plot")
    freq, mag, phase = paired_values(data, [freq_col, mag_col, phase_col])

    freq_axis = Axis(column=freq_col, label="Frequency (Hz)", scale="log")
    magnitude = PlotConfig(
        type=PlotType.BODE,
        x_axis=freq_axis,
        y_axis=Axis(column=mag_col, label="|Z| (Ω)", scale="log"),
        data=[Trace(x=freq, y=mag, name="Magnitude", render_mode="lines+markers",
                    style=_line_style(marker_size=5))],
        layout={
            "title": "Bode Plot - Magnitude",
            "xaxis": {"title": "Frequency (Hz)", "type": "log"},
            "yaxis": {"title": "|Z| (Ω)", "type": "log"},
            "hovermode": "closest",
        },
    )
    phase_plot = PlotConfig(
        type=PlotType.BODE,
        x_axis=Axis(column=freq_col, label="Frequency (Hz)", scale="log"),
        y_axis=Axis(column=phase_col, label="Phase (°)", scale="linear"),
        data=[Trace(x=list(freq), y=phase, name="Phase", render_mode="lines+markers",
                    style=_line_style(SECONDARY_COLOR, marker_size=5))],
        layout={
            "title": "Bode Plot - Phase",
            "xaxis": {"title": "Frequency (Hz)", "type": "log"},
            "yaxis": {"title": "Phase (°)"},
            "hovermode": "closest",
        },
    )
    return [magnitude, phase_plot]


def create_battery_cycling_plot(data: ParsedData) -> list[PlotConfig]:
    """Capacity vs cycle number. Returned as a list to allow more panels."""
    cycle_col = require_column(data.columns, "cycle", "battery cycling plot")
    capacity_col = require_column(data.columns, "capacity", "battery cycling plot")
    cycles, capacity = paired_values(data, [cycle_col, capacity_col])

    return [
        PlotConfig(
            type=PlotType.BATTERY_CYCLING,
            x_axis=Axis(column=cycle_col, label="Cycle Number"),
            y_axis=Axis(column=capacity_col, label=capacity_col),
            data=[Trace(x=cycles, y=capacity, name="Capacity", render_mode="lines+markers",
                        style=_line_style(marker_size=5))],
            layout={
                "title": "Capacity vs Cycle Number",
                "xaxis": {"title": "Cycle Number"},
                "yaxis": {"title": capacity_col},
                "hovermode": "closest",
            },
        )
    ]


def create_generic_plot(data: ParsedData, x_column: str, y_column: str) -> PlotConfig:
    """y vs x for two columns given by exact name."""
    for col in (x_column, y_column):
        if col not in data.columns:
            raise ColumnNotFoundError(f"Column not found in dataset: {col}")
    x_data, y_data = paired_values(data, [x_column, y_column])

    return PlotConfig(
        type=PlotType.LINE,
        x_axis=Axis(column=x_column, label=x_column),
        y_axis=Axis(column=y_column, label=y_column),
        data=[Trace(x=x_data, y=y_data, name=f"{y_column} vs {x_column}",
                    render_mode="lines+markers", style=_line_style(marker_size=5))],
        layout={
            "title": f"{y_column} vs {x_column}",
            "xaxis": {"title": x_column},
            "yaxis": {"title": y_column},
            "hovermode": "closest",
            "showlegend": False,
        },
    )


def _default_line_plot(data: ParsedData) -> PlotConfig:
    roles = TECHNIQUE_DEFAULTS.get(data.technique)
    if roles is None:
        raise PlotConfigError(
            f"No default plot for technique {data.technique.value}; choose x and y columns"
        )
    purpose = f"{data.technique.value} plot"
    x_col = require_column(data.columns, roles["x"], purpose)
    y_col = require_column(data.columns, roles["y"], purpose)
    return create_generic_plot(data, x_col, y_col)


def build_plots(
    data: ParsedData,
    plot_type: PlotType | str | None = None,
    x_column: str | None = None,
    y_column: str | None = None,
) -> list[PlotConfig]:
    """Build the plots for a dataset.

    Args:
        data: Parsed dataset
        plot_type: Plot family; defaults to the one for the detected technique
        x_column, y_column: Exact column names for a generic line plot

    Raises:
        PlotConfigError: Unknown plot type or no default for the technique
        ColumnNotFoundError: A required column is missing
    """
    if plot_type is None:
        if x_column and y_column:
            return [create_generic_plot(data, x_column, y_column)]
        plot_type = DEFAULT_PLOT_TYPES.get(data.technique, PlotType.LINE)

    try:
        plot_type = PlotType(plot_type)
    except ValueError:
        valid = ", ".join(p.value for p in PlotType)
        raise PlotConfigError(f"Unknown plot type: {plot_type} (expected one of {valid})") from None

    logger.debug("Building %s plot for %s data", plot_type.value, data.technique.value)
    if plot_type is PlotType.CV:
        return [create_cv_plot(data)]
    if plot_type is PlotType.NYQUIST:
        return [create_nyquist_plot(data)]
    if plot_type is PlotType.BODE:
        return create_bode_plot(data)
    if plot_type is PlotType.BATTERY_CYCLING:
        return create_battery_cycling_plot(data)
    if x_column and y_column:
        return [create_generic_plot(data, x_column, y_column)]
    return [_default_line_plot(data)]
