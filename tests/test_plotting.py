import plotly.graph_objects as go
import pytest

from echem_pipeline import (
    ColumnNotFoundError,
    PlotConfigError,
    PlotType,
    build_plots,
    create_bode_plot,
    create_cv_plot,
    create_generic_plot,
    create_nyquist_plot,
    parse_bytes,
)
from echem_pipeline.plotting import (
    find_column,
    normalize_negative_imaginary,
    require_column,
    to_figure,
    to_subplots,
)


def test_find_column_current_skips_time_and_impedance():
    columns = ["Time/s", "Im(Z)/Ohm", "I/mA"]
    assert find_column(columns, "current") == "I/mA"


def test_find_column_by_clean_name():
    assert find_column(["Pt", "T", "Vf", "Im"], "potential") == "Vf"
    assert find_column(["Pt", "T", "Vf", "Im"], "current") == "Im"
    assert find_column(["Pt", "T", "Vf", "Im"], "time") == "T"


def test_require_column_missing():
    with pytest.raises(ColumnNotFoundError) as excinfo:
        require_column(["a", "b"], "frequency", "Bode plot")
    assert excinfo.value.role == "frequency"
    assert "Bode plot" in str(excinfo.value)


def test_cv_plot_from_csv(csv_cv_bytes):
    config = create_cv_plot(parse_bytes(csv_cv_bytes, "cv.csv"))

    assert config.type is PlotType.CV
    assert config.x_axis.column == "Ewe/V"
    assert config.y_axis.column == "I/mA"
    trace = config.data[0]
    # the row with a non-numeric current is dropped from both axes
    assert trace.x == [0.1, 0.2]
    assert trace.y == [1.0, 2.0]
    assert config.title == "Cyclic Voltammogram"


def test_cv_plot_from_gamry(gamry_cv_bytes):
    config = create_cv_plot(parse_bytes(gamry_cv_bytes, "cv.DTA"))

    assert config.x_axis.column == "Vf"
    assert config.y_axis.column == "Im"
    assert config.data[0].x == [-0.5, -0.4, -0.3]
    assert len(config.data[0].y) == 3


def test_cv_plot_missing_current():
    data = parse_bytes(b"Ewe/V,Time/s\n0.1,1\n", "x.csv")
    with pytest.raises(ColumnNotFoundError):
        create_cv_plot(data)


def test_nyquist_plot(csv_eis_bytes):
    config = create_nyquist_plot(parse_bytes(csv_eis_bytes, "eis.csv"))

    assert config.type is PlotType.NYQUIST
    assert config.x_axis.column == "Re(Z)/Ohm"
    assert config.y_axis.column == "-Im(Z)/Ohm"
    assert config.data[0].x == [10.0, 12.0, 15.0]
    assert config.data[0].y == [-1.0, -3.0, -2.0]
    assert config.layout["yaxis"]["scaleanchor"] == "x"
    assert config.layout["yaxis"]["scaleratio"] == 1


def test_normalize_negative_imaginary():
    assert normalize_negative_imaginary([-1.0, 2.0, 0.0]) == [-1.0, -2.0, 0.0]


def test_bode_plot_returns_two_configs(csv_eis_bytes):
    magnitude, phase = create_bode_plot(parse_bytes(csv_eis_bytes, "eis.csv"))

    assert magnitude.type is PlotType.BODE
    assert phase.type is PlotType.BODE
    assert magnitude.x_axis.scale == "log"
    assert magnitude.y_axis.scale == "log"
    assert phase.x_axis.scale == "log"
    assert phase.y_axis.scale == "linear"
    assert magnitude.y_axis.column == "|Z|/Ohm"
    assert phase.y_axis.column == "Phase(Z)/deg"
    assert phase.data[0].x == magnitude.data[0].x


def test_generic_plot_missing_column(csv_cv_bytes):
    data = parse_bytes(csv_cv_bytes, "cv.csv")
    with pytest.raises(ColumnNotFoundError, match="Column not found in dataset: nope"):
        create_generic_plot(data, "Ewe/V", "nope")


def test_build_plots_defaults(csv_cv_bytes, csv_eis_bytes, csv_cycling_bytes):
    assert build_plots(parse_bytes(csv_cv_bytes, "cv.csv"))[0].type is PlotType.CV
    assert build_plots(parse_bytes(csv_eis_bytes, "eis.csv"))[0].type is PlotType.NYQUIST
    cycling = build_plots(parse_bytes(csv_cycling_bytes, "c.csv"))
    assert cycling[0].type is PlotType.BATTERY_CYCLING
    assert cycling[0].data[0].y == [100.0, 98.0, 97.0]


def test_build_plots_explicit_bode(csv_eis_bytes):
    plots = build_plots(parse_bytes(csv_eis_bytes, "eis.csv"), plot_type="bode")
    assert len(plots) == 2


def test_build_plots_ca_default(ca_data):
    (config,) = build_plots(ca_data)

    assert config.type is PlotType.LINE
    assert config.x_axis.column == "Time/s"
    assert config.y_axis.column == "Current/mA"
    assert config.data[0].x == [0.0, 2.0]
    assert config.data[0].y == [1.0, 0.5]


def test_build_plots_line_with_columns(csv_cv_bytes):
    (config,) = build_plots(parse_bytes(csv_cv_bytes, "cv.csv"), "line", "I/mA", "Ewe/V")
    assert config.x_axis.column == "I/mA"
    assert config.title == "Ewe/V vs I/mA"


def test_build_plots_unknown_technique_needs_columns():
    data = parse_bytes(b"a,b\n1,2\n", "x.csv")
    with pytest.raises(PlotConfigError, match="No default plot"):
        build_plots(data)
    assert len(build_plots(data, x_column="a", y_column="b")) == 1


def test_build_plots_unknown_type(csv_cv_bytes):
    with pytest.raises(PlotConfigError, match="Unknown plot type"):
        build_plots(parse_bytes(csv_cv_bytes, "cv.csv"), plot_type="scatter3d")


def test_plot_config_to_dict(csv_cv_bytes):
    payload = create_cv_plot(parse_bytes(csv_cv_bytes, "cv.csv")).to_dict()

    assert payload["type"] == "cv_plot"
    assert payload["xAxis"] == {"column": "Ewe/V", "label": "Ewe/V", "scale": "linear"}
    trace = payload["data"][0]
    assert trace["type"] == "scatter"
    assert trace["mode"] == "lines"
    assert trace["name"] == "CV Curve"


def test_to_figure_nyquist(csv_eis_bytes):
    fig = to_figure(create_nyquist_plot(parse_bytes(csv_eis_bytes, "eis.csv")))

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert fig.layout.title.text == "Nyquist Plot"
    assert fig.layout.yaxis.scaleratio == 1
    assert list(fig.data[0].x) == [10.0, 12.0, 15.0]


def test_to_figure_log_axes(csv_eis_bytes):
    magnitude, _ = create_bode_plot(parse_bytes(csv_eis_bytes, "eis.csv"))
    fig = to_figure(magnitude)
    assert fig.layout.xaxis.type == "log"
    assert fig.layout.yaxis.type == "log"


def test_to_subplots_bode(csv_eis_bytes):
    fig = to_subplots(create_bode_plot(parse_bytes(csv_eis_bytes, "eis.csv")))

    assert len(fig.data) == 2
    assert fig.layout.yaxis.type == "log"
    assert fig.layout.yaxis2.type == "linear"
    assert fig.layout.xaxis2.type == "log"
