"""Render PlotConfig values as plotly figures.

The builders stay library-agnostic; this is the adapter for notebooks and
the plotly frontend.
"""

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..types import PlotConfig

# Axis style shared by all figures
AXIS_STYLE = {
    "linecolor": "black",
    "ticks": "inside",
    "showline": True,
    "mirror": True,
    "gridcolor": "lightgray",
}


def _scatter(trace: dict) -> go.Scatter:
    trace = dict(trace)
    trace.pop("type", None)
    return go.Scatter(**trace)


def _axis(config: PlotConfig, which: str) -> dict:
    axis = config.x_axis if which == "x" else config.y_axis
    layout_axis = dict(config.layout.get(f"{which}axis", {}))
    title = layout_axis.pop("title", axis.label)
    layout_axis.pop("type", None)
    return {**AXIS_STYLE, **layout_axis, "title": {"text": title}, "type": axis.scale}


def to_figure(config: PlotConfig) -> go.Figure:
    """One PlotConfig as a plotly Figure."""
    fig = go.Figure()
    for trace in config.to_dict()["data"]:
        fig.add_trace(_scatter(trace))

    extra = {k: v for k, v in config.layout.items() if k not in ("title", "xaxis", "yaxis")}
    fig.update_layout(
        title={"text": config.layout.get("title", "")},
        xaxis=_axis(config, "x"),
        yaxis=_axis(config, "y"),
        **extra,
    )
    return fig


def to_subplots(configs: list[PlotConfig], shared_xaxes: bool = True) -> go.Figure:
    """Stack several PlotConfigs (e.g. the two Bode panels) in one figure."""
    titles = [c.layout.get("title", "") for c in configs]
    fig = make_subplots(rows=len(configs), cols=1, shared_xaxes=shared_xaxes, subplot_titles=titles)

    for row, config in enumerate(configs, start=1):
        for trace in config.to_dict()["data"]:
            fig.add_trace(_scatter(trace), row=row, col=1)
        x_axis = _axis(config, "x")
        y_axis = _axis(config, "y")
        # scaleanchor refers to axis ids that differ between subplots
        y_axis.pop("scaleanchor", None)
        fig.update_xaxes(x_axis, row=row, col=1)
        fig.update_yaxes(y_axis, row=row, col=1)

    fig.update_layout(showlegend=False)
    return fig
