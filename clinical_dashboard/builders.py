"""Factories for the Plotly pieces of the actions timeline."""

from __future__ import annotations

import copy

from .plotly_models import (
    Annotation,
    CompressionLine,
    Font,
    Image,
    Line,
    PlotLocation,
    Shape,
)


def create_image(x: str, y: str, source: str) -> Image:
    """An action icon centred on ``(x, y)``."""
    return Image(
        source=source,
        x=x,
        y=y,
        sizex=10500.0,
        sizey=1.5,
        xref="x",
        yref="y",
        xanchor="center",
        yanchor="middle",
        layer="above",
        visible=True,
        sizing="contain",
        opacity=1,
    )


def create_compression_line(start: PlotLocation, end: PlotLocation, y: str) -> CompressionLine:
    """A horizontal green line spanning a compression period at height ``y``."""
    return CompressionLine(
        x=[start.timestamp.date_string, end.timestamp.date_string],
        y=[y, y],
        hovertext=[start.timestamp.timestamp, end.timestamp.timestamp],
        text="",
        mode="lines",
        series_type="scatter",
        hoverinfo="text",
        textposition="top center",
        textfont=Font(size=16),
        line=Line(color="rgb(0, 150, 0)"),
    )


def create_stage_annotation(stage_name: str) -> Annotation:
    """A bold label for a stage; colour and x are filled in by the caller."""
    return Annotation(
        text=stage_name,
        xref="x",
        yref="paper",
        x="",
        y=0.9,
        xanchor="left",
        yanchor="middle",
        showarrow=False,
        font=Font(size=16, color="", family="Arial, sans-serif", weight=700),
        bgcolor="rgba(255, 255, 255, 0.8)",
        bordercolor="",
        borderwidth=1,
        borderpad=3,
    )


def create_plot_actions_section_annotation(
    section_name: str, x: str, y: float, yref: str
) -> Annotation:
    """A borderless heading for a section of the plot."""
    return Annotation(
        text=section_name,
        xref="x",
        yref=yref,
        x=x,
        y=y,
        xanchor="left",
        yanchor="middle",
        showarrow=False,
        font=Font(size=14, color="", family="Arial, sans-serif", weight=550),
        bgcolor="",
        bordercolor="",
        borderwidth=0,
        borderpad=0,
    )


def create_shape(start: PlotLocation, end: PlotLocation) -> Shape:
    """A background rectangle covering a stage from ``start`` to ``end``."""
    return Shape(
        x0=start.timestamp.date_string,
        x1=end.timestamp.date_string,
        fillcolor="#",
        name=start.stage[1],
        y0="",
        y1="",
        shape_type="rect",
        xref="x",
        yref="y",
        line=Line(width=0),
        layer="below",
        location=(copy.deepcopy(start), copy.deepcopy(end)),
    )