"""Plotly figure pieces and their conversion to JSON-ready dictionaries."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any

from .dates import CsvRowTime


def _optional() -> Any:
    return field(default=None, metadata={"omit_none": True})


def _renamed(name: str) -> Any:
    return field(metadata={"name": name})


def to_plotly(value: Any) -> Any:
    """Convert a model (or nested containers of them) into plain JSON data.

    Optional fields left as ``None`` are omitted, internal fields are skipped
    and renamed fields use their Plotly key.
    """
    if is_dataclass(value) and not isinstance(value, type):
        result: dict[str, Any] = {}
        for item in fields(value):
            meta = item.metadata
            if meta.get("skip"):
                continue
            attr = getattr(value, item.name)
            if attr is None and meta.get("omit_none"):
                continue
            result[meta.get("name", item.name)] = to_plotly(attr)
        return result
    if isinstance(value, Mapping):
        return {str(key): to_plotly(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plotly(item) for item in value]
    return value


@dataclass
class PlotLocation:
    """Where a data point sits: its time and its ``(index, name)`` stage."""

    timestamp: CsvRowTime
    stage: tuple[int, str]


@dataclass
class Font:
    size: int
    color: str | None = _optional()
    family: str | None = _optional()
    weight: int | None = _optional()


@dataclass
class Line:
    width: int | None = _optional()
    color: str | None = _optional()


@dataclass
class Annotation:
    xref: str
    yref: str
    x: str
    y: float
    xanchor: str
    yanchor: str
    text: str
    showarrow: bool
    font: Font
    bgcolor: str
    bordercolor: str
    borderwidth: int
    borderpad: int


@dataclass
class Image:
    source: str
    x: str
    y: str
    sizex: float
    sizey: float
    xref: str
    yref: str
    xanchor: str
    yanchor: str
    layer: str
    visible: bool
    sizing: str
    opacity: int


@dataclass
class Shape:
    x0: str
    x1: str
    fillcolor: str
    name: str
    y0: str
    y1: str
    shape_type: str = _renamed("type")
    xref: str = ""
    yref: str = ""
    line: Line = field(default_factory=Line)
    layer: str = ""
    location: tuple[PlotLocation, PlotLocation] | None = field(
        default=None, metadata={"skip": True}
    )


@dataclass
class Title:
    text: str
    y: float


@dataclass
class Margin:
    t: float
    l: float  # noqa: E741
    r: float
    b: float


@dataclass
class XAxis:
    range: list[str]
    title: str
    showgrid: bool
    tickformat: str


@dataclass
class YAxis:
    visible: bool
    range: list[str]


@dataclass
class ModeBar:
    orientation: str


@dataclass
class Legend:
    x: float
    y: float
    xanchor: str


@dataclass
class Layout:
    """Figure layout; a bare ``Layout()`` holds the timeline defaults."""

    title: Title = field(default_factory=lambda: Title("Clinical Review Timeline", 0.99))
    margin: Margin = field(default_factory=lambda: Margin(t=0.0, l=50.0, r=50.0, b=50.0))
    xaxis: XAxis = field(
        default_factory=lambda: XAxis(
            range=[], title="Time", showgrid=False, tickformat="%H:%M:%S"
        )
    )
    yaxis: YAxis = field(default_factory=lambda: YAxis(visible=False, range=[]))
    modebar: ModeBar = field(default_factory=lambda: ModeBar("v"))
    autosize: bool = True
    showlegend: bool = False
    legend: Legend = field(default_factory=lambda: Legend(1.0, 1.0, "right"))
    shapes: list[Shape] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)


@dataclass
class CompressionLine:
    x: list[str]
    y: list[str]
    text: str
    mode: str
    series_type: str = _renamed("type")
    hoverinfo: str = ""
    textposition: str = ""
    textfont: Font = field(default_factory=lambda: Font(size=16))
    line: Line = field(default_factory=Line)
    hovertext: list[str] = field(default_factory=list)