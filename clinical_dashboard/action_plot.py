"""Collecting actions, missed actions and stages into a timeline figure."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Union

from .builders import create_compression_line, create_plot_actions_section_annotation
from .config import PlotlyConfig
from .dates import seconds_to_csv_row_time
from .missed_actions import Rectangle, missed_action_coordinates, seconds_to_date_time_string
from .plotly_models import CompressionLine, Font, Image, Layout, PlotLocation, Shape, to_plotly

_FALLBACK_STAGE_COLOR = "#ffffff"


def _number_text(value: float) -> str:
    """Render a number the way the plot JSON expects: ``2`` rather than ``2.0``."""
    value = float(value)
    if value.is_integer():
        return f"{value:.0f}"
    return repr(value)


def _skipped(factory: Any) -> Any:
    return field(default_factory=factory, metadata={"skip": True})


@dataclass
class Marker:
    size: int = 24
    symbol: str = "square"
    color: list[str] = field(default_factory=list)


@dataclass
class ActionsPlotSeries:
    """One text+marker series; images and stage bookkeeping are not serialised."""

    x: list[str] = field(default_factory=list)
    y: list[str] = field(default_factory=list)
    text: list[str] = field(default_factory=list)
    mode: str = "text+markers"
    series_type: str = field(default="text", metadata={"name": "type"})
    hoverinfo: str = "text"
    textposition: str = "bottom center"
    textfont: Font = field(default_factory=lambda: Font(size=10))
    hovertext: list[str] = field(default_factory=list)
    customdata: list[str] = field(default_factory=list)
    marker: Marker = field(default_factory=Marker)
    images: list[Image] = _skipped(list)
    stages: list[tuple[int, str]] = _skipped(list)
    stage_action_counts: dict[str, int] = _skipped(dict)


ActionsPlotDataItem = Union[ActionsPlotSeries, CompressionLine]


@dataclass
class ActionsPlotData:
    """The finished figure: traces, layout and the icon of each action group."""

    data: list[ActionsPlotDataItem]
    layout: Layout
    action_group_icons: dict[str, str] = field(
        default_factory=dict, metadata={"name": "actionGroupIcons"}
    )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form of the figure."""
        return to_plotly(self)


@dataclass
class ActionGroup:
    group_name: str
    icon: str
    y_value: float = 0.0


class ActionsPlotDataCollector:
    """Accumulates plot pieces and lays them out once everything is known."""

    def __init__(self, plotly_config: PlotlyConfig) -> None:
        self.plotly_config = plotly_config
        self.actions_series = ActionsPlotSeries()
        self.missed_actions_series = ActionsPlotSeries()
        self.scatter_data: list[ActionsPlotDataItem] = []
        self.layout = Layout()
        self.performed_action_groups: dict[str, ActionGroup] = {}
        self.x_max_seconds = 0
        self.y_max = plotly_config.action_plot_settings.y_increment * 2.0

    @property
    def _settings(self):
        return self.plotly_config.action_plot_settings

    def increment_y_max(self) -> None:
        self.y_max += self._settings.y_increment

    def select_stage_color(self, index: int) -> str:
        """Stage colour for ``index``, cycling through the configured colours."""
        colors = self.plotly_config.stages.colors
        if not colors:
            return _FALLBACK_STAGE_COLOR
        return colors[index % len(colors)]

    def map_stage_name(self, stage_name: str) -> str:
        return self.plotly_config.stages.names.get(stage_name, stage_name)

    def add_compression_line(self, start: PlotLocation, end: PlotLocation) -> None:
        line = create_compression_line(start, end, _number_text(self._settings.y_increment))
        self.scatter_data.append(line)

    def add_action_stage(self, stage: tuple[int, str]) -> None:
        self.actions_series.stages.append((stage[0], self.map_stage_name(stage[1])))

    def add_missed_action_stage(self, stage: tuple[int, str]) -> None:
        name = self.map_stage_name(stage[1])
        series = self.missed_actions_series
        series.stages.append((stage[0], name))
        series.stage_action_counts[name] = series.stage_action_counts.get(name, 0) + 1

    def get_y_for_action_group(self, group_name: str) -> float:
        """Row of an existing group, or a new row above all others."""
        existing = self.performed_action_groups.get(group_name)
        if existing is not None:
            return existing.y_value
        self.increment_y_max()
        return self.y_max - self._settings.y_increment

    def create_action_group(self, action_name: str) -> ActionGroup:
        group_name = self.plotly_config.get_action_group_name(action_name)
        icon = self.plotly_config.get_action_group_icon(group_name)
        return ActionGroup(group_name=group_name, icon=icon, y_value=0.0)

    def update_y_coordinates(self) -> None:
        """Fix axis ranges, stage heights and missed-action positions."""
        settings = self._settings
        missed_settings = settings.missed_actions
        missed = self.missed_actions_series

        max_missed = max(missed.stage_action_counts.values(), default=0)
        missed_y_max = missed_settings.calculate_y_max(max_missed)

        self.layout.yaxis.range.append(_number_text(missed_y_max))
        self.layout.yaxis.range.append(_number_text(self.y_max + 2.0 * settings.y_increment))

        missed_shapes: list[Shape] = []
        rectangles: dict[str, Rectangle] = {}
        for index, shape in enumerate(self.layout.shapes):
            shape.y0 = _number_text(settings.y_min)
            shape.y1 = _number_text(self.y_max + settings.y_increment)

            missed_shape = copy.deepcopy(shape)
            missed_shape.y0 = _number_text(missed_settings.y_min)
            missed_shape.y1 = _number_text(missed_y_max + 2.5 * missed_settings.y_increment)
            missed_shapes.append(missed_shape)

            start, end = missed_shape.location
            rectangles[missed_shape.name] = Rectangle(
                name=missed_shape.name,
                x0=float(start.timestamp.total_seconds),
                x1=float(end.timestamp.total_seconds),
                y0=missed_settings.y_min,
                y1=missed_y_max,
            )
            self.layout.annotations[index].y = settings.y_annotation

        coordinates = missed_action_coordinates(
            missed.hovertext,
            missed.stages,
            rectangles,
            missed.stage_action_counts,
            missed_settings.max_count_per_row,
        )
        for image, (_, x, y) in zip(missed.images, coordinates):
            y_text = _number_text(y)
            missed.x.append(x)
            missed.y.append(y_text)
            image.x = x
            image.y = y_text

        self.layout.images.extend(copy.deepcopy(self.actions_series.images))
        self.layout.images.extend(copy.deepcopy(missed.images))
        self.layout.shapes.extend(missed_shapes)

        self.layout.xaxis.range.append(seconds_to_date_time_string(0.0))
        self.layout.xaxis.range.append(
            seconds_to_date_time_string(float(self.x_max_seconds + settings.x_axis_padding_secs))
        )

    def to_plot_data(self) -> ActionsPlotData:
        """Finish the layout and return the figure."""
        self.update_y_coordinates()
        self.scatter_data.append(self.actions_series)
        self.scatter_data.append(self.missed_actions_series)
        icons = {
            name: group.icon for name, group in sorted(self.performed_action_groups.items())
        }

        annotation_x = seconds_to_csv_row_time(0).date_string
        self.layout.annotations.append(
            create_plot_actions_section_annotation(
                "Performed Actions", annotation_x, 0.970, "paper"
            )
        )
        self.layout.annotations.append(
            create_plot_actions_section_annotation(
                "Missed Actions",
                annotation_x,
                self._settings.missed_actions.y_min + 0.3,
                "y",
            )
        )
        return ActionsPlotData(
            data=self.scatter_data, layout=self.layout, action_group_icons=icons
        )