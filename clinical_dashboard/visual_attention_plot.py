"""Bar traces of visual attention ratios per category."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any

from .config import PlotlyConfig
from .plotly_models import to_plotly
from .visual_attention import process_visual_attention_data


@dataclass
class VisualAttentionCategory:
    """One bar trace: window end times against the category's share."""

    x: list[str] = field(default_factory=list)
    y: list[float] = field(default_factory=list)
    name: str = ""
    plot_type: str = field(default="bar", metadata={"name": "type"})
    marker: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form of the trace."""
        return to_plotly(self)


def to_plotly_data(
    reader: IO[Any], window_duration_secs: int, config: PlotlyConfig
) -> list[VisualAttentionCategory]:
    """Build one trace per configured category, in configured order.

    Categories not in the configured colour map are dropped. Raises
    ``ValueError`` when the input is not a JSON array.
    """
    categories: dict[str, VisualAttentionCategory] = {}
    for category, time, ratio in process_visual_attention_data(reader, window_duration_secs):
        trace = categories.setdefault(category, VisualAttentionCategory(name=category))
        trace.x.append(time)
        trace.y.append(ratio)

    ordered = []
    for category, color in config.visual_attention_plot_settings.ordered_category_color_tuples:
        trace = categories.pop(category, None)
        if trace is not None:
            trace.marker["color"] = color
            ordered.append(trace)
    return ordered