"""Plot configuration: the settings files and the process-wide instance."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_ACTION_GROUP_NAME = "default_group_name"
DEFAULT_ACTION_GROUP_ICON = "default"


class ConfigError(Exception):
    """A configuration file could not be read or did not match its schema."""


def _expect_object(value: Any, context: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ConfigError(f"{context}: expected a JSON object")
    return value


def _get(data: Any, key: str, context: str) -> Any:
    obj = _expect_object(data, context)
    if key not in obj:
        raise ConfigError(f"{context}: missing field `{key}`")
    return obj[key]


def _get_int(data: Any, key: str, context: str) -> int:
    value = _get(data, key, context)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{context}: `{key}` must be a non-negative integer")
    return value


def _get_float(data: Any, key: str, context: str) -> float:
    value = _get(data, key, context)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{context}: `{key}` must be a number")
    return float(value)


def _expect_str_list(value: Any, context: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{context}: expected an array of strings")
    return list(value)


def _expect_str_map(value: Any, context: str) -> dict[str, str]:
    obj = _expect_object(value, context)
    if not all(isinstance(v, str) for v in obj.values()):
        raise ConfigError(f"{context}: expected string values")
    return dict(obj)


@dataclass
class StagesConfig:
    names: dict[str, str]
    colors: list[str]


@dataclass
class MissedActionsPlotSettings:
    max_count_per_row: int
    y_increment: float
    y_min: float

    def calculate_y_max(self, max_missed_action_count_per_stage: int) -> float:
        """Lowest y reached by the missed-action rows of the fullest stage."""
        rows = max_missed_action_count_per_stage / (self.max_count_per_row + 1)
        return self.y_min + rows * self.y_increment


@dataclass
class ActionsPlotSettings:
    x_axis_padding_secs: int
    y_annotation: float
    y_min: float
    y_increment: float
    missed_actions: MissedActionsPlotSettings


@dataclass
class VisualAttentionPlotSettings:
    window_size_secs: int
    ordered_category_color_tuples: list[tuple[str, str]]


@dataclass
class TeamMemberFilterSettings:
    filter_selection_order: list[str]


def _stages(data: Any) -> StagesConfig:
    ctx = "stages"
    return StagesConfig(
        names=_expect_str_map(_get(data, "names", ctx), f"{ctx}.names"),
        colors=_expect_str_list(_get(data, "colors", ctx), f"{ctx}.colors"),
    )


def _missed_actions(data: Any) -> MissedActionsPlotSettings:
    ctx = "missedActions"
    return MissedActionsPlotSettings(
        max_count_per_row=_get_int(data, "maxCountPerRow", ctx),
        y_increment=_get_float(data, "yIncrement", ctx),
        y_min=_get_float(data, "yMin", ctx),
    )


def _action_plot_settings(data: Any) -> ActionsPlotSettings:
    ctx = "action plot settings"
    return ActionsPlotSettings(
        x_axis_padding_secs=_get_int(data, "xAxisPaddingSecs", ctx),
        y_annotation=_get_float(data, "yAnnotation", ctx),
        y_min=_get_float(data, "yMin", ctx),
        y_increment=_get_float(data, "yIncrement", ctx),
        missed_actions=_missed_actions(_get(data, "missedActions", ctx)),
    )


def _ordered_color_map(value: Any) -> list[tuple[str, str]]:
    if not isinstance(value, list):
        raise ConfigError("orderedColorMap: expected an array of 2-element arrays")
    pairs = []
    for item in value:
        _expect_str_list(item, "orderedColorMap entry")
        if len(item) != 2:
            raise ConfigError("Each entry must be a 2-element array of strings")
        pairs.append((item[0], item[1]))
    return pairs


def _visual_attention_settings(data: Any) -> VisualAttentionPlotSettings:
    ctx = "visual attention plot settings"
    return VisualAttentionPlotSettings(
        window_size_secs=_get_int(data, "windowSizeSeconds", ctx),
        ordered_category_color_tuples=_ordered_color_map(_get(data, "orderedColorMap", ctx)),
    )


def _team_member_filter_settings(data: Any) -> TeamMemberFilterSettings:
    ctx = "team member filter settings"
    order = _get(data, "filterSelectionOrder", ctx)
    return TeamMemberFilterSettings(
        filter_selection_order=_expect_str_list(order, f"{ctx}.filterSelectionOrder")
    )


def _load_json(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    try:
        return json.loads(content)
    except ValueError as exc:
        raise ConfigError(f"invalid JSON in {path}: {exc}") from exc


@dataclass
class PlotlyConfig:
    stages: StagesConfig
    action_groups: dict[str, str]
    action_group_icons: dict[str, str]
    action_plot_settings: ActionsPlotSettings
    visual_attention_plot_settings: VisualAttentionPlotSettings
    team_member_filter_settings: TeamMemberFilterSettings

    def get_action_group_name(self, action_name: str) -> str:
        """Group of an action, looked up case-insensitively."""
        return self.action_groups.get(action_name.lower(), DEFAULT_ACTION_GROUP_NAME)

    def get_action_group_icon(self, group_name: str) -> str:
        return self.action_group_icons.get(group_name, DEFAULT_ACTION_GROUP_ICON)

    @classmethod
    def load(cls, config_dir: str | Path) -> PlotlyConfig:
        """Read the six settings files in ``config_dir``; raise ``ConfigError``."""
        directory = Path(config_dir)
        return cls(
            stages=_stages(_load_json(directory / "action-plot-stages.json")),
            action_groups=_expect_str_map(
                _load_json(directory / "action-groups.json"), "action groups"
            ),
            action_group_icons=_expect_str_map(
                _load_json(directory / "action-group-icons.json"), "action group icons"
            ),
            action_plot_settings=_action_plot_settings(
                _load_json(directory / "action-plot-settings.json")
            ),
            visual_attention_plot_settings=_visual_attention_settings(
                _load_json(directory / "visual-attention-plot-settings.json")
            ),
            team_member_filter_settings=_team_member_filter_settings(
                _load_json(directory / "team-member-filter-settings.json")
            ),
        )


_CONFIG: PlotlyConfig | None = None


def get_config() -> PlotlyConfig | None:
    """The configuration set by ``init_plot_config``, if any."""
    return _CONFIG


def init_plot_config(path_string: str) -> PlotlyConfig | None:
    """Load the configuration directory once for the whole process.

    Raises ``OSError`` when the directory is missing or unreadable and
    ``RuntimeError`` when the configuration was already initialised.
    """
    global _CONFIG
    path = Path(path_string)
    if not path.exists():
        raise OSError("Reading the plot configuration files failed")
    try:
        config = PlotlyConfig.load(path)
    except ConfigError as exc:
        raise OSError(f'Error initializing plot-config at "{path}": {exc}') from exc
    if _CONFIG is not None:
        raise RuntimeError("plot configuration is already initialised")
    _CONFIG = config
    return get_config()