"""Placement of missed-action markers inside their stage rectangles."""

from __future__ import annotations

import math
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Rectangle:
    """A stage's area on the plot: x in seconds, y in axis units."""

    name: str
    x0: float
    x1: float
    y0: float
    y1: float


def calculate_points_per_row(total_points: int, max_points_per_row: int) -> list[int]:
    """Split ``total_points`` into full rows of ``max_points_per_row`` plus a remainder."""
    full_rows, remainder = divmod(total_points, max_points_per_row)
    rows = [max_points_per_row] * full_rows
    if remainder:
        rows.append(remainder)
    return rows


def calculate_gaps_between_points_within_line(line_length: float, points_on_line: int) -> float:
    """Gap between evenly spaced points centred on a line, rounded up to 0.01."""
    if points_on_line == 1:
        return line_length / 2.0
    return math.ceil(line_length / (points_on_line + 1.0) * 100.0) / 100.0


def seconds_to_date_time_string(seconds: float) -> str:
    """Format today's UTC midnight plus the whole part of ``seconds``."""
    now = datetime.now(timezone.utc)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    return (midnight + timedelta(seconds=int(seconds))).strftime(_DATE_FORMAT)


def calculate_point_coordinates(
    rectangle: Rectangle, points_per_row: Sequence[int]
) -> list[tuple[str, float]]:
    """Return ``(date_time, y)`` for every point, row by row, inside ``rectangle``."""
    coordinates: list[tuple[str, float]] = []
    y_gap = calculate_gaps_between_points_within_line(
        rectangle.y1 - rectangle.y0, len(points_per_row)
    )
    y = rectangle.y0 + y_gap
    for points_on_row in points_per_row:
        x_gap = calculate_gaps_between_points_within_line(
            rectangle.x1 - rectangle.x0, points_on_row
        )
        x = rectangle.x0 + x_gap
        for _ in range(points_on_row):
            coordinates.append((seconds_to_date_time_string(x), y))
            x += x_gap
        y += y_gap
    return coordinates


def missed_action_coordinates(
    hover_text: Sequence[str],
    stages: Sequence[tuple[int, str]],
    rectangle_map: Mapping[str, Rectangle],
    rectangle_point_counts: Mapping[str, int],
    max_points_per_row: int,
) -> Iterator[tuple[str, str, float]]:
    """Yield ``(hover_text, x, y)`` for each missed action in order.

    Raises ``ValueError`` at once if the stages or the per-stage counts do not
    match the number of missed actions.
    """
    if len(hover_text) != len(stages):
        raise ValueError("All missed actions should have assigned stages")
    if len(hover_text) != sum(rectangle_point_counts.values()):
        raise ValueError(
            "All missed actions count in stages should add up to total number of missed actions"
        )

    def generate() -> Iterator[tuple[str, str, float]]:
        current_stage = ""
        coordinates: list[tuple[str, float]] = []
        position = 0
        for text, (_, stage_name) in zip(hover_text, stages):
            rectangle = rectangle_map[stage_name]
            point_count = rectangle_point_counts[stage_name]
            if stage_name != current_stage:
                rows = calculate_points_per_row(point_count, max_points_per_row)
                coordinates = calculate_point_coordinates(rectangle, rows)
                position = 0
            x, y = coordinates[position]
            position += 1
            current_stage = stage_name
            yield text, x, y

    return generate()