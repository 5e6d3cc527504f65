"""Visual attention samples: normalisation and windowed category ratios."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import IO, Any, Optional

from .dates import seconds_to_csv_row_time
from .jsonutil import parse_json_array_root

Sample = tuple[float, Optional[str]]


def map_time_to_date(
    visual_attention_data: Any, first_timestamp: float | None
) -> tuple[float, str | None, float] | None:
    """Normalise one sample's time against the first sample's time.

    Returns ``(normalized_seconds, category, start_seconds)`` or ``None`` if
    the sample is not an object with a numeric ``time``.
    """
    if not isinstance(visual_attention_data, dict):
        return None
    time = visual_attention_data.get("time")
    if isinstance(time, bool) or not isinstance(time, (int, float)):
        return None
    time = float(time)
    category = visual_attention_data.get("category")
    if not isinstance(category, str):
        category = None
    start_seconds = time if first_timestamp is None else first_timestamp
    return time - start_seconds, category, start_seconds


def normalize_visual_attention_load_data(reader: IO[Any]) -> Iterator[Sample]:
    """Parse ``reader`` and yield ``(seconds_since_first, category)`` pairs.

    The JSON is parsed immediately; iteration stops at the first sample that
    cannot be mapped.
    """
    root = parse_json_array_root(reader)

    def generate() -> Iterator[Sample]:
        first: float | None = None
        for item in root:
            mapped = map_time_to_date(item, first)
            if mapped is None:
                return
            seconds, category, first = mapped
            yield seconds, category

    return generate()


def aggregate_category_ratios(
    data_iter: Iterable[Sample], window_size: int
) -> Iterator[tuple[str, str, float]]:
    """Yield ``(category, window_end_date, ratio)`` for consecutive windows."""
    window_end = window_size
    counts: dict[str, int] = {}
    total = 0

    def flush() -> Iterator[tuple[str, str, float]]:
        date_string = seconds_to_csv_row_time(window_end).date_string
        for category, count in counts.items():
            yield category, date_string, count / total

    for time, category in data_iter:
        if time > window_end:
            yield from flush()
            window_end += window_size
            total = 0
            counts = {}
        if category is not None:
            counts[category] = counts.get(category, 0) + 1
            total += 1

    if total > 0:
        yield from flush()


def process_visual_attention_data(
    reader: IO[Any], window_duration_secs: int
) -> Iterator[tuple[str, str, float]]:
    """Parse ``reader`` and aggregate its categories over fixed windows."""
    samples = normalize_visual_attention_load_data(reader)
    return aggregate_category_ratios(samples, window_duration_secs)