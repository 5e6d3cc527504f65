"""Time-of-day helpers and the MMDDYYYY folder-name date parser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LENGTH_ERROR = "Invalid date string length. Expected 8 digits (MMDDYYYY)."
_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")


@dataclass
class CsvRowTime:
    """A point in time given as seconds since midnight plus its renderings."""

    total_seconds: int
    date_string: str
    timestamp: str


def _start_of_today_utc() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)


def seconds_to_csv_row_time(seconds: int) -> CsvRowTime:
    """Place ``seconds`` after today's UTC midnight and format it."""
    moment = _start_of_today_utc() + timedelta(seconds=seconds)
    hours = (seconds // 3600) % 24
    minutes = (seconds // 60) % 60
    secs = seconds % 60
    return CsvRowTime(
        total_seconds=seconds,
        date_string=moment.strftime(_DATE_FORMAT),
        timestamp=f"{hours:02d}:{minutes:02d}:{secs:02d}",
    )


def _parse_number(text: str, pattern: re.Pattern[str], message: str) -> int:
    if not pattern.fullmatch(text):
        raise ValueError(message)
    return int(text)


def parse_date(date_str: str) -> datetime:
    """Parse an ``MMDDYYYY`` string into a midnight ``datetime``.

    Raises ``ValueError`` with a message naming the part that is wrong.
    """
    if len(date_str) != 8:
        raise ValueError(_LENGTH_ERROR)
    month = _parse_number(date_str[0:2], _UNSIGNED, "Invalid month")
    day = _parse_number(date_str[2:4], _UNSIGNED, "Invalid day")
    year = _parse_number(date_str[4:8], _SIGNED, "Invalid year")
    try:
        return datetime(year, month, day)
    except ValueError:
        raise ValueError("Invalid date") from None