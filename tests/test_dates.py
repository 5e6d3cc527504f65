from datetime import datetime, timezone

import pytest

from clinical_dashboard.dates import CsvRowTime, parse_date, seconds_to_csv_row_time


def _today():
    return datetime.now(timezone.utc).date().isoformat()


def test_seconds_to_csv_row_time():
    row = seconds_to_csv_row_time(3661)
    assert row.total_seconds == 3661
    assert row.timestamp == "01:01:01"
    assert row.date_string == f"{_today()} 01:01:01"


def test_midnight():
    row = seconds_to_csv_row_time(0)
    assert row.total_seconds == 0
    assert row.timestamp == "00:00:00"
    assert row.date_string == f"{_today()} 00:00:00"


def test_end_of_day():
    row = seconds_to_csv_row_time(86399)
    assert row.total_seconds == 86399
    assert row.timestamp == "23:59:59"
    assert row.date_string == f"{_today()} 23:59:59"


def test_overflow_wraps_time_but_not_date():
    row = seconds_to_csv_row_time(86400 + 3661)
    assert row.timestamp == "01:01:01"
    assert not row.date_string.startswith(_today())


def test_result_is_csv_row_time():
    row = seconds_to_csv_row_time(5)
    assert row == CsvRowTime(5, row.date_string, "00:00:05")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("09302024", datetime(2024, 9, 30)),
        ("12312023", datetime(2023, 12, 31)),
        ("01012000", datetime(2000, 1, 1)),
    ],
)
def test_valid_date(text, expected):
    assert parse_date(text) == expected


@pytest.mark.parametrize("text", ["12345", "123456789", "123456"])
def test_invalid_date_length(text):
    with pytest.raises(ValueError) as info:
        parse_date(text)
    assert str(info.value) == "Invalid date string length. Expected 8 digits (MMDDYYYY)."


@pytest.mark.parametrize("text", ["02302024", "13012024", "00000000"])
def test_invalid_date_values(text):
    with pytest.raises(ValueError) as info:
        parse_date(text)
    assert str(info.value) == "Invalid date"


@pytest.mark.parametrize(
    "text, message",
    [
        ("aa012024", "Invalid month"),
        ("01aa2024", "Invalid day"),
        ("0101aaaa", "Invalid year"),
    ],
)
def test_invalid_date_parse(text, message):
    with pytest.raises(ValueError) as info:
        parse_date(text)
    assert str(info.value) == message