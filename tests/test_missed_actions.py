import pytest

from clinical_dashboard.dates import seconds_to_csv_row_time
from clinical_dashboard.missed_actions import (
    Rectangle,
    calculate_gaps_between_points_within_line,
    calculate_point_coordinates,
    calculate_points_per_row,
    missed_action_coordinates,
    seconds_to_date_time_string,
)

MAX_POINTS_PER_ROW = 2


def _rectangle_map():
    return {
        "stageA": Rectangle(name="stageA", x0=0.0, x1=100.0, y0=0.0, y1=-4.0),
        "stageB": Rectangle(name="stageB", x0=100.0, x1=200.0, y0=0.0, y1=-4.0),
        "stageC": Rectangle(name="stageC", x0=200.0, x1=300.0, y0=0.0, y1=-4.0),
    }


def test_single_point_per_row():
    hover = ["text1", "text2", "text3"]
    stages = [(1, "stageA"), (2, "stageB"), (3, "stageC")]
    counts = {"stageA": 1, "stageB": 1, "stageC": 1}
    result = list(
        missed_action_coordinates(hover, stages, _rectangle_map(), counts, MAX_POINTS_PER_ROW)
    )
    assert result == [
        ("text1", seconds_to_date_time_string(50.0), -2.0),
        ("text2", seconds_to_date_time_string(150.0), -2.0),
        ("text3", seconds_to_date_time_string(250.0), -2.0),
    ]


def test_multiple_points_per_row():
    hover = [f"text{i}" for i in range(1, 8)]
    stages = [
        (1, "stageA"), (1, "stageA"), (1, "stageA"),
        (2, "stageB"), (2, "stageB"), (2, "stageB"),
        (3, "stageC"),
    ]
    counts = {"stageA": 3, "stageB": 3, "stageC": 1}
    result = list(
        missed_action_coordinates(hover, stages, _rectangle_map(), counts, MAX_POINTS_PER_ROW)
    )
    expected = [
        ("text1", seconds_to_date_time_string(33.0), -1.33),
        ("text2", seconds_to_date_time_string(66.0), -1.33),
        ("text3", seconds_to_date_time_string(50.0), -2.66),
        ("text4", seconds_to_date_time_string(133.0), -1.33),
        ("text5", seconds_to_date_time_string(166.0), -1.33),
        ("text6", seconds_to_date_time_string(150.0), -2.66),
        ("text7", seconds_to_date_time_string(250.0), -2.0),
    ]
    assert len(result) == len(expected)
    for (e_text, e_x, e_y), (a_text, a_x, a_y) in zip(expected, result):
        assert a_text == e_text
        assert a_x == e_x
        assert a_y == pytest.approx(e_y)


def test_empty():
    assert list(missed_action_coordinates([], [], {}, {}, MAX_POINTS_PER_ROW)) == []


def test_mismatched_stages_raises():
    with pytest.raises(ValueError, match="assigned stages"):
        missed_action_coordinates(["a"], [], _rectangle_map(), {"stageA": 1}, 2)


def test_mismatched_counts_raises():
    with pytest.raises(ValueError, match="add up"):
        missed_action_coordinates(["a"], [(1, "stageA")], _rectangle_map(), {"stageA": 2}, 2)


@pytest.mark.parametrize(
    "total, maximum, expected",
    [
        (12, 3, [3, 3, 3, 3]),
        (10, 3, [3, 3, 3, 1]),
        (5, 10, [5]),
        (10, 10, [10]),
        (0, 10, []),
    ],
)
def test_calculate_points_per_row(total, maximum, expected):
    assert calculate_points_per_row(total, maximum) == expected


@pytest.mark.parametrize(
    "length, points, expected",
    [
        (100.0, 1, 50.0),
        (100.0, 5, 16.67),
        (100.0, 0, 100.0),
        (0.0, 5, 0.0),
        (-100.0, 5, -16.66),
    ],
)
def test_calculate_gaps_between_points_within_line(length, points, expected):
    assert calculate_gaps_between_points_within_line(length, points) == pytest.approx(expected)


def test_seconds_to_date_time_string_whole_seconds():
    result = seconds_to_date_time_string(115.0)
    assert result == seconds_to_csv_row_time(115).date_string
    assert result.endswith("00:01:55")


def test_seconds_to_date_time_string_fractional_seconds():
    assert seconds_to_date_time_string(115.5) == seconds_to_csv_row_time(115).date_string


def test_seconds_to_date_time_string_negative_seconds():
    result = seconds_to_date_time_string(-115.0)
    assert result == seconds_to_csv_row_time(-115).date_string
    assert result.endswith("23:58:05")


def test_point_coordinates_single_point():
    rectangle = Rectangle(name="stageA", x0=0.0, x1=100.0, y0=0.0, y1=100.0)
    assert calculate_point_coordinates(rectangle, [1]) == [
        (seconds_to_date_time_string(50.0), 50.0)
    ]


def test_point_coordinates_full_rows():
    rectangle = Rectangle(name="stageA", x0=0.0, x1=100.0, y0=-1.0, y1=-4.0)
    assert calculate_point_coordinates(rectangle, [2, 2]) == [
        (seconds_to_date_time_string(33.0), -2.0),
        (seconds_to_date_time_string(66.0), -2.0),
        (seconds_to_date_time_string(33.0), -3.0),
        (seconds_to_date_time_string(66.0), -3.0),
    ]


def test_point_coordinates_incomplete_row():
    rectangle = Rectangle(name="stageA", x0=0.0, x1=100.0, y0=-1.0, y1=-4.0)
    assert calculate_point_coordinates(rectangle, [2, 1]) == [
        (seconds_to_date_time_string(33.0), -2.0),
        (seconds_to_date_time_string(66.0), -2.0),
        (seconds_to_date_time_string(50.0), -3.0),
    ]


def test_point_coordinates_zero_points():
    rectangle = Rectangle(name="stageA", x0=0.0, x1=100.0, y0=0.0, y1=100.0)
    assert calculate_point_coordinates(rectangle, [0]) == []