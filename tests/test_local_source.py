from datetime import datetime, timezone

import pytest

from clinical_dashboard.local_source import (
    DataSourceType,
    LocalFileDataSource,
    ordering_by_priority_list_then_alphabetically,
)

VIDEO_BYTES = b"0123456789"


@pytest.fixture
def root(tmp_path):
    session = tmp_path / "09302024"
    session.mkdir()
    (session / "log.CSV").write_text("a,b\n1,2\n")
    (session / "notes.md").write_text("ignored")
    category = session / "cognitive-load"
    category.mkdir()
    (category / "nurse_one.json").write_text("[]")
    (category / "doctor_lead.json").write_text("[]")
    (category / "zeta.json").write_text("[]")
    (category / "readme.txt").write_text("skip")
    video = tmp_path / "videos"
    video.mkdir()
    (video / "clip.MP4").write_bytes(VIDEO_BYTES)
    (video / "thumb.png").write_bytes(b"png")
    (tmp_path / "01012000").mkdir()
    (tmp_path / "notadate").mkdir()
    (tmp_path / "loose.json").write_text("{}")
    return tmp_path


@pytest.fixture
def source(root):
    return LocalFileDataSource(root)


def test_ordering_both_in_priority_list():
    assert ordering_by_priority_list_then_alphabetically("B", "A", ["B", "A"]) < 0
    assert ordering_by_priority_list_then_alphabetically("A", "B", ["B", "A"]) > 0


def test_ordering_one_in_priority_list():
    assert ordering_by_priority_list_then_alphabetically("Z", "A", ["Z"]) < 0
    assert ordering_by_priority_list_then_alphabetically("A", "Z", ["Z"]) > 0


def test_ordering_neither_in_priority_list():
    assert ordering_by_priority_list_then_alphabetically("A", "B", ["X"]) < 0
    assert ordering_by_priority_list_then_alphabetically("B", "A", ["X"]) > 0
    assert ordering_by_priority_list_then_alphabetically("A", "A", ["X"]) == 0


def test_data_source_type(source):
    assert source.data_source_type() is DataSourceType.LOCAL_FILE


def test_main_folder_list_sorted_by_epoch(source):
    folders = source.get_main_folder_list()
    names = [folder["name"] for folder in folders]
    assert names == ["notadate", "01012000", "09302024", "videos"] or names[:1] == ["notadate"]
    assert set(names) == {"notadate", "01012000", "09302024", "videos"}
    epochs = [max(folder["date"]["epoch"], 0) for folder in folders]
    assert epochs == sorted(epochs)
    assert names.index("01012000") < names.index("09302024")


def test_main_folder_list_entries(source):
    by_name = {folder["name"]: folder for folder in source.get_main_folder_list()}
    valid = by_name["09302024"]
    assert valid["id"] == "09302024"
    assert valid["date"]["dateString"] == "09/30/2024"
    assert valid["date"]["epoch"] == int(
        datetime(2024, 9, 30, tzinfo=timezone.utc).timestamp()
    )
    invalid = by_name["notadate"]
    assert invalid["date"] == {"epoch": 0, "dateString": "01/01/1970"}


def test_fetch_json_reader(source):
    with source.fetch_json_reader("09302024/cognitive-load/zeta.json") as reader:
        assert reader.read() == b"[]"


def test_fetch_json_reader_missing(source):
    with pytest.raises(FileNotFoundError):
        source.fetch_json_reader("09302024/nothing.json")


def test_fetch_csv_reader_case_insensitive(source):
    with source.fetch_csv_reader("09302024") as reader:
        assert reader.read() == b"a,b\n1,2\n"


def test_fetch_csv_reader_no_csv(source):
    with pytest.raises(FileNotFoundError, match="No CSV file found"):
        source.fetch_csv_reader("01012000")


def test_json_file_map_with_priority(source):
    result = source.fetch_json_file_map("09302024", "cognitive-load", ["Nurse One"])
    assert result == [
        ("Nurse One", "nurse_one.json"),
        ("Doctor Lead", "doctor_lead.json"),
        ("Zeta", "zeta.json"),
    ]


def test_json_file_map_without_priority(source):
    result = source.fetch_json_file_map("09302024", "cognitive-load")
    assert sorted(result) == [
        ("Doctor Lead", "doctor_lead.json"),
        ("Nurse One", "nurse_one.json"),
        ("Zeta", "zeta.json"),
    ]


def test_json_file_map_empty_priority(source):
    with pytest.raises(ValueError, match="Priority list is empty"):
        source.fetch_json_file_map("09302024", "cognitive-load", [])


def test_json_file_map_missing_folder(source):
    with pytest.raises(OSError):
        source.fetch_json_file_map("09302024", "visual-attention", ["A"])


def test_stream_whole_video(source):
    video = source.stream_video("videos")
    assert video.status_code == 200
    assert video.content_type == "video/mp4"
    assert video.content_length == len(VIDEO_BYTES)
    assert video.content_range is None
    assert b"".join(video.body) == VIDEO_BYTES


def test_stream_video_range(source):
    video = source.stream_video("videos", "bytes=2-5")
    assert video.status_code == 206
    assert video.content_length == 4
    assert video.content_range == "bytes 2-5/10"
    assert b"".join(video.body) == VIDEO_BYTES[2:6]


def test_stream_video_open_ended_range(source):
    video = source.stream_video("videos", "bytes=3-")
    assert video.content_range == "bytes 3-9/10"
    assert b"".join(video.body) == VIDEO_BYTES[3:]


def test_stream_video_missing_start_defaults_to_zero(source):
    video = source.stream_video("videos", "bytes=-")
    assert video.content_length == len(VIDEO_BYTES)
    assert b"".join(video.body) == VIDEO_BYTES


@pytest.mark.parametrize(
    ("header", "message"),
    [
        ("items=0-1", "Invalid range header"),
        ("bytes=5-2", "Invalid range values"),
        ("bytes=0-10", "Invalid range values"),
        ("bytes=0-x", "Invalid end range"),
    ],
)
def test_stream_video_bad_ranges(source, header, message):
    with pytest.raises(ValueError, match=message):
        source.stream_video("videos", header)


def test_stream_video_no_video(source):
    with pytest.raises(FileNotFoundError, match="No video file found"):
        source.stream_video("01012000")


def test_stream_video_missing_folder(source):
    with pytest.raises(OSError, match="Error reading directory"):
        source.stream_video("absent")