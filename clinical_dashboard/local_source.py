"""Session data read from a directory tree on the local file system.

The expected layout under the root directory is::

    root/
        09302024/                 a session folder named MMDDYYYY
            cognitive-load/       a category folder of JSON files
                a_file.json
            visual-attention/
                ...
            actions.csv           the session's CSV (or .txt) log
            recording.mp4         the session's video

A file's id is its path relative to the root directory.
"""

from __future__ import annotations

import enum
import functools
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any

from .dates import parse_date
from .strings import snake_case_file_to_title_case

_CSV_EXTENSIONS = frozenset({"csv", "txt"})
_JSON_EXTENSIONS = frozenset({"json"})
_VIDEO_EXTENSIONS = frozenset({"mp4", "webm", "ogg", "mov"})
_VIDEO_CONTENT_TYPE = "video/mp4"
_CHUNK_SIZE = 64 * 1024
_UNSIGNED = re.compile(r"\+?[0-9]+")
_U64_LIMIT = 2**64
_FALLBACK_DATE = datetime(1970, 1, 1)


class DataSourceType(enum.Enum):
    """Where session data is read from."""

    LOCAL_FILE = "LocalFile"
    GOOGLE_DRIVE = "GoogleDrive"


@dataclass
class VideoStream:
    """A video response: status, headers and the body as chunks of bytes."""

    status_code: int
    content_type: str
    content_length: int | None
    content_range: str | None
    body: Iterator[bytes]


def ordering_by_priority_list_then_alphabetically(
    a: str, b: str, priority_list: Sequence[str]
) -> int:
    """Compare two names: listed names first in list order, the rest alphabetically.

    Returns a negative number, zero or a positive number, like a ``cmp`` function.
    """
    a_listed = a in priority_list
    b_listed = b in priority_list
    if a_listed and b_listed:
        index_a = priority_list.index(a)
        index_b = priority_list.index(b)
        return (index_a > index_b) - (index_a < index_b)
    if a_listed:
        return -1
    if b_listed:
        return 1
    return (a > b) - (a < b)


def _extension(path: Path) -> str:
    return path.suffix[1:].lower()


def _files_in(folder: Path) -> list[Path]:
    return sorted(entry for entry in folder.iterdir() if entry.is_file())


def _parse_u64(text: str) -> int | None:
    if not _UNSIGNED.fullmatch(text):
        return None
    value = int(text)
    return value if value < _U64_LIMIT else None


def _read_chunks(handle: IO[bytes], limit: int | None) -> Iterator[bytes]:
    with handle:
        remaining = limit
        while remaining is None or remaining > 0:
            size = _CHUNK_SIZE if remaining is None else min(_CHUNK_SIZE, remaining)
            chunk = handle.read(size)
            if not chunk:
                return
            if remaining is not None:
                remaining -= len(chunk)
            yield chunk


class LocalFileDataSource:
    """Serves session folders, data files and videos from ``root_dir``."""

    def __init__(self, root_dir: str | Path) -> None:
        self.root_dir = Path(root_dir)

    def data_source_type(self) -> DataSourceType:
        return DataSourceType.LOCAL_FILE

    def get_main_folder_list(self) -> list[dict[str, Any]]:
        """Describe every session folder, oldest first.

        Folders whose names are not ``MMDDYYYY`` dates are dated 01/01/1970.
        """
        folders = []
        for path in sorted(self.root_dir.iterdir()):
            if not path.is_dir():
                continue
            name = path.name
            try:
                date = parse_date(name)
            except ValueError:
                print(
                    f"Debug: Folder {name} does not seem to be a valid location "
                    "to process for mteam data files. Skipping."
                )
                date = _FALLBACK_DATE
            epoch = int(date.replace(tzinfo=timezone.utc).timestamp())
            folders.append(
                {
                    "id": name,
                    "name": name,
                    "date": {"epoch": epoch, "dateString": date.strftime("%m/%d/%Y")},
                }
            )
        folders.sort(key=lambda folder: max(folder["date"]["epoch"], 0))
        return folders

    def fetch_json_reader(self, file_id: str) -> IO[bytes]:
        """Open the file ``file_id`` for binary reading."""
        return open(self.root_dir / file_id, "rb")

    def fetch_csv_reader(self, date_folder_id: str) -> IO[bytes]:
        """Open the first ``.csv`` or ``.txt`` file in a session folder.

        Raises ``FileNotFoundError`` if the folder holds none.
        """
        folder = self.root_dir / date_folder_id
        for path in _files_in(folder):
            if _extension(path) in _CSV_EXTENSIONS:
                return open(path, "rb")
        raise FileNotFoundError(f"No CSV file found in folder {str(folder)!r}")

    def fetch_json_file_map(
        self,
        date_folder_id: str,
        category_folder_name: str,
        priority_list_to_order: Sequence[str] | None = None,
    ) -> list[tuple[str, str]]:
        """List ``(display name, file name)`` for the JSON files of a category.

        With a priority list the entries are ordered by it, then alphabetically;
        an empty priority list raises ``ValueError``.
        """
        folder = self.root_dir / date_folder_id / category_folder_name
        entries = [
            (snake_case_file_to_title_case(path.name), path.name)
            for path in _files_in(folder)
            if _extension(path) in _JSON_EXTENSIONS
        ]
        if priority_list_to_order is not None:
            if not priority_list_to_order:
                raise ValueError("Priority list is empty")
            priority = list(priority_list_to_order)
            entries.sort(
                key=functools.cmp_to_key(
                    lambda left, right: ordering_by_priority_list_then_alphabetically(
                        left[0], right[0], priority
                    )
                )
            )
        return entries

    def _find_video(self, folder_id: str) -> Path:
        folder = self.root_dir / folder_id
        try:
            files = _files_in(folder)
        except OSError as exc:
            raise OSError(f"Error reading directory {str(folder)!r}: {exc}") from exc
        for path in files:
            if _extension(path) in _VIDEO_EXTENSIONS:
                return path
        raise FileNotFoundError(f"No video file found in folder {str(folder)!r}")

    def stream_video(self, folder_id: str, range_header: str | None = None) -> VideoStream:
        """Stream the first video in a folder, whole (200) or one byte range (206).

        Raises ``FileNotFoundError`` when no video is found and ``ValueError``
        for a malformed or unsatisfiable range.
        """
        path = self._find_video(folder_id)
        total_length = path.stat().st_size

        if range_header is None:
            handle = open(path, "rb")
            return VideoStream(
                status_code=200,
                content_type=_VIDEO_CONTENT_TYPE,
                content_length=total_length,
                content_range=None,
                body=_read_chunks(handle, None),
            )

        if not range_header.startswith("bytes="):
            raise ValueError("Invalid range header")
        parts = range_header[len("bytes="):].split("-")
        start = _parse_u64(parts[0])
        if start is None:
            start = 0
        if len(parts) > 1 and parts[1]:
            end = _parse_u64(parts[1])
            if end is None:
                raise ValueError("Invalid end range")
        else:
            end = total_length - 1

        if start > end or end >= total_length:
            raise ValueError("Invalid range values")

        handle = open(path, "rb")
        handle.seek(start)
        byte_count = end - start + 1
        return VideoStream(
            status_code=206,
            content_type=_VIDEO_CONTENT_TYPE,
            content_length=byte_count,
            content_range=f"bytes {start}-{end}/{total_length}",
            body=_read_chunks(handle, byte_count),
        )