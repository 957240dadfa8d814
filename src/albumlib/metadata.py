import re
from pathlib import PurePath
from typing import NamedTuple

YEAR_TITLE_PATTERN = re.compile(r"^\((\d{4})\)\s+(\S.*)$")
"""Matches album directory names such as ``(1979) The Wall``."""

RESERVED_ROOT_NAMES = frozenset({"Music", "music", "Albums", "albums"})
"""Parent directory names that are library roots rather than artists."""


class AlbumMetadata(NamedTuple):
    title: str
    artist: str
    year: int


def infer_metadata(directory_path: str) -> AlbumMetadata:
    """Derives title, artist and year from the layout of an album directory path.

    Only the path string is inspected; the filesystem is never touched. A leaf named
    ``(YYYY) Name`` yields the year and the remaining name as title, any other leaf is
    used verbatim as title with year 0. The parent directory is taken as artist unless
    it is one of the common library root names.

    Args:
        directory_path: Path of the album directory.

    Returns:
        AlbumMetadata: The inferred title, artist and year.
    """
    path = PurePath(directory_path)
    album_name = path.name

    if match := YEAR_TITLE_PATTERN.match(album_name):
        year = int(match.group(1))
        title = match.group(2).strip()
    else:
        year = 0
        title = album_name

    parent_name = path.parent.name if path.parent != path else ""
    artist = parent_name if parent_name and parent_name not in RESERVED_ROOT_NAMES else ""

    return AlbumMetadata(title=title, artist=artist, year=year)
