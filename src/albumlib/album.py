from dataclasses import dataclass, field
from pathlib import Path

AUDIO_EXTENSIONS = frozenset(
    {".flac", ".mp3", ".ogg", ".opus", ".m4a", ".aac", ".wav", ".wv", ".ape"}
)
"""Lowercase suffixes of the files that make a directory an album."""

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"})
"""Lowercase suffixes accepted as cover art."""


def is_hidden(name: str) -> bool:
    """Tells whether a file name is hidden or a macOS resource-fork sidecar.

    Sidecar files (``._track.flac``) start with a dot as well, so one check covers both.

    Args:
        name: The bare file name, without directory.

    Returns:
        bool: True if the file must be ignored during scanning.
    """
    return name.startswith(".")


def is_audio_file(path: Path) -> bool:
    return not is_hidden(path.name) and path.suffix.lower() in AUDIO_EXTENSIONS


def is_image_file(path: Path) -> bool:
    return not is_hidden(path.name) and path.suffix.lower() in IMAGE_EXTENSIONS


@dataclass(frozen=True, slots=True)
class Album:
    """A directory of audio files presented as a single album.

    Albums are only built by a scan and are never modified afterwards; a rescan replaces
    the whole collection.

    Attributes:
        directory_path: Absolute path of the album directory, unique within one scan.
        title: Title inferred from the directory name.
        artist: Artist inferred from the parent directory, or an empty string.
        year: Release year, 0 when unknown.
        cover_art_path: Absolute path to the cover image, or an empty string.
        audio_files: Absolute audio file paths in lexicographic order.
    """

    directory_path: str
    title: str
    artist: str = ""
    year: int = 0
    cover_art_path: str = ""
    audio_files: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Lists coming from callers are frozen so the record stays hashable
        if not isinstance(self.audio_files, tuple):
            object.__setattr__(self, "audio_files", tuple(self.audio_files))

    @property
    def has_cover_art(self) -> bool:
        return bool(self.cover_art_path)

    @property
    def display_title(self) -> str:
        return self.title or self.directory_path

    @property
    def display_artist(self) -> str:
        return self.artist
