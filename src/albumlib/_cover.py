import hashlib
import os
import tempfile
from pathlib import Path

from tinytag import TinyTag

from common.logging import Logger, NullLogger

from .album import is_image_file

COVER_NAMES = (
    "Cover.jpg", "Folder.jpg", "cover.jpg", "folder.jpg", "front.jpg", "Front.jpg",
    "album.jpg", "Album.jpg", "artwork.jpg", "Artwork.jpg",
    "Cover.png", "Folder.png", "cover.png", "folder.png", "front.png", "Front.png",
    "album.png", "Album.png", "artwork.png", "Artwork.png",
    "Cover.jpeg", "cover.jpeg", "Folder.jpeg", "folder.jpeg",
    "cover.JPG", "COVER.JPG", "folder.JPG", "FOLDER.JPG",
)
"""Conventional cover file names, probed in this order."""

EMBEDDED_ART_EXTENSIONS = frozenset({".flac", ".mp3"})
"""Containers whose picture block (FLAC) or APIC frame (ID3v2) is read."""

_MIME_SUFFIXES = {
    "image/png": ".png",
    "image/gif": ".gif",
    "image/bmp": ".bmp",
    "image/webp": ".webp",
}


class CoverArtResolver:
    """Finds the artwork for an album directory.

    Image files next to the audio win over artwork embedded in the tags. Embedded artwork
    is written to a temporary file whose name is derived from the audio file path, so
    extracting the same track twice reuses one file.

    Args:
        temp_dir: Directory for extracted artwork, the system temp directory by default.
        logger: Optional logger for skipped files and extraction failures.
    """

    def __init__(self, temp_dir: Path | str | None = None, logger: Logger | None = None) -> None:
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
        self._logger = logger or NullLogger()

    def resolve(self, directory_path: str, audio_files: list[str] | tuple[str, ...]) -> str:
        """Returns the path of the best cover image for an album.

        Tries the conventional file names, then any image in the directory, then the
        embedded artwork of the first audio file.

        Args:
            directory_path: The album directory.
            audio_files: The album's audio files in playback order.

        Returns:
            str: Absolute path of the artwork, or an empty string when there is none.
        """
        directory = Path(directory_path)

        if cover := self._find_named_cover(directory):
            return cover
        if cover := self._find_any_image(directory):
            return cover
        if audio_files:
            return self.extract_embedded_art(audio_files[0])
        return ""

    def _find_named_cover(self, directory: Path) -> str:
        for name in COVER_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return str(candidate)
        return ""

    def _find_any_image(self, directory: Path) -> str:
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_file() and is_image_file(Path(entry.name)):
                        return entry.path
        except OSError as e:
            self._logger.warning(f"Cannot read directory for cover art {directory}: {e}")
        return ""

    def temp_path_for(self, audio_file: str, suffix: str = ".jpg") -> Path:
        """Computes the temporary artwork path used for an audio file.

        Args:
            audio_file: The audio file the artwork was taken from.
            suffix: File suffix matching the image type.

        Returns:
            Path: Location of the extracted artwork inside the temp directory.
        """
        digest = hashlib.sha1(audio_file.encode("utf-8", "surrogateescape")).hexdigest()
        return self.temp_dir / f"album_cover_{digest}{suffix}"

    def extract_embedded_art(self, audio_file: str) -> str:
        """Writes the artwork embedded in an audio file to a temporary file.

        Any failure while parsing tags or writing the image means "no artwork".

        Args:
            audio_file: Path of a FLAC or MP3 file.

        Returns:
            str: Path of the extracted image, or an empty string.
        """
        if Path(audio_file).suffix.lower() not in EMBEDDED_ART_EXTENSIONS:
            return ""

        try:
            tag = TinyTag.get(audio_file, duration=False, image=True)
            image = tag.images.any
        except Exception as e:
            self._logger.warning(f"Failed to extract embedded art from {audio_file}: {e}")
            return ""

        if image is None or not image.data:
            return ""

        target = self.temp_path_for(audio_file, _MIME_SUFFIXES.get(image.mime_type, ".jpg"))
        try:
            self._write_image(target, image.data)
        except OSError as e:
            self._logger.warning(f"Failed to write extracted cover {target}: {e}")
            return ""

        self._logger.debug(f"Extracted embedded cover from {audio_file}")
        return str(target)

    def _write_image(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "wb", dir=target.parent, prefix=".album_cover_", delete=False
        ) as tmp_file:
            tmp_file.write(data)
            temp_path = Path(tmp_file.name)
        try:
            temp_path.replace(target)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
