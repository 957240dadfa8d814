import os
from pathlib import Path

from common.logging import Logger, NullLogger

from ._cover import CoverArtResolver
from .album import Album, is_audio_file
from .metadata import infer_metadata


class AlbumBuilder:
    """Turns a directory known to hold audio into an Album record.

    Args:
        cover_resolver: Resolver used to locate the album artwork.
        logger: Optional logger for unreadable directories.
    """

    def __init__(self, cover_resolver: CoverArtResolver, logger: Logger | None = None) -> None:
        self.cover_resolver = cover_resolver
        self._logger = logger or NullLogger()

    def build(self, directory_path: str) -> Album | None:
        """Builds the album for a directory.

        Returns:
            Album | None: The album, or None when no audio file survived enumeration.
        """
        audio_files = self.list_audio_files(directory_path)
        if not audio_files:
            return None

        metadata = infer_metadata(directory_path)
        return Album(
            directory_path=directory_path,
            title=metadata.title,
            artist=metadata.artist,
            year=metadata.year,
            cover_art_path=self.cover_resolver.resolve(directory_path, audio_files),
            audio_files=tuple(audio_files),
        )

    def list_audio_files(self, directory_path: str) -> list[str]:
        """Lists the playable files of a directory, sorted by path.

        Hidden files and sidecars are skipped, and every entry is checked to still be a
        regular file so tracks deleted during the scan drop out.

        Args:
            directory_path: The album directory.

        Returns:
            list[str]: Sorted, de-duplicated absolute paths.
        """
        files = set()
        try:
            with os.scandir(directory_path) as entries:
                for entry in entries:
                    if not is_audio_file(Path(entry.name)):
                        continue
                    if os.path.isfile(entry.path):
                        files.add(os.path.abspath(entry.path))
        except OSError as e:
            self._logger.warning(f"Cannot read directory {directory_path}: {e}")
            return []
        return sorted(files)
