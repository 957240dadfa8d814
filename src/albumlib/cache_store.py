import os
import struct
import tempfile
from pathlib import Path
from typing import Iterable

from common.logging import Logger, NullLogger

from .album import Album
from .exceptions import CacheFormatError

CACHE_FILE_NAME = "album-browser-cache.dat"
CACHE_VERSION = 1

_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")


def _encode_text(text: str) -> bytes:
    # surrogateescape keeps undecodable file names intact across a round trip
    return text.encode("utf-8", "surrogateescape")


def _decode_text(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


def encode_albums(root_path: str, albums: Iterable[Album]) -> bytes:
    """Serializes a root path and its albums into the version 1 cache layout.

    All integers are little-endian; every string is a u32 byte length followed by the raw
    UTF-8 bytes.

    Args:
        root_path: The music directory the albums were scanned from.
        albums: The albums in display order.

    Returns:
        bytes: The complete cache file contents.
    """
    albums = list(albums)
    chunks = [_U32.pack(CACHE_VERSION)]

    def put_text(text: str) -> None:
        raw = _encode_text(text)
        chunks.append(_U32.pack(len(raw)))
        chunks.append(raw)

    put_text(root_path)
    chunks.append(_U32.pack(len(albums)))
    for album in albums:
        put_text(album.directory_path)
        put_text(album.title)
        put_text(album.artist)
        chunks.append(_I32.pack(album.year))
        put_text(album.cover_art_path)
        chunks.append(_U32.pack(len(album.audio_files)))
        for file_path in album.audio_files:
            put_text(file_path)

    return b"".join(chunks)


class _CacheReader:
    """Sequential reader over cache bytes that raises on truncation."""

    def __init__(self, data: bytes, cache_path: Path) -> None:
        self._data = data
        self._offset = 0
        self._cache_path = cache_path

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise CacheFormatError(
                self._cache_path, f"truncated at byte {self._offset}, needed {size} more"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def u32(self) -> int:
        return _U32.unpack(self._take(_U32.size))[0]

    def i32(self) -> int:
        return _I32.unpack(self._take(_I32.size))[0]

    def text(self) -> str:
        return _decode_text(self._take(self.u32()))


class CacheStore:
    """Persists the album collection of one music directory between sessions.

    The cache only holds the albums of a single root; loading it for any other root is a
    cache miss. Problems with the file are logged and reported as an empty collection.

    Args:
        cache_path: Location of the cache file.
        logger: Optional logger for read and write failures.
    """

    def __init__(self, cache_path: Path | str, logger: Logger | None = None) -> None:
        self.cache_path = Path(cache_path)
        self._logger = logger or NullLogger()

    def save(self, root_path: Path | str, albums: Iterable[Album]) -> bool:
        """Writes the albums of root_path to the cache file.

        The file is replaced atomically, and its directory is created when missing.

        Args:
            root_path: The music directory the albums belong to.
            albums: The albums in display order.

        Returns:
            bool: True if the cache was written.
        """
        try:
            data = encode_albums(str(root_path), albums)
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb", dir=self.cache_path.parent, prefix=".album-cache-", delete=False
            ) as tmp_file:
                tmp_file.write(data)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
                temp_path = Path(tmp_file.name)
            temp_path.replace(self.cache_path)
        except (OSError, struct.error) as e:
            self._logger.error(f"Failed to write album cache {self.cache_path}: {e}")
            return False
        return True

    def load(self, root_path: Path | str) -> list[Album]:
        """Reads the cached albums if the cache was built for root_path.

        Args:
            root_path: The currently configured music directory.

        Returns:
            list[Album]: The cached albums, or an empty list on any cache miss.
        """
        try:
            data = self.cache_path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as e:
            self._logger.warning(f"Cannot read album cache {self.cache_path}: {e}")
            return []

        try:
            return self._decode(data, str(root_path))
        except CacheFormatError as e:
            self._logger.warning(str(e))
            return []

    def _decode(self, data: bytes, root_path: str) -> list[Album]:
        reader = _CacheReader(data, self.cache_path)

        version = reader.u32()
        if version != CACHE_VERSION:
            self._logger.info(f"Ignoring album cache with version {version}")
            return []

        cached_root = reader.text()
        if cached_root != root_path:
            self._logger.info(f"Album cache belongs to {cached_root}, not {root_path}")
            return []

        albums = []
        for _ in range(reader.u32()):
            directory_path = reader.text()
            title = reader.text()
            artist = reader.text()
            year = reader.i32()
            cover_art_path = reader.text()
            audio_files = tuple(reader.text() for _ in range(reader.u32()))
            albums.append(
                Album(
                    directory_path=directory_path,
                    title=title,
                    artist=artist,
                    year=year,
                    cover_art_path=cover_art_path,
                    audio_files=audio_files,
                )
            )
        return albums
