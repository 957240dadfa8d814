from functools import partial
from pathlib import Path
from threading import RLock
from typing import Callable

from watchdog.observers import Observer

from common.logging import Logger, NullLogger

from ._scanner import TreeScanner
from ._watcher import DEBOUNCE_DELAY, LibraryWatcher
from .album import Album
from .cache_store import CacheStore
from .filtering import filter_albums
from .playlist import AddMode, PlaylistTarget

Dispatch = Callable[[Callable[[], None]], None]
"""Runs a callable on the thread that owns the album index."""


def _run_inline(task: Callable[[], None]) -> None:
    task()


class AlbumBrowser:
    """Owns the album index of one music directory and keeps it current.

    The index is seeded from the cache on construction and replaced whenever a scan
    completes. Scan results arrive on the scanner thread and are handed to ``dispatch``,
    which a GUI host replaces with a function posting to its event loop; the default
    applies them immediately under a lock.

    Args:
        music_root: The music directory to browse.
        cache_store: Store used to seed and persist the index.
        playlist: Player collaborator receiving activated albums.
        scanner: Scanner to use, a default TreeScanner when omitted.
        dispatch: Marshals scan results to the owning thread.
        logger: Optional logger instance.
    """

    def __init__(
        self,
        music_root: Path | str,
        cache_store: CacheStore,
        playlist: PlaylistTarget,
        scanner: TreeScanner | None = None,
        dispatch: Dispatch | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._logger = logger or NullLogger()
        self.music_root = str(music_root)
        self.cache_store = cache_store
        self.playlist = playlist
        self.scanner = scanner or TreeScanner(logger=self._logger)
        self._dispatch = dispatch or _run_inline

        self._lock = RLock()
        self._albums: list[Album] = self.cache_store.load(self.music_root)
        self._query = ""
        self._cover_cache: dict[str, bytes | None] = {}
        self._index_generation = 0

        self._observer: Observer | None = None
        self._watcher: LibraryWatcher | None = None
        self._debounce_delay = DEBOUNCE_DELAY

        self._logger.info(f"Loaded {len(self._albums)} cached albums for {self.music_root}")

    def __enter__(self) -> "AlbumBrowser":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # === Index ===

    def refresh(self) -> bool:
        """Starts a rescan of the music root unless one is already running.

        Returns:
            bool: True if a scan was started.
        """
        if self.scanner.is_scanning():
            return False
        root = self.music_root
        return self.scanner.scan_async(root, partial(self._on_scan_complete, root))

    def _on_scan_complete(self, root: str, albums: list[Album]) -> None:
        self._dispatch(partial(self._replace_albums, root, albums))

    def _replace_albums(self, root: str, albums: list[Album]) -> None:
        with self._lock:
            if root != self.music_root:
                self._logger.info(f"Discarding scan result for previous root {root}")
                return
            self._albums = albums
            self._index_generation += 1
            self._cover_cache.clear()
        self._logger.info(f"Album index replaced with {len(albums)} albums")
        self.cache_store.save(root, albums)

    def albums(self) -> list[Album]:
        with self._lock:
            return list(self._albums)

    def set_root(self, path: Path | str) -> None:
        """Switches to another music directory.

        The running scan is cancelled, the index is reseeded from the cache (empty unless the
        cache was built for the new directory) and a fresh scan is started.

        Args:
            path: The new music directory.
        """
        self.scanner.cancel()
        self.scanner.wait()

        root = str(path)
        cached = self.cache_store.load(root)
        with self._lock:
            self.music_root = root
            self._albums = cached
            self._index_generation += 1
            self._cover_cache.clear()

        if self._observer is not None:
            self._stop_observer()
            self.start_monitoring(self._debounce_delay)
        self.refresh()

    def root_label(self) -> str:
        """Returns the music root with the home directory shortened to ``~``."""
        home = str(Path.home())
        if self.music_root == home or self.music_root.startswith(home.rstrip("/") + "/"):
            return "~" + self.music_root[len(home):]
        return self.music_root

    # === Filtering ===

    def set_query(self, text: str) -> None:
        with self._lock:
            self._query = text

    @property
    def query(self) -> str:
        return self._query

    def visible_albums(self) -> list[Album]:
        """Returns the albums matching the current query, in index order."""
        with self._lock:
            return filter_albums(self._albums, self._query)

    # === Actions ===

    def activate(self, album: Album, mode: AddMode = AddMode.REPLACE_AND_PLAY) -> None:
        """Hands the tracks of an album to the player.

        Args:
            album: The album to enqueue.
            mode: Whether to replace and play, or append without touching playback.
        """
        if not album.audio_files:
            return
        self._logger.info(f"Enqueueing {album.display_title} ({mode.value})")
        self.playlist.enqueue(list(album.audio_files), mode.replace)

    def cover_art(self, album: Album) -> bytes | None:
        """Returns the cover image bytes of an album, memoised per album directory.

        The memo is dropped together with the index on every rescan.

        Args:
            album: The album whose artwork is wanted.

        Returns:
            bytes | None: The image data, or None when the album has no readable artwork.
        """
        with self._lock:
            if album.directory_path in self._cover_cache:
                return self._cover_cache[album.directory_path]
            generation = self._index_generation

        data = None
        if album.has_cover_art:
            try:
                data = Path(album.cover_art_path).read_bytes()
            except OSError as e:
                self._logger.warning(f"Cannot read cover art {album.cover_art_path}: {e}")

        # Only memoise against the index the read started from, and only for indexed albums
        with self._lock:
            if generation == self._index_generation and album in self._albums:
                self._cover_cache[album.directory_path] = data
        return data

    # === Monitoring ===

    def start_monitoring(self, debounce_delay: float = DEBOUNCE_DELAY) -> bool:
        """Rescans automatically when files below the music root change.

        Args:
            debounce_delay: Seconds of inactivity before a rescan is triggered.

        Returns:
            bool: True if the observer is running.
        """
        if self._observer is not None:
            return True
        self._debounce_delay = debounce_delay
        if not Path(self.music_root).is_dir():
            self._logger.warning(f"Not monitoring missing directory {self.music_root}")
            return False

        self._watcher = LibraryWatcher(self.refresh, debounce_delay)
        observer = Observer()
        observer.schedule(self._watcher, self.music_root, recursive=True)
        try:
            observer.start()
        except OSError as e:
            self._logger.warning(f"Cannot monitor {self.music_root}: {e}")
            return False
        self._observer = observer
        return True

    def _stop_observer(self) -> None:
        if self._observer is None:
            return
        self._watcher.shutdown()
        self._observer.stop()
        self._observer.join()
        self._observer = None

    def stop(self) -> None:
        """Stops monitoring, cancels a running scan and waits for the worker to exit."""
        self._stop_observer()
        self.scanner.cancel()
        self.scanner.wait()
