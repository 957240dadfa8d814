import os
from pathlib import Path
from threading import Event, Lock, Thread, current_thread
from typing import Callable

from common.logging import Logger, NullLogger

from ._builder import AlbumBuilder
from ._cover import CoverArtResolver
from .album import Album, is_audio_file

ScanCallback = Callable[[list[Album]], None]
"""Receives the complete, sorted album collection of a finished scan."""


def sort_albums(albums: list[Album]) -> list[Album]:
    """Orders albums by case-insensitive title; equal titles keep their discovery order."""
    return sorted(albums, key=lambda album: album.title.lower())


class TreeScanner:
    """Discovers album directories below a root and builds the album collection.

    A scan runs on one background thread. While it runs, further scan requests are
    ignored; cancellation is cooperative and suppresses the completion callback.

    Args:
        builder: Builder used for every album candidate. A default one writing extracted
            artwork to the system temp directory is created when omitted.
        logger: Optional logger for traversal problems and scan summaries.
    """

    def __init__(self, builder: AlbumBuilder | None = None, logger: Logger | None = None) -> None:
        self._logger = logger or NullLogger()
        self.builder = builder or AlbumBuilder(
            CoverArtResolver(logger=self._logger), logger=self._logger
        )

        self._lock = Lock()
        self._scanning = False
        self._cancel_event = Event()
        self._thread: Thread | None = None

    def scan_async(self, root_path: Path | str, on_complete: ScanCallback) -> bool:
        """Starts a background scan of root_path unless one is already running.

        The callback runs on the worker thread and is skipped when the scan is cancelled.

        Args:
            root_path: The music directory to scan.
            on_complete: Called once with the sorted album collection.

        Returns:
            bool: True if a scan was started, False if the request was ignored.
        """
        while True:
            with self._lock:
                if self._scanning:
                    return False

                previous = self._thread
                if previous is None or previous is current_thread() or not previous.is_alive():
                    self._scanning = True
                    cancel_event = Event()
                    self._cancel_event = cancel_event
                    self._thread = Thread(
                        target=self._run,
                        args=(str(root_path), on_complete, cancel_event),
                        name="album-scanner",
                        daemon=True,
                    )
                    self._thread.start()
                    return True

            # The previous worker may still be running its callback; join it unlocked
            previous.join()

    def cancel(self) -> None:
        """Asks the running scan to stop at the next directory or album boundary."""
        self._cancel_event.set()

    def is_scanning(self) -> bool:
        with self._lock:
            return self._scanning

    def wait(self, timeout: float | None = None) -> bool:
        """Blocks until the current worker thread has finished.

        Args:
            timeout: Maximum number of seconds to wait, or None to wait indefinitely.

        Returns:
            bool: True if no worker is running anymore.
        """
        thread = self._thread
        if thread is None or thread is current_thread():
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _run(self, root_path: str, on_complete: ScanCallback, cancel_event: Event) -> None:
        try:
            albums = self.scan(root_path, cancel_event)
        except Exception as e:
            self._logger.error(f"Album scan of {root_path} failed: {e}", exc_info=True)
            albums = None
        finally:
            with self._lock:
                self._scanning = False

        if albums is None:
            return
        if cancel_event.is_set():
            self._logger.info(f"Album scan of {root_path} cancelled")
            return

        try:
            on_complete(albums)
        except Exception as e:
            self._logger.error(f"Scan completion callback failed: {e}", exc_info=True)

    def scan(self, root_path: Path | str, cancel_event: Event | None = None) -> list[Album]:
        """Scans root_path on the calling thread and returns the sorted albums.

        Args:
            root_path: The music directory to scan.
            cancel_event: Optional event that stops the scan early when set.

        Returns:
            list[Album]: The albums found, empty if the root is missing or the scan was
                cancelled part way.
        """
        cancel_event = cancel_event or Event()
        root = os.path.abspath(root_path)

        if not os.path.isdir(root):
            self._logger.warning(f"Music directory does not exist: {root}")
            return []

        self._logger.info(f"Scanning {root} for albums")
        candidates = self._collect_candidates(root, cancel_event)

        albums = []
        for directory in candidates:
            if cancel_event.is_set():
                return []
            if album := self.builder.build(directory):
                albums.append(album)

        if cancel_event.is_set():
            return []

        self._logger.info(f"Found {len(albums)} albums in {root}")
        return sort_albums(albums)

    def _collect_candidates(self, root: str, cancel_event: Event) -> list[str]:
        """Walks the tree and returns the leaf directories that contain audio files.

        Directories that cannot be read are logged and contribute nothing.
        """
        candidates = []

        def on_error(error: OSError) -> None:
            self._logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            if cancel_event.is_set():
                break
            if dirpath == root or dirnames:
                continue
            if self._contains_audio(dirpath, filenames):
                candidates.append(dirpath)

        return candidates

    @staticmethod
    def _contains_audio(dirpath: str, filenames: list[str]) -> bool:
        return any(
            is_audio_file(Path(name)) and os.path.isfile(os.path.join(dirpath, name))
            for name in filenames
        )
