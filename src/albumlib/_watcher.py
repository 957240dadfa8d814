from pathlib import Path
from threading import Lock, Timer
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler

from .album import is_audio_file, is_image_file

DEBOUNCE_DELAY = 2.0  # Seconds of quiet before a rescan is requested


class LibraryWatcher(FileSystemEventHandler):
    """Turns file system activity below the music root into debounced rescan requests.

    Copying an album produces a burst of events; the watcher restarts its timer on every
    relevant event and calls the trigger once the library has been quiet for
    ``debounce_delay`` seconds.

    Attributes:
        on_change: Callable invoked from the timer thread, usually AlbumBrowser.refresh.
        debounce_delay: Seconds to wait after the last relevant event.
    """

    def __init__(self, on_change: Callable[[], None], debounce_delay: float = DEBOUNCE_DELAY) -> None:
        self.on_change = on_change
        self.debounce_delay = debounce_delay
        self._timer: Timer | None = None
        self._lock = Lock()

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Schedules a rescan for directory changes and for audio or image file changes.

        Opened and closed events are ignored, as are hidden files.

        Args:
            event: A watchdog file system event.
        """
        if event.event_type in ("opened", "closed", "closed_no_write"):
            return
        if not event.is_directory and not self._is_relevant(event):
            return

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = Timer(self.debounce_delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @staticmethod
    def _is_relevant(event: FileSystemEvent) -> bool:
        paths = [event.src_path, getattr(event, "dest_path", "")]
        for raw in paths:
            if not raw:
                continue
            path = Path(raw if isinstance(raw, str) else raw.decode())
            if is_audio_file(path) or is_image_file(path):
                return True
        return False

    def _fire(self) -> None:
        with self._lock:
            self._timer = None
        self.on_change()

    def shutdown(self) -> None:
        """Cancels a pending rescan request without running it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
