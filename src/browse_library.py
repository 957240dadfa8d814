#!/usr/bin/env python3
import time
from typing import Sequence

from albumlib import (
    AddMode,
    Album,
    AlbumBrowser,
    AlbumBuilder,
    CacheStore,
    CoverArtResolver,
    TreeScanner,
)
from config import get_configuration
from logtools import get_logger, setup_logging

logger = get_logger(__name__)


class ConsolePlaylist:
    """Playlist target that prints what a real player would enqueue."""

    def enqueue(self, paths: Sequence[str], replace: bool) -> None:
        action = "Playing" if replace else "Appended"
        print(f"{action} {len(paths)} tracks:")
        for path in paths:
            print(f"  • {path}")


def create_browser() -> AlbumBrowser:
    config = get_configuration()
    setup_logging(
        dir_output=str(config.LOG_DIR),
        base_file="album-browser.log",
        log_level=config.LOG_LEVEL,
    )

    resolver = CoverArtResolver(temp_dir=config.COVER_TMP_DIR, logger=logger)
    scanner = TreeScanner(builder=AlbumBuilder(resolver, logger=logger), logger=logger)
    browser = AlbumBrowser(
        music_root=config.MUSIC_ROOT,
        cache_store=CacheStore(config.CACHE_FILE, logger=logger),
        playlist=ConsolePlaylist(),
        scanner=scanner,
        logger=logger,
    )
    if config.WATCH_LIBRARY:
        browser.start_monitoring(config.WATCH_DEBOUNCE)
    return browser


def print_albums(albums: list[Album]) -> None:
    if not albums:
        print("  No albums found.")
        return
    for number, album in enumerate(albums, start=1):
        year = f" ({album.year})" if album.year else ""
        artist = f"{album.display_artist} — " if album.display_artist else ""
        print(f"  {number:>4}. {artist}{album.display_title}{year} [{len(album.audio_files)} tracks]")


def activate_by_number(browser: AlbumBrowser, argument: str, mode: AddMode) -> None:
    visible = browser.visible_albums()
    if not argument.isdigit() or not 1 <= int(argument) <= len(visible):
        print(f"  Pick a number between 1 and {len(visible)}")
        return
    browser.activate(visible[int(argument) - 1], mode)


def main() -> None:
    browser = create_browser()
    print(f"Music folder : {browser.root_label()}")
    print(f"Cached albums: {len(browser.albums()):,}\n")

    t0 = time.time()
    browser.refresh()
    browser.scanner.wait()
    print(f"Library ready — {len(browser.albums()):,} albums in {time.time() - t0:.1f}s\n")
    print("Type to filter, 'play N' / 'add N' to enqueue, 'rescan', or q to quit\n")

    try:
        while True:
            line = input("> ").strip()
            command, _, argument = line.partition(" ")
            if line.lower() in {"q", "quit", "exit"}:
                break
            if command == "play":
                activate_by_number(browser, argument.strip(), AddMode.REPLACE_AND_PLAY)
                continue
            if command == "add":
                activate_by_number(browser, argument.strip(), AddMode.APPEND)
                continue
            if line == "rescan":
                if not browser.refresh():
                    print("  A scan is already running")
                continue

            browser.set_query(line)
            print_albums(browser.visible_albums())
            print("\n" + "─" * 50)

    except KeyboardInterrupt:
        print("\nStopping...")
    finally:
        browser.stop()
        print("Bye!")


if __name__ == "__main__":
    main()
