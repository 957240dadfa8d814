from typing import Iterable

from .album import Album


def matches(album: Album, query: str) -> bool:
    """Tells whether an album matches the search text.

    Title, artist and directory path are compared case-insensitively. The year is compared
    against the query as typed, and only when it is known.

    Args:
        album: The album to test.
        query: The search text; empty matches everything.

    Returns:
        bool: True if the album should be visible for this query.
    """
    if not query:
        return True

    needle = query.lower()
    if needle in album.title.lower():
        return True
    if needle in album.artist.lower():
        return True
    if needle in album.directory_path.lower():
        return True
    return album.year != 0 and query in str(album.year)


def filter_albums(albums: Iterable[Album], query: str) -> list[Album]:
    """Returns the albums matching query, in their original order."""
    return [album for album in albums if matches(album, query)]
