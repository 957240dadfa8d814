"""
Exceptions raised inside the albumlib package.
"""


class AlbumLibError(Exception):
    """Base exception for all albumlib errors."""
    pass


class CacheFormatError(AlbumLibError):
    """Raised when the album cache file is truncated or malformed."""

    def __init__(self, cache_path, reason: str):
        self.cache_path = cache_path
        self.reason = reason
        super().__init__(f"Invalid album cache '{cache_path}': {reason}")
