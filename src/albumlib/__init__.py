from .album import AUDIO_EXTENSIONS, IMAGE_EXTENSIONS, Album
from .browser import AlbumBrowser
from .cache_store import CACHE_FILE_NAME, CacheStore
from .filtering import filter_albums, matches
from .metadata import AlbumMetadata, infer_metadata
from .playlist import AddMode, PlaylistTarget
from ._builder import AlbumBuilder
from ._cover import CoverArtResolver
from ._scanner import TreeScanner

__all__ = [
    "AUDIO_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    "CACHE_FILE_NAME",
    "AddMode",
    "Album",
    "AlbumBrowser",
    "AlbumBuilder",
    "AlbumMetadata",
    "CacheStore",
    "CoverArtResolver",
    "PlaylistTarget",
    "TreeScanner",
    "filter_albums",
    "infer_metadata",
    "matches",
]
