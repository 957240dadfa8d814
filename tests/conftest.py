"""Shared fixtures for building small music libraries on disk."""

import struct
from pathlib import Path

import pytest

from albumlib import Album


def make_album_dir(root: Path, relative: str, files=("01 - Intro.flac",)) -> Path:
    directory = root / relative
    directory.mkdir(parents=True, exist_ok=True)
    for name in files:
        (directory / name).write_bytes(b"\x00" * 16)
    return directory


def flac_with_picture(image: bytes, mime: str = "image/jpeg") -> bytes:
    """Builds a minimal FLAC stream: STREAMINFO followed by one PICTURE block."""
    streaminfo = struct.pack(">HH", 4096, 4096) + b"\x00" * 6
    streaminfo += struct.pack(">Q", (44100 << 44) | (1 << 41) | (15 << 36))
    streaminfo += b"\x00" * 16

    mime_raw = mime.encode("ascii")
    picture = struct.pack(">II", 3, len(mime_raw)) + mime_raw
    picture += struct.pack(">I", 0)  # empty description
    picture += struct.pack(">IIII", 1, 1, 24, 0)
    picture += struct.pack(">I", len(image)) + image

    def block(block_type: int, payload: bytes, last: bool) -> bytes:
        header = (0x80 if last else 0) | block_type
        return bytes([header]) + len(payload).to_bytes(3, "big") + payload

    return b"fLaC" + block(0, streaminfo, False) + block(6, picture, True)


class RecordingPlaylist:
    def __init__(self):
        self.calls = []

    def enqueue(self, paths, replace):
        self.calls.append((list(paths), replace))


@pytest.fixture
def music_root(tmp_path):
    root = tmp_path / "Music"
    root.mkdir()
    return root


@pytest.fixture
def playlist():
    return RecordingPlaylist()


@pytest.fixture
def sample_albums():
    return [
        Album(
            directory_path="/srv/Music/Pink Floyd/(1979) The Wall",
            title="The Wall",
            artist="Pink Floyd",
            year=1979,
            cover_art_path="/srv/Music/Pink Floyd/(1979) The Wall/cover.jpg",
            audio_files=(
                "/srv/Music/Pink Floyd/(1979) The Wall/01 - In the Flesh.flac",
                "/srv/Music/Pink Floyd/(1979) The Wall/02 - The Thin Ice.flac",
            ),
        ),
        Album(
            directory_path="/srv/Music/Portishead/(1994) Dummy",
            title="Dummy",
            artist="Portishead",
            year=1994,
            audio_files=("/srv/Music/Portishead/(1994) Dummy/01 - Mysterons.mp3",),
        ),
        Album(
            directory_path="/srv/Music/Björk/Homogenic",
            title="Homogenic",
            artist="Björk",
            audio_files=("/srv/Music/Björk/Homogenic/01 - Hunter.ogg",),
        ),
    ]
