"""Unit tests for the binary album cache."""

import struct

import pytest

from albumlib import Album, CacheStore
from albumlib.cache_store import encode_albums

ROOT = "/srv/Music"


@pytest.fixture
def store(tmp_path):
    return CacheStore(tmp_path / "cache" / "album-browser-cache.dat")


class TestRoundTrip:
    def test_load_returns_saved_albums(self, store, sample_albums):
        assert store.save(ROOT, sample_albums)
        assert store.load(ROOT) == sample_albums

    def test_creates_missing_cache_directory(self, store, sample_albums):
        store.save(ROOT, sample_albums)
        assert store.cache_path.is_file()

    def test_save_replaces_previous_contents(self, store, sample_albums):
        store.save(ROOT, sample_albums)
        store.save(ROOT, sample_albums[:1])
        assert store.load(ROOT) == sample_albums[:1]

    def test_empty_collection(self, store):
        store.save(ROOT, [])
        assert store.load(ROOT) == []

    def test_undecodable_file_names_survive(self, store):
        name = b"/srv/Music/caf\xe9".decode("utf-8", "surrogateescape")
        album = Album(directory_path=name, title="caf", audio_files=(name + "/01.mp3",))
        store.save(ROOT, [album])
        assert store.load(ROOT) == [album]


class TestLayout:
    def test_header_and_first_album_are_little_endian(self, sample_albums):
        data = encode_albums(ROOT, sample_albums[:1])
        assert struct.unpack_from("<I", data, 0) == (1,)
        assert struct.unpack_from("<I", data, 4) == (len(ROOT),)
        assert data[8:8 + len(ROOT)] == ROOT.encode()
        assert struct.unpack_from("<I", data, 8 + len(ROOT)) == (1,)

    def test_exact_bytes_for_single_album(self):
        album = Album(
            directory_path="/m/a", title="A", artist="", year=1999,
            cover_art_path="", audio_files=("/m/a/1.mp3",),
        )
        expected = b"".join([
            struct.pack("<I", 1),
            struct.pack("<I", 2), b"/m",
            struct.pack("<I", 1),
            struct.pack("<I", 4), b"/m/a",
            struct.pack("<I", 1), b"A",
            struct.pack("<I", 0),
            struct.pack("<i", 1999),
            struct.pack("<I", 0),
            struct.pack("<I", 1),
            struct.pack("<I", 10), b"/m/a/1.mp3",
        ])
        assert encode_albums("/m", [album]) == expected


class TestInvalidation:
    def test_missing_file_is_a_miss(self, store):
        assert store.load(ROOT) == []

    def test_other_root_is_a_miss(self, store, sample_albums):
        store.save(ROOT, sample_albums)
        assert store.load("/srv/Other") == []
        assert store.load(ROOT + "/") == []

    def test_unknown_version_is_a_miss(self, store, sample_albums):
        store.save(ROOT, sample_albums)
        data = bytearray(store.cache_path.read_bytes())
        data[0:4] = struct.pack("<I", 2)
        store.cache_path.write_bytes(bytes(data))
        assert store.load(ROOT) == []

    @pytest.mark.parametrize("cut", [0, 3, 10, 30, -1])
    def test_truncated_file_is_a_miss(self, store, sample_albums, cut):
        store.save(ROOT, sample_albums)
        data = store.cache_path.read_bytes()
        store.cache_path.write_bytes(data[:cut])
        assert store.load(ROOT) == []

    def test_unreadable_path_is_a_miss(self, tmp_path):
        directory = tmp_path / "is-a-dir"
        directory.mkdir()
        assert CacheStore(directory).load(ROOT) == []

    def test_failed_save_reports_false(self, tmp_path, sample_albums):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        assert not CacheStore(blocker / "cache.dat").save(ROOT, sample_albums)
