"""Tests for the Album record and file classification helpers."""

import dataclasses
from pathlib import Path

import pytest

from albumlib import Album
from albumlib.album import is_audio_file, is_hidden, is_image_file


class TestAlbum:
    def test_is_immutable(self, sample_albums):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_albums[0].title = "Animals"

    def test_audio_files_are_frozen_to_tuple(self):
        album = Album(directory_path="/a", title="a", audio_files=["/a/2.mp3", "/a/1.mp3"])
        assert album.audio_files == ("/a/2.mp3", "/a/1.mp3")

    def test_display_helpers(self):
        album = Album(directory_path="/m/x", title="", artist="Air", cover_art_path="")
        assert album.display_title == "/m/x"
        assert album.display_artist == "Air"
        assert not album.has_cover_art
        assert Album(directory_path="/m/x", title="X", cover_art_path="/c.jpg").has_cover_art


class TestClassification:
    @pytest.mark.parametrize("name", ["01.FLAC", "a.mp3", "b.Opus", "c.wv", "d.ape"])
    def test_audio(self, name):
        assert is_audio_file(Path(name))

    @pytest.mark.parametrize("name", ["a.cue", "a.log", "._a.flac", ".a.mp3", "flac"])
    def test_not_audio(self, name):
        assert not is_audio_file(Path(name))

    def test_images(self):
        assert is_image_file(Path("Cover.JPEG"))
        assert not is_image_file(Path("._cover.jpg"))

    def test_hidden(self):
        assert is_hidden("._track.flac")
        assert is_hidden(".DS_Store")
        assert not is_hidden("track.flac")
