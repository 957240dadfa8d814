"""Unit tests for album metadata inference from directory names."""

import pytest

from albumlib import infer_metadata


class TestTitleAndYear:
    def test_year_prefix_is_split_off(self):
        meta = infer_metadata("/home/user/Music/Portishead/(1994) Dummy")
        assert meta.title == "Dummy"
        assert meta.year == 1994

    def test_plain_name_is_title(self):
        meta = infer_metadata("/home/user/Music/Portishead/Dummy")
        assert meta.title == "Dummy"
        assert meta.year == 0

    def test_multiple_spaces_after_year(self):
        meta = infer_metadata("/x/(2001)   Discovery  ")
        assert meta.title == "Discovery"
        assert meta.year == 2001

    @pytest.mark.parametrize(
        "name",
        ["(1994)Dummy", "(94) Dummy", "1994 Dummy", "(19944) Dummy", "(1994) ", "(1994)   "],
    )
    def test_non_matching_names_are_kept_verbatim(self, name):
        meta = infer_metadata(f"/x/Artist/{name}")
        assert meta.title == name
        assert meta.year == 0

    def test_trailing_separator_is_ignored(self):
        meta = infer_metadata("/music/Pink Floyd/(1979) The Wall/")
        assert meta.title == "The Wall"
        assert meta.artist == "Pink Floyd"


class TestArtist:
    def test_parent_directory_is_artist(self):
        assert infer_metadata("/data/Pink Floyd/(1979) The Wall").artist == "Pink Floyd"

    @pytest.mark.parametrize("root_name", ["Music", "music", "Albums", "albums"])
    def test_library_root_names_are_not_artists(self, root_name):
        assert infer_metadata(f"/home/user/{root_name}/Dummy").artist == ""

    def test_reserved_names_are_case_sensitive(self):
        assert infer_metadata("/home/user/MUSIC/Dummy").artist == "MUSIC"

    def test_no_parent_gives_empty_artist(self):
        assert infer_metadata("Dummy").artist == ""

    def test_directory_below_filesystem_root(self):
        meta = infer_metadata("/Dummy")
        assert meta.artist == ""
        assert meta.title == "Dummy"
