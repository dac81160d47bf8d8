"""Tests for album finding"""

from conftest import make_track_item
from spotify_suite.spotify.albums import (
    AlbumFinder,
    build_track_query,
    filter_candidates,
    sort_candidates,
)
from spotify_suite.spotify.models import AlbumCandidate


def track_search(*items):
    return {"tracks": {"items": list(items)}}


def candidate(album_name, year, album_type="Album"):
    return AlbumCandidate(
        track_name="Song",
        album_name=album_name,
        album_id="",
        album_type=album_type,
        release_date=str(year) if year else "Unknown",
        release_year=year,
        track_artists=("Artist",),
        track_id="",
    )


class TestAlbumCandidate:
    """Test candidate construction from search results"""

    def test_from_spotify_api(self):
        item = make_track_item(
            "t1", "Yesterday", ("The Beatles",), "Help!", "album", "1965-08-06", "alb1"
        )

        result = AlbumCandidate.from_spotify_api(item)

        assert result.album_type == "Album"
        assert result.release_date == "06.08.1965"
        assert result.release_year == 1965
        assert result.album_id == "alb1"
        assert result.track_id == "t1"
        assert result.track_artists_display == "The Beatles"

    def test_year_precision_date(self):
        item = make_track_item(release_date="1965")
        assert AlbumCandidate.from_spotify_api(item).release_year == 1965

    def test_unparsable_date(self):
        item = make_track_item(release_date="soon")
        result = AlbumCandidate.from_spotify_api(item)

        assert result.release_year == 0
        assert result.release_date == "Unknown"

    def test_missing_album(self):
        item = make_track_item()
        item["album"] = None
        result = AlbumCandidate.from_spotify_api(item)

        assert result.album_type == "Unknown"
        assert result.album_name == "Unknown Album"
        assert result.release_year == 0

    def test_custom_date_format(self):
        item = make_track_item(release_date="1965-08-06")
        assert AlbumCandidate.from_spotify_api(item, "%Y-%m-%d").release_date == "1965-08-06"


class TestSortAndFilter:
    """Test chronological ordering and filters"""

    def test_sort_by_year_then_name(self):
        candidates = [
            candidate("Zebra", 1970),
            candidate("beta", 1965),
            candidate("Alpha", 1965),
            candidate("Unknown", 0),
        ]

        result = sort_candidates(candidates)

        assert [c.album_name for c in result] == ["Unknown", "Alpha", "beta", "Zebra"]

    def test_sort_ignores_accents(self):
        result = sort_candidates([candidate("Etoile", 1970), candidate("Éclair", 1970)])
        assert [c.album_name for c in result] == ["Éclair", "Etoile"]

    def test_before_year_excludes_zero_and_same_year(self):
        candidates = [candidate("A", 0), candidate("B", 1969), candidate("C", 1970)]

        result = filter_candidates(candidates, before_year=1970)

        assert [c.album_name for c in result] == ["B"]

    def test_type_filter_is_case_insensitive(self):
        candidates = [candidate("A", 1965, "Album"), candidate("B", 1966, "Compilation")]

        assert [c.album_name for c in filter_candidates(candidates, album_type="album")] == ["A"]
        assert [c.album_name for c in filter_candidates(candidates, album_type="COMPILATION")] == ["B"]


class TestAlbumFinder:
    """Test search and earliest-album selection"""

    def test_query_syntax(self):
        assert build_track_query("Yesterday", "The Beatles") == 'track:"Yesterday" artist:"The Beatles"'

    def test_search_filters_by_substring(self, mock_client):
        mock_client.search.return_value = track_search(
            make_track_item("1", "Yesterday - Remastered 2009", ("The Beatles",)),
            make_track_item("2", "Yesterday", ("Beatles Tribute Band",)),
            make_track_item("3", "Yesterday", ("Ray Charles",)),
            make_track_item("4", "Tomorrow", ("The Beatles",)),
            None,
        )
        finder = AlbumFinder(mock_client)

        result = finder.search_tracks("yesterday", "beatles")

        assert [c.track_id for c in result] == ["1", "2"]
        mock_client.search.assert_called_once_with(
            'track:"yesterday" artist:"beatles"', "track", limit=50
        )

    def test_find_earliest_before_year(self, mock_client):
        mock_client.search.return_value = track_search(
            make_track_item("c", "Yesterday", ("The Beatles",), "1962-1966", "compilation", "1968-04-02"),
            make_track_item("h", "Yesterday", ("The Beatles",), "Help!", "album", "1965-08-06"),
            make_track_item("s", "Yesterday", ("The Beatles",), "Yesterday", "single", "1965-09-13"),
            make_track_item("l", "Yesterday", ("The Beatles",), "Love", "album", "2006-11-20"),
        )
        finder = AlbumFinder(mock_client)

        result = finder.find_earliest_before_year("Yesterday", "The Beatles", 1970)

        assert result.album_name == "Help!"
        assert result.release_year == 1965
        assert result.track_id == "h"

    def test_find_earliest_none_when_nothing_qualifies(self, mock_client):
        mock_client.search.return_value = track_search(
            make_track_item("l", "Yesterday", ("The Beatles",), "Love", "album", "2006-11-20"),
            make_track_item("x", "Yesterday", ("The Beatles",), "Mystery", "album", ""),
        )
        finder = AlbumFinder(mock_client)

        assert finder.find_earliest_before_year("Yesterday", "The Beatles", 1970) is None

    def test_get_album_candidates_sorted(self, mock_client):
        mock_client.search.return_value = track_search(
            make_track_item("b", "Song", ("Artist",), "B Side", "album", "1990"),
            make_track_item("a", "Song", ("Artist",), "A Side", "single", "1985"),
        )
        finder = AlbumFinder(mock_client)

        result = finder.get_album_candidates("Song", "Artist")

        assert [c.track_id for c in result] == ["a", "b"]
