"""Tests for playlist track collection"""

import pytest

from conftest import make_track_item
from spotify_suite.core.exceptions import ApiError
from spotify_suite.spotify.collector import ITEM_FIELDS, TrackCollector


def page(total, *tracks):
    return {"total": total, "items": [{"track": track} for track in tracks]}


class TestTrackCollector:
    """Test pagination and filtering"""

    def test_pages_until_total(self, mock_client, instant_pacer):
        pages = {
            0: page(120, *[make_track_item(f"t{i}") for i in range(50)]),
            50: page(120, *[make_track_item(f"t{i}") for i in range(50, 100)]),
            100: page(120, *[make_track_item(f"t{i}") for i in range(100, 120)]),
        }
        mock_client.playlist_items.side_effect = (
            lambda playlist_id, offset, limit, fields: pages[offset]
        )
        collector = TrackCollector(mock_client, pacer=instant_pacer)

        tracks = collector.collect("pl_1")

        offsets = [call.kwargs["offset"] for call in mock_client.playlist_items.call_args_list]
        assert offsets == [0, 50, 100]
        assert len(tracks) == 120
        assert tracks[0].id == "t0"
        assert tracks[-1].id == "t119"

    def test_requests_field_projection(self, mock_client, instant_pacer):
        mock_client.playlist_items.return_value = page(1, make_track_item())
        TrackCollector(mock_client, pacer=instant_pacer).collect("pl_1")

        mock_client.playlist_items.assert_called_once_with(
            "pl_1", offset=0, limit=50, fields=ITEM_FIELDS
        )

    def test_drops_null_and_idless_tracks(self, mock_client, instant_pacer):
        mock_client.playlist_items.return_value = {
            "total": 4,
            "items": [
                {"track": make_track_item("a")},
                {"track": None},
                {"track": make_track_item(None)},
                None,
            ],
        }

        tracks = TrackCollector(mock_client, pacer=instant_pacer).collect("pl_1")

        assert [t.id for t in tracks] == ["a"]

    def test_first_total_is_authoritative(self, mock_client, instant_pacer):
        responses = [
            page(60, *[make_track_item(f"t{i}") for i in range(50)]),
            page(500, *[make_track_item(f"t{i}") for i in range(50, 60)]),
        ]
        mock_client.playlist_items.side_effect = responses

        tracks = TrackCollector(mock_client, pacer=instant_pacer).collect("pl_1")

        assert mock_client.playlist_items.call_count == 2
        assert len(tracks) == 60

    def test_empty_playlist(self, mock_client, instant_pacer):
        mock_client.playlist_items.return_value = {"total": 0, "items": []}

        assert TrackCollector(mock_client, pacer=instant_pacer).collect("pl_1") == []
        assert mock_client.playlist_items.call_count == 1

    def test_missing_items_raises(self, mock_client, instant_pacer):
        mock_client.playlist_items.return_value = {"total": 3}

        with pytest.raises(ApiError):
            TrackCollector(mock_client, pacer=instant_pacer).collect("pl_1")

    def test_deduplicate(self, mock_client, instant_pacer):
        mock_client.playlist_items.return_value = page(
            3, make_track_item("a"), make_track_item("b"), make_track_item("a")
        )
        collector = TrackCollector(mock_client, pacer=instant_pacer)

        assert [t.id for t in collector.collect("pl_1")] == ["a", "b", "a"]
        assert [t.id for t in collector.collect("pl_1", deduplicate=True)] == ["a", "b"]

    def test_track_fields(self, mock_client, instant_pacer):
        mock_client.playlist_items.return_value = page(
            1,
            make_track_item(
                "x", "Bohemian Rhapsody", ("Queen",), "A Night at the Opera",
                release_date="1975-11-21", duration_ms=354320, popularity=85,
            ),
        )

        track = TrackCollector(mock_client, pacer=instant_pacer).collect("pl_1")[0]

        assert track.name == "Bohemian Rhapsody"
        assert track.artist_names == ("Queen",)
        assert track.album_name == "A Night at the Opera"
        assert track.album_release_date == "1975-11-21"
        assert track.duration_ms == 354320
        assert track.popularity == 85
