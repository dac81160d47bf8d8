"""Tests for playlist creation and chunked track adds"""

from datetime import date

import pytest

from conftest import make_playlist_item
from spotify_suite.core.exceptions import ApiError, AuthError, NetworkError, SpotifySuiteError
from spotify_suite.spotify.writer import PlaylistWriter, playlist_description


class TestCreatePlaylist:
    """Test playlist creation"""

    def test_create_playlist(self, mock_client, instant_pacer):
        mock_client.create_playlist.return_value = make_playlist_item("new_1", "Originals")
        writer = PlaylistWriter(mock_client, pacer=instant_pacer)

        playlist = writer.create_playlist("alice", "Originals", is_public=False)

        assert playlist.id == "new_1"
        args, kwargs = mock_client.create_playlist.call_args
        assert args == ("alice", "Originals")
        assert kwargs["public"] is False
        assert kwargs["description"].startswith("Created via Spotify Suite - ")

    def test_description_date(self):
        assert playlist_description(date(2024, 3, 9)) == "Created via Spotify Suite - 09.03.2024"

    def test_current_user_id(self, mock_client, instant_pacer):
        mock_client.current_user.return_value = {"id": "alice"}
        assert PlaylistWriter(mock_client, pacer=instant_pacer).current_user_id() == "alice"

    def test_current_user_without_id(self, mock_client, instant_pacer):
        mock_client.current_user.return_value = {}
        with pytest.raises(SpotifySuiteError):
            PlaylistWriter(mock_client, pacer=instant_pacer).current_user_id()


class TestAddTracks:
    """Test chunking and result accounting"""

    def test_chunks_of_100_as_uris(self, mock_client, instant_pacer):
        ids = [f"id{i}" for i in range(250)]
        writer = PlaylistWriter(mock_client, pacer=instant_pacer)

        result = writer.add_tracks("pl_1", ids)

        sizes = [len(call.args[1]) for call in mock_client.add_items.call_args_list]
        assert sizes == [100, 100, 50]
        first_chunk = mock_client.add_items.call_args_list[0].args[1]
        assert first_chunk[0] == "spotify:track:id0"
        assert result.successful == 250
        assert result.failed == 0
        assert result.skipped == 0

    def test_invalid_ids_are_skipped_and_never_sent(self, mock_client, instant_pacer):
        ids = ["a", "", None, "  ", 42, "b"]
        writer = PlaylistWriter(mock_client, pacer=instant_pacer)

        result = writer.add_tracks("pl_1", ids)

        mock_client.add_items.assert_called_once_with(
            "pl_1", ["spotify:track:a", "spotify:track:b"]
        )
        assert result.successful == 2
        assert result.skipped == 4
        assert result.total == len(ids)

    @pytest.mark.parametrize("error", [
        ApiError("Payload too large", status=413),
        NetworkError("connection reset"),
        AuthError("Access token rejected", status=401),
    ])
    def test_failed_chunk_counts_whole_chunk(self, mock_client, instant_pacer, error):
        mock_client.add_items.side_effect = [None, error, None]
        ids = [f"id{i}" for i in range(210)] + [""]
        writer = PlaylistWriter(mock_client, pacer=instant_pacer)

        result = writer.add_tracks("pl_1", ids)

        assert result.successful == 110
        assert result.failed == 100
        assert result.skipped == 1
        assert result.successful + result.failed + result.skipped == len(ids)

    def test_pause_between_chunks(self, mock_client, recording_pacer):
        writer = PlaylistWriter(mock_client, pacer=recording_pacer)

        writer.add_tracks("pl_1", [f"id{i}" for i in range(300)])

        assert recording_pacer.sleeps == [0.1, 0.1]

    def test_nothing_to_add(self, mock_client, instant_pacer):
        result = PlaylistWriter(mock_client, pacer=instant_pacer).add_tracks("pl_1", [])

        mock_client.add_items.assert_not_called()
        assert result.total == 0
