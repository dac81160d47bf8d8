"""Test configuration and fixtures"""

from unittest.mock import Mock

import pytest

from spotify_suite.core.config import Credentials
from spotify_suite.core.pacing import Pacer, no_delay
from spotify_suite.spotify.client import SpotifyClient


def make_track_item(
    track_id="track_1",
    name="Yesterday",
    artists=("The Beatles",),
    album_name="Help!",
    album_type="album",
    release_date="1965-08-06",
    album_id="album_1",
    duration_ms=125666,
    popularity=78,
):
    """Build a track object as returned by the Spotify API."""
    return {
        "id": track_id,
        "name": name,
        "artists": [{"name": artist} for artist in artists],
        "album": {
            "id": album_id,
            "name": album_name,
            "album_type": album_type,
            "release_date": release_date,
        },
        "duration_ms": duration_ms,
        "popularity": popularity,
    }


def make_playlist_item(
    playlist_id="pl_1",
    name="My Playlist",
    owner_id="alice",
    display_name="Alice",
    total=10,
    public=True,
    description="",
):
    """Build a playlist object as returned by the Spotify API."""
    return {
        "id": playlist_id,
        "name": name,
        "owner": {"id": owner_id, "display_name": display_name},
        "public": public,
        "tracks": {"total": total},
        "description": description,
        "external_urls": {"spotify": f"https://open.spotify.com/playlist/{playlist_id}"},
    }


@pytest.fixture
def mock_client():
    """SpotifyClient double with no network access"""
    return Mock(spec=SpotifyClient)


@pytest.fixture
def instant_pacer():
    """Pacer that never sleeps"""
    return Pacer(no_delay())


@pytest.fixture
def recording_pacer():
    """Pacer with a fake clock that records requested sleeps"""
    sleeps = []
    pacer = Pacer(sleep=sleeps.append, clock=lambda: 0.0)
    pacer.sleeps = sleeps
    return pacer


@pytest.fixture
def credentials():
    """Application credentials for tests"""
    return Credentials(client_id="test_client_id", client_secret="test_client_secret")


@pytest.fixture
def spotify_env(monkeypatch):
    """Set Spotify credentials in the environment"""
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "test_client_id")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "test_client_secret")


@pytest.fixture
def no_spotify_env(monkeypatch):
    """Remove Spotify credentials from the environment"""
    monkeypatch.delenv("SPOTIFY_CLIENT_ID", raising=False)
    monkeypatch.delenv("SPOTIFY_CLIENT_SECRET", raising=False)


@pytest.fixture
def write_csv_file(tmp_path):
    """Write a semicolon-separated CSV file and return its path"""
    def _write(lines, name="input.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
