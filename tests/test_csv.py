"""Tests for CSV input/output, file naming and export formatting"""

import pytest

from spotify_suite.core.config import FormatConfig
from spotify_suite.core.exceptions import ValidationError
from spotify_suite.core.file_manager import generate_unique_path, sanitize_filename
from spotify_suite.enrichment.models import EnrichedRow, InputRow
from spotify_suite.export.csv_reader import (
    extract_track_ids,
    read_csv_records,
    to_input_rows,
    validate_input_records,
)
from spotify_suite.export.csv_writer import export_tracks_to_csv, write_enriched_csv
from spotify_suite.export.formatting import (
    EXPORT_COLUMNS,
    format_number,
    format_track_row,
)
from spotify_suite.spotify.models import Track


HEADER = "Track Name;Artist Name;Release Year;Spotify Track ID"


def export_row(track_id="abc", name="Yesterday"):
    return {
        "Track Name": name,
        "Artist Name": "The Beatles",
        "Album Name": "Help!",
        "Album Year": "1965",
        "Track Duration": "2:05",
        "Track Popularity": "78",
        "Spotify Track ID": track_id,
    }


# =============================================================================
# Reading
# =============================================================================


class TestReadCsvRecords:
    """Test semicolon CSV parsing"""

    def test_trims_values_and_skips_blank_lines(self, write_csv_file):
        path = write_csv_file([
            HEADER,
            " Yesterday ; The Beatles ;1970; abc ",
            "",
            ";;;",
            "Help!;The Beatles;1971;",
        ])

        records = read_csv_records(path)

        assert len(records) == 2
        assert records[0] == {
            "Track Name": "Yesterday",
            "Artist Name": "The Beatles",
            "Release Year": "1970",
            "Spotify Track ID": "abc",
        }
        assert records[1]["Spotify Track ID"] == ""

    def test_tolerates_bom(self, tmp_path):
        path = tmp_path / "excel.csv"
        path.write_bytes(("\ufeff" + HEADER + "\nYesterday;The Beatles;1970;abc\n").encode("utf-8"))

        records = read_csv_records(path)

        assert "Track Name" in records[0]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError, match="not found"):
            read_csv_records(tmp_path / "missing.csv")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes(HEADER.encode("utf-8") + b"\nG\xe9n\xe9rique;X;1970;a\n")

        with pytest.raises(ValidationError):
            read_csv_records(path)


class TestValidateInputRecords:
    """Test schema and year validation"""

    def test_valid(self):
        records = [{"Track Name": "A", "Artist Name": "B", "Release Year": "1970", "Spotify Track ID": ""}]

        result = validate_input_records(records, current_year=2024)

        assert result.record_count == 1
        assert result.invalid_years == []

    def test_empty(self):
        with pytest.raises(ValidationError, match="empty"):
            validate_input_records([])

    def test_missing_columns_are_named(self):
        records = [{"Track Name": "A", "Artist Name": "B"}]

        with pytest.raises(ValidationError) as exc_info:
            validate_input_records(records)

        assert "Release Year" in exc_info.value.message
        assert "Spotify Track ID" in exc_info.value.message

    def test_implausible_years_are_reported_not_rejected(self):
        base = {"Track Name": "A", "Artist Name": "B", "Spotify Track ID": ""}
        records = [
            {**base, "Release Year": "1970"},
            {**base, "Release Year": "1899"},
            {**base, "Release Year": "2026"},
            {**base, "Release Year": "soon"},
            {**base, "Release Year": "2025"},
        ]

        result = validate_input_records(records, current_year=2024)

        assert result.record_count == 5
        assert result.invalid_years == [2, 3, 4]

    def test_to_input_rows(self):
        records = [{"Track Name": "A", "Artist Name": "B", "Release Year": "1970"}]
        assert to_input_rows(records) == [InputRow("A", "B", "1970", "")]


class TestExtractTrackIds:
    """Test track id extraction for playlist creation"""

    def test_collects_ids_and_reports_missing(self):
        records = [
            {"Track Name": "A", "Spotify Track ID": "id1"},
            {"Track Name": "B", "Spotify Track ID": ""},
            {"Track Name": "C", "Spotify Track ID": "id3"},
        ]

        result = extract_track_ids(records)

        assert result.track_ids == ["id1", "id3"]
        assert result.invalid_rows == [2]

    def test_only_id_column_required(self):
        assert extract_track_ids([{"Spotify Track ID": "x"}]).track_ids == ["x"]

    def test_missing_id_column(self):
        with pytest.raises(ValidationError, match="Spotify Track ID"):
            extract_track_ids([{"Track Name": "A"}])


# =============================================================================
# Writing
# =============================================================================


class TestExportTracksToCsv:
    """Test playlist export files"""

    def test_writes_semicolon_crlf_utf8(self, tmp_path):
        result = export_tracks_to_csv([export_row(name="Çiçek")], "My Playlist", tmp_path)

        raw = result.full_path.read_bytes().decode("utf-8")
        lines = raw.split("\r\n")
        assert lines[0] == ";".join(EXPORT_COLUMNS)
        assert lines[1] == "Çiçek;The Beatles;Help!;1965;2:05;78;abc"
        assert result.filename == "My_Playlist.csv"
        assert result.track_count == 1

    def test_never_overwrites(self, tmp_path):
        first = export_tracks_to_csv([export_row()], "My Playlist", tmp_path)
        second = export_tracks_to_csv([export_row()], "My Playlist", tmp_path)

        assert first.filename == "My_Playlist.csv"
        assert second.filename == "My_Playlist_1.csv"
        assert first.full_path.exists()

    def test_creates_directory(self, tmp_path):
        result = export_tracks_to_csv([export_row()], "Mix", tmp_path / "nested" / "out")
        assert result.full_path.parent == (tmp_path / "nested" / "out").resolve()

    def test_no_temporary_files_left(self, tmp_path):
        export_tracks_to_csv([export_row()], "Mix", tmp_path)
        assert [p.name for p in tmp_path.iterdir()] == ["Mix.csv"]

    def test_empty_rows(self, tmp_path):
        with pytest.raises(ValidationError):
            export_tracks_to_csv([], "Mix", tmp_path)

    def test_empty_name(self, tmp_path):
        with pytest.raises(ValidationError):
            export_tracks_to_csv([export_row()], "   ", tmp_path)

    def test_missing_ids_are_written(self, tmp_path, caplog):
        result = export_tracks_to_csv([export_row(track_id="")], "Mix", tmp_path)

        assert result.track_count == 1
        assert "no Spotify Track ID" in caplog.text


class TestWriteEnrichedCsv:
    """Test enrichment output"""

    def test_eight_columns(self, tmp_path):
        rows = [
            EnrichedRow(InputRow("Yesterday", "The Beatles", "1970", "abc"),
                        "Yesterday", "Help!", "1965", "h"),
            EnrichedRow.empty(InputRow("Unknown", "Nobody", "1980", "")),
        ]
        path = tmp_path / "out" / "enriched.csv"

        count = write_enriched_csv(rows, path)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert count == 2
        assert lines[0] == (
            "Track Name;Artist Name;Release Year;Spotify Track ID;"
            "New Track Name;New Album Name;New Album Release Year;New Track Spotify ID"
        )
        assert lines[1] == "Yesterday;The Beatles;1970;abc;Yesterday;Help!;1965;h"
        assert lines[2] == "Unknown;Nobody;1980;;;;;"


# =============================================================================
# File Naming
# =============================================================================


class TestSanitizeFilename:
    """Test filename sanitization"""

    @pytest.mark.parametrize("name,expected", [
        ("My Playlist", "My_Playlist"),
        ("AC/DC: Live?", "AC_DC_Live"),
        ('a<b>c"d|e*f', "a_b_c_d_e_f"),
        ("  spaced   out  ", "spaced_out"),
        ("???", "playlist"),
        ("", "playlist"),
        ("Türkçe Şarkılar", "Türkçe_Şarkılar"),
    ])
    def test_sanitize(self, name, expected):
        assert sanitize_filename(name) == expected

    def test_truncates(self):
        assert len(sanitize_filename("x" * 300)) == 100

    def test_unique_path_counts_up(self, tmp_path):
        (tmp_path / "Mix.csv").touch()
        (tmp_path / "Mix_1.csv").touch()

        assert generate_unique_path("Mix", ".csv", tmp_path) == tmp_path / "Mix_2.csv"


# =============================================================================
# Formatting
# =============================================================================


class TestFormatting:
    """Test export row formatting"""

    @pytest.mark.parametrize("value,expected", [
        (85, "85"),
        (1234.5, "1.234,5"),
        (1234567, "1.234.567"),
        (0.125, "0,12"),
        (0, "0"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_format_number_custom_separators(self):
        assert format_number(1234.5, ",", ".") == "1,234.5"

    def test_full_row(self):
        track = Track(
            id="x",
            name="Bohemian Rhapsody",
            artist_names=("Queen",),
            album_name="A Night at the Opera",
            album_release_date="1975-11-21",
            duration_ms=233000,
            popularity=85,
        )

        row = format_track_row(track)

        assert row == {
            "Track Name": "Bohemian Rhapsody",
            "Artist Name": "Queen",
            "Album Name": "A Night at the Opera",
            "Album Year": "1975",
            "Track Duration": "3:53",
            "Track Popularity": "85",
            "Spotify Track ID": "x",
        }

    def test_multiple_artists_joined(self):
        track = Track(id="x", name="Under Pressure", artist_names=("Queen", "David Bowie"))
        assert format_track_row(track)["Artist Name"] == "Queen, David Bowie"

    def test_sentinels_for_missing_values(self):
        row = format_track_row(Track(id="x", name=""))

        assert row["Track Name"] == "Unknown Track"
        assert row["Artist Name"] == "Unknown Artist"
        assert row["Album Name"] == "Unknown Album"
        assert row["Album Year"] == ""
        assert row["Track Duration"] == ""
        assert row["Track Popularity"] == ""

    def test_zero_popularity_is_kept(self):
        row = format_track_row(Track(id="x", name="Deep Cut", popularity=0))
        assert row["Track Popularity"] == "0"

    def test_custom_separators(self):
        track = Track(id="x", name="Song", popularity=85)
        row = format_track_row(track, FormatConfig(grouping_separator=",", decimal_separator="."))
        assert row["Track Popularity"] == "85"
