"""
Command-line interface for spotify-suite.

This module implements the CLI using Click, with rich-click for colored
help output and rich for result tables.

Commands:
    spotify-suite export -n <name> [owner]     Export a playlist found by name
    spotify-suite export -u <url>              Export a playlist by URL
    spotify-suite export -i <id>               Export a playlist by id
    spotify-suite find-albums <track> <artist> List album appearances of a track
    spotify-suite find-albums-csv <in> <out>   Add original albums to a CSV
    spotify-suite create-playlist <csv> <name> Create a playlist from a CSV
    spotify-suite check                        Check that credentials are set

Each command is also installed as its own script:
    spotify-export, spotify-find-albums, spotify-find-albums-csv,
    spotify-create-playlist

Configuration:
    SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET must be set (environment or
    .env). They are checked before any network access. An optional
    config.yaml in the current directory tunes pacing, formatting, output
    and log locations.

Exit Codes:
    0    Success
    1    Any error (configuration, authentication, API, input)
    130  Interrupted by the user
"""

import sys
from pathlib import Path
from typing import Callable, Optional

import rich_click as click
from rich.console import Console
from rich.table import Table

# Configure rich-click for better help formatting
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "spotify-suite export": [
        {
            "name": "Playlist Source",
            "options": ["--name", "--url", "--id"],
        },
        {
            "name": "Output",
            "options": ["--output-dir", "--pick-first"],
        },
    ],
}

from spotify_suite import __version__
from spotify_suite.core import (
    AuthError,
    Config,
    ConfigError,
    NotFoundError,
    Pacer,
    SpotifySuiteError,
    ValidationError,
    check_credentials,
    fixed_delay,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spotify_suite.enrichment import EnrichmentEngine
from spotify_suite.export import (
    export_tracks_to_csv,
    extract_track_ids,
    format_track_rows,
    read_csv_records,
    to_input_rows,
    validate_input_records,
    write_enriched_csv,
)
from spotify_suite.spotify import (
    PLAYLIST_MODIFY_SCOPES,
    AlbumCandidate,
    AlbumFinder,
    FirstMatchSelector,
    InteractiveSelector,
    PlaylistResolver,
    PlaylistWriter,
    SpotifyClient,
    TrackCollector,
)

logger = get_logger(__name__)


ALBUM_TYPE_CHOICES = ("album", "single", "compilation", "all")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def common_options(func: Callable) -> Callable:
    """Add --config and --verbose to a command."""
    func = click.option(
        "--verbose", "-v",
        is_flag=True,
        help="Show debug output"
    )(func)
    func = click.option(
        "--config", "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        metavar="<config.yaml>",
        help="Configuration file (default: ./config.yaml if present)"
    )(func)
    return func


def _run_command(
    config_path: Optional[Path],
    verbose: bool,
    action: Callable[[Config], None]
) -> None:
    """
    Load configuration, set up logging, run `action`, and map errors to exit codes.

    Configuration (including credentials) is loaded before `action` runs,
    so a missing credential never causes a network request.

    Raises:
        SystemExit: 1 on any error, 130 on KeyboardInterrupt.
    """
    try:
        config = load_config(config_path)
        setup_logging(config.logging.directory, verbose=verbose)
        action(config)

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        click.echo(
            "Set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET in your environment or .env file.",
            err=True
        )
        sys.exit(1)

    except AuthError as e:
        click.echo(f"Authentication error: {e.message}", err=True)
        logger.debug(f"Authentication error details: {e.details}")
        sys.exit(1)

    except NotFoundError as e:
        click.echo(f"Not found: {e.message}", err=True)
        sys.exit(1)

    except ValidationError as e:
        click.echo(f"Invalid input: {e.message}", err=True)
        sys.exit(1)

    except SpotifySuiteError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.debug(f"Error details: {e.details}")
        sys.exit(1)

    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user", err=True)
        sys.exit(130)

    except Exception as e:
        click.echo(f"Unexpected error: {e}", err=True)
        logger.exception("Unexpected error")
        sys.exit(1)

    finally:
        shutdown_logging()


def _request_pacer(config: Config) -> Pacer:
    return Pacer(fixed_delay(config.pacing.request_delay))


# =============================================================================
# Group
# =============================================================================


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """
    spotify-suite: Spotify playlist tools.

    \b
    EXPORT:
        spotify-suite export -n "My Playlist" [owner]
        spotify-suite export -u "https://open.spotify.com/playlist/..."
        spotify-suite export -i 37i9dQZF1DXcBWIGoYBM5M

    \b
    ALBUMS:
        spotify-suite find-albums "Yesterday" "The Beatles"
        spotify-suite find-albums-csv input.csv output.csv

    \b
    PLAYLISTS:
        spotify-suite create-playlist tracks.csv "My New Playlist" [--private]
    """
    if version:
        click.echo(f"spotify-suite {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


# =============================================================================
# Export
# =============================================================================


@cli.command("export", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--name", "-n",
    type=str,
    default=None,
    metavar="<name>",
    help="Playlist name (exact match, case-insensitive)"
)
@click.argument("owner", required=False)
@click.option(
    "--url", "-u",
    type=str,
    default=None,
    metavar="<url>",
    help="Playlist URL or spotify:playlist: URI"
)
@click.option(
    "--id", "-i", "playlist_id",
    type=str,
    default=None,
    metavar="<id>",
    help="Playlist id"
)
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    metavar="<dir>",
    help="Directory for the CSV file (default: output.directory)"
)
@click.option(
    "--pick-first",
    is_flag=True,
    help="Take the first match instead of asking when several playlists share the name"
)
@common_options
def export_playlist(
    name: Optional[str],
    owner: Optional[str],
    url: Optional[str],
    playlist_id: Optional[str],
    output_dir: Optional[Path],
    pick_first: bool,
    config_path: Optional[Path],
    verbose: bool
) -> None:
    """
    Export a playlist's tracks to a semicolon-separated CSV file.

    The playlist is found by exact name (optionally restricted to an OWNER
    user id), by URL, or by id. The file is named after the playlist and
    never overwrites an existing export.
    """
    sources = [(mode, value) for mode, value in (("name", name), ("url", url), ("id", playlist_id))
               if value is not None]
    if len(sources) != 1:
        raise click.UsageError("Specify exactly one of --name, --url or --id")
    if owner and sources[0][0] != "name":
        raise click.UsageError("OWNER can only be used with --name")

    mode, value = sources[0]

    def action(config: Config) -> None:
        client = SpotifyClient.from_client_credentials(config.spotify.credentials, config.spotify)
        selector = FirstMatchSelector() if pick_first else InteractiveSelector()
        playlist = PlaylistResolver(client, selector).resolve(mode, value, owner)

        tracks = TrackCollector(client).collect(playlist.id)
        if not tracks:
            logger.warning(f"Playlist '{playlist.name}' has no exportable tracks")
            return

        rows = format_track_rows(tracks, config.formatting)
        result = export_tracks_to_csv(rows, playlist.name, output_dir or config.output.directory)

        click.echo(f"Exported {result.track_count} tracks from '{playlist.name}'")
        click.echo(f"File: {result.full_path}")

    _run_command(config_path, verbose, action)


# =============================================================================
# Album Finder
# =============================================================================


def build_albums_table(track_name: str, artist_name: str, candidates: list[AlbumCandidate]) -> Table:
    """Build the result table for find-albums."""
    table = Table(title=f"Albums containing '{track_name}' by {artist_name}")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Album")
    table.add_column("Type")
    table.add_column("Release Date")
    table.add_column("Track")
    table.add_column("Artists")
    table.add_column("Track ID")

    for index, candidate in enumerate(candidates, start=1):
        table.add_row(
            str(index),
            candidate.album_name,
            candidate.album_type,
            candidate.release_date,
            candidate.track_name,
            candidate.track_artists_display,
            candidate.track_id,
        )
    return table


def release_span(candidates: list[AlbumCandidate]) -> tuple[int, int] | None:
    """Return (earliest, latest) known release years, or None."""
    years = [c.release_year for c in candidates if c.release_year > 0]
    if not years:
        return None
    return min(years), max(years)


@cli.command("find-albums", context_settings=CONTEXT_SETTINGS)
@click.argument("track_name")
@click.argument("artist_name")
@click.option(
    "--type", "album_type",
    type=click.Choice(ALBUM_TYPE_CHOICES, case_sensitive=False),
    default="all",
    show_default=True,
    help="Only show this album type"
)
@click.option(
    "--before-year",
    type=int,
    default=None,
    metavar="<year>",
    help="Only show releases before this year"
)
@common_options
def find_albums(
    track_name: str,
    artist_name: str,
    album_type: str,
    before_year: Optional[int],
    config_path: Optional[Path],
    verbose: bool
) -> None:
    """
    List the albums TRACK_NAME by ARTIST_NAME appears on, earliest first.
    """
    if not track_name.strip() or not artist_name.strip():
        raise click.UsageError("TRACK_NAME and ARTIST_NAME must not be empty")

    def action(config: Config) -> None:
        client = SpotifyClient.from_client_credentials(config.spotify.credentials, config.spotify)
        finder = AlbumFinder(client, config.formatting.date_format)
        candidates = finder.get_album_candidates(
            track_name.strip(),
            artist_name.strip(),
            album_type=None if album_type.lower() == "all" else album_type,
            before_year=before_year,
        )

        if not candidates:
            click.echo(f"No albums found for '{track_name}' by {artist_name}")
            return

        console = Console()
        console.print(build_albums_table(track_name, artist_name, candidates))

        click.echo(f"Total albums found: {len(candidates)}")
        span = release_span(candidates)
        if span:
            earliest, latest = span
            click.echo(f"Earliest release: {earliest}")
            click.echo(f"Latest release: {latest}")
            click.echo(f"Release span: {latest - earliest} years")

    _run_command(config_path, verbose, action)


# =============================================================================
# Batch Enrichment
# =============================================================================


@cli.command("find-albums-csv", context_settings=CONTEXT_SETTINGS)
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@common_options
def find_albums_csv(
    input_file: Path,
    output_file: Path,
    config_path: Optional[Path],
    verbose: bool
) -> None:
    """
    Add the earliest original album to every row of INPUT_FILE.

    INPUT_FILE must be semicolon-separated with the columns Track Name,
    Artist Name, Release Year and Spotify Track ID. OUTPUT_FILE gets the
    same rows plus New Track Name, New Album Name, New Album Release Year
    and New Track Spotify ID.
    """
    def action(config: Config) -> None:
        records = read_csv_records(input_file)
        validation = validate_input_records(records)
        logger.info(f"Loaded {validation.record_count} rows from {input_file}")

        client = SpotifyClient.from_client_credentials(config.spotify.credentials, config.spotify)
        engine = EnrichmentEngine(
            AlbumFinder(client, config.formatting.date_format),
            pacer=_request_pacer(config),
            progress_interval=config.pacing.progress_interval,
        )
        result = engine.enrich(to_input_rows(records))

        written = write_enriched_csv(result.rows, output_file)

        click.echo("Processing complete")
        click.echo(f"Input rows: {len(records)}")
        click.echo(f"Output rows: {written}")
        click.echo(f"Albums found: {result.found}")
        click.echo(f"Success rate: {result.success_rate:.1f}%")
        click.echo(f"Output file: {output_file}")

    _run_command(config_path, verbose, action)


# =============================================================================
# Playlist Creation
# =============================================================================


@cli.command("create-playlist", context_settings=CONTEXT_SETTINGS)
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("playlist_name")
@click.option(
    "--private",
    is_flag=True,
    help="Create a private playlist"
)
@common_options
def create_playlist(
    input_file: Path,
    playlist_name: str,
    private: bool,
    config_path: Optional[Path],
    verbose: bool
) -> None:
    """
    Create PLAYLIST_NAME from the Spotify Track ID column of INPUT_FILE.

    Opens the browser to authorize playlist changes on your account.
    """
    if not playlist_name.strip():
        raise click.UsageError("PLAYLIST_NAME must not be empty")

    def action(config: Config) -> None:
        records = read_csv_records(input_file)
        extraction = extract_track_ids(records)
        if extraction.invalid_rows:
            logger.warning(f"{len(extraction.invalid_rows)} rows have no Spotify Track ID")
        if not extraction.track_ids:
            raise ValidationError("No valid track IDs found in the CSV file")

        client = SpotifyClient.from_user_authorization(
            config.spotify.credentials,
            scopes=PLAYLIST_MODIFY_SCOPES,
            settings=config.spotify,
        )
        writer = PlaylistWriter(client, pacer=_request_pacer(config))

        user_id = writer.current_user_id()
        playlist = writer.create_playlist(user_id, playlist_name.strip(), is_public=not private)
        result = writer.add_tracks(playlist.id, extraction.track_ids)

        click.echo(f"Playlist created: {playlist.name}")
        if playlist.url:
            click.echo(f"URL: {playlist.url}")
        click.echo(f"Tracks added: {result.successful}")
        if result.failed:
            click.echo(f"Tracks failed: {result.failed}")
        if result.skipped:
            click.echo(f"Tracks skipped: {result.skipped}")

    _run_command(config_path, verbose, action)


# =============================================================================
# Environment Check
# =============================================================================


@cli.command("check", context_settings=CONTEXT_SETTINGS)
def check() -> None:
    """Check that the Spotify credentials are configured (no network access)."""
    missing = check_credentials()
    if missing:
        click.echo(f"Missing required environment variables: {', '.join(missing)}", err=True)
        sys.exit(1)
    click.echo("All required environment variables are set")


def main() -> None:
    """Entry point for `spotify-suite`."""
    cli()


def export_main() -> None:
    """Entry point for `spotify-export`."""
    export_playlist()


def find_albums_main() -> None:
    """Entry point for `spotify-find-albums`."""
    find_albums()


def find_albums_csv_main() -> None:
    """Entry point for `spotify-find-albums-csv`."""
    find_albums_csv()


def create_playlist_main() -> None:
    """Entry point for `spotify-create-playlist`."""
    create_playlist()


if __name__ == "__main__":
    main()
