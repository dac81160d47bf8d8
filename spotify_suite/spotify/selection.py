"""
Playlist disambiguation strategies.

A name search can return several playlists with exactly the same name.
The resolver hands the candidates to a selector, which returns one of them
or raises ValidationError. Selectors are plain callables:

    selector(candidates: Sequence[Playlist]) -> Playlist

Available strategies:
    InteractiveSelector  Show a table, ask for a 1-based choice (CLI default)
    FirstMatchSelector   Take the first candidate (scripts)
    FailFastSelector     Refuse to guess (non-interactive runs)
"""

from typing import Callable, Sequence

import rich_click as click
from rich.console import Console
from rich.table import Table

from spotify_suite.core.exceptions import ValidationError
from spotify_suite.spotify.models import Playlist


PlaylistSelector = Callable[[Sequence[Playlist]], Playlist]

_MAX_DESCRIPTION_LENGTH = 60


def build_candidates_table(candidates: Sequence[Playlist]) -> Table:
    """Build a rich table listing playlist candidates with 1-based indexes."""
    table = Table(title=f"Found {len(candidates)} playlists with this name")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Name")
    table.add_column("Owner")
    table.add_column("Tracks", justify="right")
    table.add_column("Followers", justify="right")
    table.add_column("Visibility")
    table.add_column("Description")

    for index, playlist in enumerate(candidates, start=1):
        description = playlist.description
        if len(description) > _MAX_DESCRIPTION_LENGTH:
            description = description[:_MAX_DESCRIPTION_LENGTH - 3] + "..."
        owner = playlist.owner_display_name
        if owner != playlist.owner_id:
            owner = f"{owner} ({playlist.owner_id})"
        table.add_row(
            str(index),
            playlist.name,
            owner,
            str(playlist.track_total),
            str(playlist.followers_total),
            playlist.visibility,
            description,
        )
    return table


def parse_selection(raw: str, count: int) -> int:
    """
    Parse a 1-based selection into a 0-based index.

    Raises:
        ValidationError: If the input is not a number or out of range.
    """
    value = raw.strip()
    if not value.isdecimal():
        raise ValidationError(
            f"Invalid selection '{raw}': enter a number between 1 and {count}",
            details={"selection": raw, "count": count}
        )
    choice = int(value)
    if not 1 <= choice <= count:
        raise ValidationError(
            f"Selection {choice} is out of range: enter a number between 1 and {count}",
            details={"selection": choice, "count": count}
        )
    return choice - 1


class InteractiveSelector:
    """
    Ask the user to pick one playlist.

    Prints every candidate (owner, track count, followers, visibility,
    description) and reads a 1-based choice. There is no default and no
    second attempt: invalid input raises ValidationError.
    """

    def __init__(
        self,
        console: Console | None = None,
        prompt: Callable[[str], str] | None = None
    ) -> None:
        self.console = console or Console()
        self.prompt = prompt or (lambda text: click.prompt(text, type=str))

    def __call__(self, candidates: Sequence[Playlist]) -> Playlist:
        self.console.print(build_candidates_table(candidates))
        raw = self.prompt(f"Select a playlist (1-{len(candidates)})")
        return candidates[parse_selection(raw, len(candidates))]


class FirstMatchSelector:
    """Pick the first candidate in search order."""

    def __call__(self, candidates: Sequence[Playlist]) -> Playlist:
        return candidates[0]


class FailFastSelector:
    """Refuse to choose between several candidates."""

    def __call__(self, candidates: Sequence[Playlist]) -> Playlist:
        owners = ", ".join(playlist.owner_id for playlist in candidates)
        raise ValidationError(
            f"{len(candidates)} playlists match this name (owners: {owners}). "
            "Specify the owner or use the playlist URL/ID instead.",
            details={"candidate_ids": [playlist.id for playlist in candidates]}
        )
