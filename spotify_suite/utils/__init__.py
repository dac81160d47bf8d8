"""
Utility functions for spotify-suite.

This module provides small helpers used across the application:
    - Spotify release date parsing (year, year-month, full date)
    - Lenient integer parsing for CSV year columns
    - Chunking of id lists for batched API calls
    - Duration formatting

Usage:
    from spotify_suite.utils import parse_release_date, chunked, format_duration
"""

import re
from datetime import date
from typing import Iterator, Sequence, TypeVar

T = TypeVar("T")


_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")


def parse_release_date(release_date: str | None) -> date | None:
    """
    Parse a Spotify release date.

    Spotify reports dates with year, month or day precision:
    "1965", "1965-08", "1965-08-06". Missing parts default to 1.

    Returns:
        A date, or None if the value is empty or unparsable.

    Examples:
        parse_release_date("1965-08-06")  # date(1965, 8, 6)
        parse_release_date("1965")        # date(1965, 1, 1)
        parse_release_date("0000")        # None
    """
    if not release_date:
        return None

    parts = release_date.strip().split("-")
    if not 1 <= len(parts) <= 3:
        return None

    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        return None

    numbers += [1] * (3 - len(numbers))
    try:
        return date(numbers[0], numbers[1], numbers[2])
    except ValueError:
        return None


def release_year(release_date: str | None) -> int | None:
    """Return the year of a Spotify release date, or None if unparsable."""
    parsed = parse_release_date(release_date)
    return parsed.year if parsed else None


def parse_leading_int(value: str | None) -> int | None:
    """
    Parse the leading integer of a string.

    Trailing garbage is ignored, so "1970 (remaster)" gives 1970.
    Returns None if the string does not start with a number.
    """
    if value is None:
        return None
    match = _LEADING_INT_PATTERN.match(value)
    return int(match.group(1)) if match else None


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """
    Yield consecutive slices of at most `size` items.

    Example:
        list(chunked([1, 2, 3, 4, 5], 2))  # [[1, 2], [3, 4], [5]]
    """
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def format_duration(duration_ms: int) -> str:
    """
    Format a duration in milliseconds as m:ss.

    Example:
        format_duration(233000)  # "3:53"
    """
    total_seconds = max(0, duration_ms) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"
