"""Utility functions for Almanac.

String and date helpers shared by the page renderers and the CLI.

Key functions:
    slugify: Turn a post title into a URL slug.
    count_words: Count words in a Markdown body.
    time_ago: Describe a date relative to today.
    format_long_date: Format a date as "Month DD, YYYY".
    format_iso_date: Format a date as YYYY-MM-DD.
"""

from __future__ import annotations

import math
import re
from datetime import date

_NON_SLUG_RE = re.compile(r"[^\w\s-]")
_SLUG_SEPARATOR_RE = re.compile(r"[\s_]+")
_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def slugify(title: str) -> str:
    """Convert a post title into a slug.

    Lowercases, drops characters that are not word characters, whitespace or
    hyphens, turns runs of whitespace and underscores into a hyphen and trims
    hyphens from both ends.

    Args:
        title: Post title.

    Returns:
        Slug, possibly empty when the title has no usable characters.

    Examples:
        >>> slugify("My First Journal Entry!")
        'my-first-journal-entry'
    """
    slug = _NON_SLUG_RE.sub("", title.lower())
    slug = _SLUG_SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")


def count_words(text: str) -> int:
    """Count whitespace-delimited words after replacing punctuation with spaces.

    Examples:
        >>> count_words("Hello, world! 2 words?")
        4
    """
    return len(_PUNCTUATION_RE.sub(" ", text).split())


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def time_ago(value: date, today: date | None = None) -> str:
    """Describe how long ago a date was.

    Each tier is computed from the day count: days below 30, then months of
    30 days below 12, then years of 365 days. Months and years round half up.

    Args:
        value: Date to describe.
        today: Reference date, defaults to date.today().

    Returns:
        Text such as "today", "3 days ago" or "2 years ago".
    """
    today = today or date.today()
    days = (today - value).days

    if days == 0:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 30:
        return f"{days} days ago"

    months = _round_half_up(days / 30.0)
    if months == 1:
        return "1 month ago"
    if months < 12:
        return f"{months} months ago"

    years = _round_half_up(days / 365.0)
    if years == 1:
        return "1 year ago"
    return f"{years} years ago"


def format_long_date(value: date) -> str:
    """Format a date as "January 05, 2024"."""
    return value.strftime("%B %d, %Y")


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")
