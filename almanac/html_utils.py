"""HTML and XML utility functions for Almanac.

This module provides the string manipulation used by the Atom feed: escaping
text for XML and deriving a plain-text summary from rendered HTML.

Functions:
    escape_xml: Escape special XML characters in a string.
    strip_tags: Replace every HTML tag with a space.
    summarize: Build a short plain-text summary from HTML.
"""

from __future__ import annotations

import re

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

SUMMARY_LENGTH = 200
ELLIPSIS = "..."


def escape_xml(text: object) -> str:
    """Escape special XML characters in a string.

    Converts the following characters to their entity equivalents:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &apos;

    Args:
        text: The value to escape; non-strings are converted with str().

    Returns:
        The escaped string, safe for XML text and attribute values.

    Examples:
        >>> escape_xml("Tom & Jerry's <b>")
        'Tom &amp; Jerry&apos;s &lt;b&gt;'
    """
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def strip_tags(html: str) -> str:
    """Replace each ``<...>`` run with a single space."""
    return _TAG_RE.sub(" ", html)


def summarize(html: str, limit: int = SUMMARY_LENGTH) -> str:
    """Build a plain-text summary of rendered HTML.

    Tags become spaces, whitespace is collapsed and trimmed, and the text is
    cut to ``limit`` characters. The ellipsis is appended whenever the cut
    text is ``limit`` characters long, which includes text that was exactly
    ``limit`` characters to begin with.

    Args:
        html: Rendered HTML.
        limit: Maximum number of characters kept.

    Returns:
        Summary text, not escaped.
    """
    text = _WHITESPACE_RE.sub(" ", strip_tags(html)).strip()
    summary = text[:limit]
    if len(summary) >= limit:
        summary += ELLIPSIS
    return summary
