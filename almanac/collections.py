"""Post and tag collections for Almanac.

Key names:
- PostCollection: Sequence of posts with date sorting and tag listing.
- TagColors: Tag to badge colour mapping with a fallback colour.
- assign_colors: Cycle a palette over the sorted tags.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from .config import DEFAULT_PALETTE
from .content import Post

DEFAULT_TAG_COLOR = "#666"


class PostCollection(Sequence[Post]):
    """Lightweight helper for working with lists of Posts."""

    def __init__(self, posts: Iterable[Post]):
        self._posts = list(posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __len__(self) -> int:
        return len(self._posts)

    def __getitem__(self, item):
        return self._posts[item]

    def sorted(self) -> PostCollection:
        """Sort posts by date, newest first.

        The sort is stable and uses no secondary key: posts sharing a date
        keep their current relative order.
        """
        return PostCollection(sorted(self._posts, key=lambda p: p.date, reverse=True))

    def latest(self, count: int) -> PostCollection:
        """Return the first ``count`` posts in the current order."""
        return PostCollection(self._posts[:count])

    def tags(self) -> list[str]:
        return collect_tags(self._posts)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"PostCollection({len(self._posts)} posts)"


class TagColors(Mapping[str, str]):
    """Mapping of tag name to badge colour with a fallback for unknown tags."""

    def __init__(self, mapping: dict[str, str], default: str = DEFAULT_TAG_COLOR):
        self._mapping = dict(mapping)
        self.default = default

    def __getitem__(self, key: str) -> str:
        return self._mapping[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def color(self, tag: str) -> str:
        return self._mapping.get(tag, self.default)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"TagColors({len(self._mapping)} tags)"


def collect_tags(posts: Iterable[Post]) -> list[str]:
    """Return the distinct tags across posts in lexicographic order."""
    return sorted({tag for post in posts for tag in post.tags})


def assign_colors(
    tags: Sequence[str], palette: Sequence[str] = DEFAULT_PALETTE
) -> TagColors:
    """Give the i-th tag the colour ``palette[i % len(palette)]``.

    Args:
        tags: Tags in sorted order, as returned by collect_tags.
        palette: Colours to cycle through.

    Returns:
        TagColors for the given tags.
    """
    return TagColors({tag: palette[i % len(palette)] for i, tag in enumerate(tags)})
