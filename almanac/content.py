"""Content processing for Almanac.

This module loads Markdown posts and turns the published ones into Post records.

Key classes:
- Post: Immutable record of one published post.
- PostFileLoader: Lists the Markdown files in the posts directory.
- PostBuilder: Builds a Post from one file, or skips it when not published.
- ContentProcessor: Facade that loads every published post.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .extractors import FrontMatter, parse_frontmatter
from .renderers import MarkdownRenderer
from .utils import count_words

PUBLISHED = "published"
DEFAULT_STATUS = "draft"


@dataclass(frozen=True)
class Post:
    """A published journal post.

    Attributes:
        title: Post title, the slug when none is given.
        date: Publication date.
        tags: Tags in the order they were written.
        slug: URL path segment and output directory name.
        body_html: Rendered Markdown body.
        word_count: Number of words in the raw Markdown body.
        updated: Optional last-update date from the front matter.
        source_path: Markdown file the post was built from.
    """

    title: str
    date: date
    tags: tuple[str, ...]
    slug: str
    body_html: str
    word_count: int
    updated: date | None = None
    source_path: Path | None = None

    @property
    def url(self) -> str:
        """Site-relative URL of the post page."""
        return f"/posts/{self.slug}/"


class PostFileLoader:
    """Lists post files in a directory.

    Only ``*.md`` files directly inside the directory are considered, in name
    order.

    Attributes:
        posts_dir: Directory containing post files.
    """

    def __init__(self, posts_dir: Path):
        self.posts_dir = posts_dir

    def iter_files(self) -> list[Path]:
        if not self.posts_dir.is_dir():
            return []
        return sorted(p for p in self.posts_dir.glob("*.md") if p.is_file())


class PostBuilder:
    """Builds Post objects from source files.

    Attributes:
        renderer: Markdown renderer used for post bodies.
    """

    def __init__(self, renderer: MarkdownRenderer | None = None):
        self.renderer = renderer or MarkdownRenderer()

    def build(self, path: Path) -> Post | None:
        """Build a Post from a Markdown file.

        Args:
            path: Path to the post file.

        Returns:
            Post, or None when the post's status is not "published".

        Raises:
            MetadataParseError: If the front matter cannot be parsed.
            InvalidDateError: If the date is missing or malformed.
        """
        raw = path.read_text(encoding="utf-8")
        meta, body = parse_frontmatter(raw, path)
        if not self.is_published(meta):
            return None
        return self.build_from(meta, body, path)

    @staticmethod
    def is_published(meta: FrontMatter) -> bool:
        return meta.get_str("status", DEFAULT_STATUS) == PUBLISHED

    def build_from(self, meta: FrontMatter, body: str, path: Path) -> Post:
        """Build a Post from already-parsed front matter and body."""
        post_date = meta.get_date("date", required=True)
        slug = meta.get_str("slug") or path.stem
        return Post(
            title=meta.get_str("title") or slug,
            date=post_date,
            tags=tuple(meta.get_list("tags")),
            slug=slug,
            body_html=self.renderer.render(body),
            word_count=count_words(body),
            updated=meta.get_date("updated"),
            source_path=path,
        )


class ContentProcessor:
    """Facade for loading every published post in a directory.

    Attributes:
        posts_dir: Directory containing post files.
    """

    def __init__(
        self,
        posts_dir: Path,
        loader: PostFileLoader | None = None,
        builder: PostBuilder | None = None,
    ):
        self.posts_dir = posts_dir
        self._loader = loader or PostFileLoader(posts_dir)
        self._builder = builder or PostBuilder()

    def load(self) -> list[Post]:
        """Load all published posts, in directory order (unsorted by date).

        Returns:
            List of Post objects.
        """
        posts: list[Post] = []
        for path in self._loader.iter_files():
            post = self._builder.build(path)
            if post is not None:
                posts.append(post)
        return posts


def load_posts(posts_dir: Path, renderer: MarkdownRenderer | None = None) -> list[Post]:
    """Load the published posts in ``posts_dir``."""
    return ContentProcessor(posts_dir, builder=PostBuilder(renderer)).load()
