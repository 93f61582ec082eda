"""Feed generation for Almanac.

This module produces the machine-readable outputs of a publish run: the
``posts.json`` manifest and the ``feed.xml`` Atom feed. Feed generation is
separate from the HTML page renderers and from build orchestration.

Classes:
    FeedGenerator: Abstract base class for feed generators.
    JsonManifestGenerator: Generates posts.json.
    AtomFeedGenerator: Generates an Atom 1.0 feed.
    FeedRegistry: Registry for managing feed generators.

Functions:
    create_default_feed_registry: Create a registry with default generators.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

from .html_utils import summarize
from .pages import RenderContext
from .templates import create_resource_environment
from .utils import format_iso_date


class FeedGenerator(ABC):
    """Abstract base class for feed generators.

    Subclasses implement specific formats; new formats are added by
    registering another subclass.
    """

    @property
    @abstractmethod
    def filename(self) -> str:
        """Return the output filename for this feed."""
        ...

    @abstractmethod
    def generate(self, context: RenderContext) -> str:
        """Generate feed content.

        Args:
            context: Publish run context; posts are newest first.

        Returns:
            Feed content as a string.
        """
        ...

    def write(self, context: RenderContext) -> Path:
        """Generate and write the feed to the output directory.

        Args:
            context: Publish run context.

        Returns:
            Path of the written file.
        """
        content = self.generate(context)
        output_path = context.output_dir / self.filename
        output_path.write_text(content, encoding="utf-8")
        return output_path


class JsonManifestGenerator(FeedGenerator):
    """Generates ``posts.json``: a list of ``{"title", "url"}`` per post."""

    @property
    def filename(self) -> str:
        return "posts.json"

    def generate(self, context: RenderContext) -> str:
        data = [{"title": post.title, "url": post.url} for post in context.posts]
        return json.dumps(data, indent=2, ensure_ascii=False)


class AtomFeedGenerator(FeedGenerator):
    """Generates an Atom 1.0 feed of the most recent posts.

    Feed and entry timestamps are calendar dates (YYYY-MM-DD). The feed's
    ``updated`` is the newest post's date, or today for an empty journal.
    An entry's ``updated`` is the post's ``updated`` front matter date when
    given, else its publication date.
    """

    template = "feed.xml.jinja"

    @property
    def filename(self) -> str:
        return "feed.xml"

    def generate(self, context: RenderContext) -> str:
        config = context.config
        base_url = config.base_url
        posts = context.posts.latest(config.feed_limit)
        updated = posts[0].date if posts else context.today

        entries = []
        for post in posts:
            published = format_iso_date(post.date)
            entries.append(
                {
                    "title": post.title,
                    "url": f"{base_url}{post.url}",
                    "published": published,
                    "updated": format_iso_date(post.updated) if post.updated else published,
                    "summary": summarize(post.body_html),
                    "content": post.body_html,
                }
            )

        template = create_resource_environment().get_template(self.template)
        return template.render(
            title=config.title,
            author=config.author,
            site_url=base_url,
            updated=format_iso_date(updated),
            entries=entries,
        )


class FeedRegistry:
    """Registry for managing feed generators.

    Attributes:
        _generators: List of registered feed generators.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._generators: list[FeedGenerator] = []

    def register(self, generator: FeedGenerator) -> None:
        """Register a feed generator.

        Args:
            generator: Feed generator to register.
        """
        self._generators.append(generator)

    def generate_all(self, context: RenderContext) -> list[Path]:
        """Generate all registered feeds, in registration order.

        Args:
            context: Publish run context.

        Returns:
            Paths of the written feed files.
        """
        return [generator.write(context) for generator in self._generators]


def create_default_feed_registry() -> FeedRegistry:
    """Create a registry with default feed generators.

    Returns:
        FeedRegistry configured with the JSON manifest and Atom generators.
    """
    registry = FeedRegistry()
    registry.register(JsonManifestGenerator())
    registry.register(AtomFeedGenerator())
    return registry
