"""Site publishing for Almanac.

This module contains the publish pipeline: it loads the published posts,
derives tag colours, runs every page renderer and feed generator, and copies
static assets into the output directory.

The output directory is never cleaned first, so pages of removed posts stay
behind, and nothing is rolled back when a step fails.

Key functions:
- publish_site: Publish the whole site.
- build_context: Load posts and prepare the RenderContext.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from .assets import AssetPipeline, CopyReport
from .collections import PostCollection, assign_colors
from .config import SiteConfig, load_config
from .content import ContentProcessor, PostBuilder
from .errors import BuildError
from .feeds import FeedRegistry, create_default_feed_registry
from .pages import PageRegistry, RenderContext, create_default_page_registry
from .renderers import MarkdownRenderer
from .templates import TemplateLoader

__all__ = ["BuildError", "PublishResult", "build_context", "publish_site"]


@dataclass
class PublishResult:
    """Result of a publish run.

    Attributes:
        posts: Published posts, newest first.
        tags: Distinct tags in sorted order.
        output_dir: Directory the site was written to.
        written: Pages and feeds written, in the order they were produced.
        assets: One report per copied asset group.
    """

    posts: PostCollection
    tags: list[str]
    output_dir: Path
    written: list[Path] = field(default_factory=list)
    assets: list[CopyReport] = field(default_factory=list)


def build_context(
    config: SiteConfig,
    today: date | None = None,
    markdown: MarkdownRenderer | None = None,
) -> RenderContext:
    """Load posts and derive everything the renderers need.

    Args:
        config: Site configuration.
        today: Reference date, defaults to date.today().
        markdown: Markdown renderer shared by posts and the about page.

    Returns:
        RenderContext with posts sorted newest first.

    Raises:
        BuildError: If a post cannot be parsed.
    """
    markdown = markdown or MarkdownRenderer()
    loaded = ContentProcessor(config.posts_path, builder=PostBuilder(markdown)).load()
    posts = PostCollection(loaded).sorted()
    tag_colors = assign_colors(posts.tags(), config.palette)
    return RenderContext(
        config=config,
        posts=posts,
        tag_colors=tag_colors,
        templates=TemplateLoader(config.templates_path),
        markdown=markdown,
        today=today or date.today(),
        output_dir=config.output_path,
    )


def publish_site(
    project_root: Path,
    config: SiteConfig | None = None,
    today: date | None = None,
    pages: PageRegistry | None = None,
    feeds: FeedRegistry | None = None,
) -> PublishResult:
    """Publish the entire site.

    Order: post pages, about page, all-posts listing, home/recent, JSON
    manifest, Atom feed, then static assets.

    Args:
        project_root: Root directory of the project.
        config: Configuration to use instead of loading almanac.yaml.
        today: Reference date for relative times, defaults to date.today().
        pages: Page renderers to run instead of the defaults.
        feeds: Feed generators to run instead of the defaults.

    Returns:
        PublishResult describing what was written.

    Raises:
        BuildError: On unparseable front matter, a bad date or a missing
            template. Files written before the error are left in place.
    """
    config = config or load_config(project_root)
    context = build_context(config, today)
    context.output_dir.mkdir(parents=True, exist_ok=True)

    written = (pages or create_default_page_registry()).render_all(context)
    written.extend((feeds or create_default_feed_registry()).generate_all(context))
    assets = AssetPipeline(config, context.output_dir).run()

    return PublishResult(
        posts=context.posts,
        tags=list(context.tag_colors),
        output_dir=context.output_dir,
        written=written,
        assets=assets,
    )
