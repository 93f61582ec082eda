"""HTML page renderers for Almanac.

Each renderer takes the RenderContext of a publish run, fills one or more site
templates and writes the result into the output directory. Renderers are kept
in a PageRegistry and run in registration order.

Classes:
    RenderContext: Everything a renderer needs for one publish run.
    PageRenderer: Abstract base class for page renderers.
    PostPagesRenderer: One page per post under ``posts/<slug>/``.
    AboutPageRenderer: ``about/`` from ``content/about.md`` when present.
    AllPostsRenderer: ``all/`` listing with a tag filter.
    RecentRenderer: Home page and ``recent/`` with the latest posts.
    PageRegistry: Ordered collection of renderers.

Functions:
    create_default_page_registry: Registry with the four default renderers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .collections import PostCollection, TagColors
from .config import SiteConfig
from .extractors import parse_frontmatter
from .renderers import MarkdownRenderer
from .templates import LAYOUT_TEMPLATE, TemplateLoader, render_layout, render_tags, substitute
from .utils import format_iso_date, format_long_date, time_ago

TAG_OPTION_SEPARATOR = "\n        "


@dataclass
class RenderContext:
    """Inputs shared by every renderer during one publish run.

    Attributes:
        config: Site configuration.
        posts: Published posts, newest first.
        tag_colors: Colour of each tag.
        templates: Loader for site templates.
        markdown: Renderer for Markdown content.
        today: Reference date for relative times and the empty feed.
        output_dir: Directory the site is written to.
    """

    config: SiteConfig
    posts: PostCollection
    tag_colors: TagColors
    templates: TemplateLoader
    markdown: MarkdownRenderer
    today: date
    output_dir: Path

    def layout(
        self, content_html: str, title: str | None, path_from_root: str
    ) -> str:
        """Wrap content in ``layout.html``."""
        return render_layout(
            self.templates.load(LAYOUT_TEMPLATE),
            content_html,
            title,
            self.config.title,
            path_from_root,
        )


def write_page(output_dir: Path, url_path: str, rendered: str) -> Path:
    """Write a rendered page as ``<url_path>/index.html``.

    Args:
        output_dir: Base output directory.
        url_path: Site-relative directory, "" for the root.
        rendered: Rendered HTML content.

    Returns:
        Path of the written file.
    """
    target_dir = output_dir / url_path.strip("/")
    target_dir.mkdir(parents=True, exist_ok=True)
    html_path = target_dir / "index.html"
    with open(html_path, "w", encoding="utf-8") as f:
        f.write(rendered)
    return html_path


class PageRenderer(ABC):
    """Abstract base class for page renderers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name used in reports."""
        ...

    @abstractmethod
    def render(self, context: RenderContext) -> list[Path]:
        """Render and write this renderer's pages.

        Args:
            context: Publish run context.

        Returns:
            Paths of the files written; empty when there was nothing to do.

        Raises:
            MissingTemplateError: If a required template is absent.
        """
        ...


class PostPagesRenderer(PageRenderer):
    """Writes ``posts/<slug>/index.html`` for every post from ``entry.html``.

    Posts sharing a slug overwrite each other; the last one written wins.
    """

    template = "entry.html"

    @property
    def name(self) -> str:
        return "posts"

    def render(self, context: RenderContext) -> list[Path]:
        entry_template = context.templates.load(self.template)
        written = []
        for post in context.posts:
            article_html = substitute(
                entry_template,
                {
                    "{{title}}": post.title,
                    "{{body}}": post.body_html,
                    "{{date}}": format_long_date(post.date),
                    "{{date_ago}}": time_ago(post.date, context.today),
                    "{{tags}}": render_tags(post.tags, context.tag_colors),
                },
            )
            full_html = context.layout(article_html, post.title, "../../")
            written.append(write_page(context.output_dir, post.url, full_html))
        return written


class AboutPageRenderer(PageRenderer):
    """Writes ``about/index.html`` from ``content/about.md`` through ``about.html``."""

    template = "about.html"
    default_title = "About"

    @property
    def name(self) -> str:
        return "about"

    def render(self, context: RenderContext) -> list[Path]:
        about_path = context.config.about_path
        if not about_path.is_file():
            return []
        meta, body = parse_frontmatter(about_path.read_text(encoding="utf-8"), about_path)
        title = meta.get_str("title") or self.default_title
        content_html = substitute(
            context.templates.load(self.template),
            {"{{title}}": title, "{{body}}": context.markdown.render(body)},
        )
        full_html = context.layout(content_html, title, "../")
        return [write_page(context.output_dir, "about", full_html)]


class AllPostsRenderer(PageRenderer):
    """Writes ``all/index.html``: every post plus a tag filter dropdown.

    Item rows replace every occurrence of their placeholders, since the row
    template repeats them (e.g. in data attributes).
    """

    template = "all.html"
    item_template = "all-item.html"
    title = "All posts"

    @property
    def name(self) -> str:
        return "all"

    def render(self, context: RenderContext) -> list[Path]:
        all_template = context.templates.load(self.template)
        item_template = context.templates.load(self.item_template)

        tag_options = TAG_OPTION_SEPARATOR.join(
            f'<option value="{tag}">{tag}</option>' for tag in context.posts.tags()
        )
        items_html = "\n".join(
            substitute(
                item_template,
                {
                    "{{slug}}": post.slug,
                    "{{title}}": post.title,
                    "{{date}}": format_iso_date(post.date),
                    "{{word_count}}": str(post.word_count),
                    "{{tags}}": render_tags(post.tags, context.tag_colors),
                    "{{tags_plain}}": ", ".join(post.tags),
                },
                mode="all",
            )
            for post in context.posts
        )
        content_html = substitute(
            all_template,
            {"{{items}}": items_html, "{{tag_options}}": tag_options},
        )
        full_html = context.layout(content_html, self.title, "../")
        return [write_page(context.output_dir, "all", full_html)]


class RecentRenderer(PageRenderer):
    """Writes the latest posts to both the home page and ``recent/``.

    Both files carry the same listing; only the layout's page title and
    relative asset prefix differ.
    """

    template = "recent.html"
    entry_template = "recent-entry.html"

    @property
    def name(self) -> str:
        return "recent"

    def render(self, context: RenderContext) -> list[Path]:
        recent_template = context.templates.load(self.template)
        entry_template = context.templates.load(self.entry_template)

        entries_html = "\n".join(
            substitute(
                entry_template,
                {
                    "{{slug}}": post.slug,
                    "{{title}}": post.title,
                    "{{body}}": post.body_html,
                    "{{date}}": format_long_date(post.date),
                    "{{tags}}": render_tags(post.tags, context.tag_colors),
                },
            )
            for post in context.posts.latest(context.config.recent_limit)
        )
        content_html = substitute(recent_template, {"{{entries}}": entries_html})

        return [
            write_page(context.output_dir, "", context.layout(content_html, "Home", "")),
            write_page(
                context.output_dir, "recent", context.layout(content_html, "Recent", "../")
            ),
        ]


class PageRegistry:
    """Ordered collection of page renderers.

    Attributes:
        _renderers: Registered renderers, run in registration order.
    """

    def __init__(self) -> None:
        self._renderers: list[PageRenderer] = []

    def register(self, renderer: PageRenderer) -> None:
        self._renderers.append(renderer)

    def __iter__(self):
        return iter(self._renderers)

    def render_all(self, context: RenderContext) -> list[Path]:
        """Run every renderer and return all written paths."""
        written: list[Path] = []
        for renderer in self._renderers:
            written.extend(renderer.render(context))
        return written


def create_default_page_registry() -> PageRegistry:
    """Create a registry with post, about, all-posts and recent renderers."""
    registry = PageRegistry()
    registry.register(PostPagesRenderer())
    registry.register(AboutPageRenderer())
    registry.register(AllPostsRenderer())
    registry.register(RecentRenderer())
    return registry
