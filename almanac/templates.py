"""Template handling for Almanac.

Site templates are plain text files with literal placeholders such as
``{{title}}``. They are filled by substitute(), a single-pass find-and-replace
with no loops or conditionals; list regions are built by rendering a per-item
template for every item and joining the results.

Documents generated by Almanac itself (the Atom feed and the new-post
skeleton) are Jinja2 templates shipped inside the package and rendered through
create_resource_environment().

Key names:
- substitute: Replace placeholders with values.
- TemplateLoader: Reads site templates, failing loudly when one is missing.
- render_layout: Wrap page content in the shared layout.
- render_tags: Build the tag-badge fragment for a post.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Literal

from jinja2 import Environment, PackageLoader, StrictUndefined

from .collections import TagColors
from .errors import MissingTemplateError
from .html_utils import escape_xml

SubstitutionMode = Literal["first", "all"]

LAYOUT_TEMPLATE = "layout.html"


def substitute(
    template: str,
    bindings: Mapping[str, str],
    mode: SubstitutionMode = "first",
) -> str:
    """Replace placeholder tokens in a template with their values.

    The template is scanned once, so text inserted for one token is never
    searched for another token.

    Args:
        template: Template text.
        bindings: Mapping of exact placeholder token (e.g. ``{{title}}``) to
            replacement text.
        mode: "first" replaces only the first occurrence of each token, "all"
            replaces every occurrence.

    Returns:
        The filled template.

    Examples:
        >>> substitute("{{a}} {{a}}", {"{{a}}": "x"})
        'x {{a}}'
        >>> substitute("{{a}} {{a}}", {"{{a}}": "x"}, mode="all")
        'x x'
    """
    if mode not in ("first", "all"):
        raise ValueError(f"Unknown substitution mode: {mode!r}")
    tokens = sorted((t for t in bindings if t), key=len, reverse=True)
    if not tokens:
        return template
    pattern = re.compile("|".join(re.escape(t) for t in tokens))
    used: set[str] = set()

    def repl(match: re.Match) -> str:
        token = match.group(0)
        if mode == "first":
            if token in used:
                return token
            used.add(token)
        return bindings[token]

    return pattern.sub(repl, template)


class TemplateLoader:
    """Reads site templates from a directory.

    Attributes:
        templates_dir: Directory holding the template files.
    """

    def __init__(self, templates_dir: Path):
        self.templates_dir = templates_dir

    def path(self, name: str) -> Path:
        return self.templates_dir / name

    def load(self, name: str) -> str:
        """Read a template file.

        Args:
            name: Template filename, e.g. ``entry.html``.

        Returns:
            Template text.

        Raises:
            MissingTemplateError: If the file does not exist.
        """
        path = self.path(name)
        if not path.is_file():
            raise MissingTemplateError(path, f"Template not found: {name}")
        return path.read_text(encoding="utf-8")


def render_layout(
    layout: str,
    content_html: str,
    title: str | None,
    site_title: str,
    path_from_root: str = "",
) -> str:
    """Wrap content in the shared layout.

    Placeholders: ``{{page_title}}`` ("<title> – <site title>", or the site
    title alone), ``{{css_path}}``, ``{{root}}`` (relative prefix to the site
    root) and ``{{content}}``. Every occurrence of each placeholder is filled.

    Args:
        layout: Layout template text.
        content_html: Page body.
        title: Page title, or None for the bare site title.
        site_title: Site title.
        path_from_root: Relative prefix from the page to the site root, e.g.
            ``../../`` for a post page.

    Returns:
        Complete HTML page.
    """
    page_title = f"{title} – {site_title}" if title else site_title
    return substitute(
        layout,
        {
            "{{page_title}}": page_title,
            "{{css_path}}": f"{path_from_root}style.css",
            "{{root}}": path_from_root,
            "{{content}}": content_html,
        },
        mode="all",
    )


def render_tags(tags: Sequence[str], tag_colors: TagColors) -> str:
    """Build the tag-badge HTML for a post.

    Args:
        tags: Tags of the post.
        tag_colors: Colour map; unknown tags get its default colour.

    Returns:
        ``<span class="tags">...</span>`` or an empty string without tags.
    """
    if not tags:
        return ""
    badges = " ".join(
        f'<span class="tag" style="background-color: {tag_colors.color(tag)}">{tag}</span>'
        for tag in tags
    )
    return f'<span class="tags">{badges}</span>'


def _quote(value: object) -> str:
    """Quote a value as a double-quoted YAML scalar."""
    return json.dumps(str(value), ensure_ascii=False)


def create_resource_environment() -> Environment:
    """Create the Jinja environment for templates bundled with Almanac.

    Returns:
        Environment loading from ``almanac/resources`` with the ``xml`` and
        ``quote`` filters installed.
    """
    env = Environment(
        loader=PackageLoader("almanac", "resources"),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["xml"] = escape_xml
    env.filters["quote"] = _quote
    return env
