"""Almanac static journal generator.

This package turns a directory of Markdown posts with YAML front matter into a
static journal site: one page per post, an about page, a home/recent listing,
a tag-filterable index of all posts, a JSON manifest and an Atom feed.

Site templates are plain HTML files with literal placeholders such as
``{{title}}``; there are no loops or conditionals in them.

The main entry point is the CLI module, which provides commands for publishing
the site, scaffolding new posts and projects, and watching the stylesheet.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
