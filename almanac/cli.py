"""Command-line interface for Almanac.

This module defines the CLI commands using Click framework.

Commands:
- init: Scaffold a new journal project.
- publish: Publish the site into the output directory.
- new: Create a new draft post from a title.
- dev: Watch the stylesheet and copy it into the output directory.
"""

from __future__ import annotations

import shutil
from datetime import date
from pathlib import Path

import click
import questionary

from . import __version__
from .config import SiteConfig, load_config
from .errors import BuildError, PostExistsError
from .templates import create_resource_environment
from .utils import slugify

# Starter project copied by `almanac init`
_SKELETON_DIR = Path(__file__).parent / "resources" / "site"


@click.group()
@click.version_option(version=__version__, prog_name="almanac")
def cli():
    """Almanac static journal generator."""


@cli.command()
@click.argument("name")
def init(name: str):
    """Scaffold a new journal project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New journal created at {target}")


@cli.command()
def publish():
    """Publish the site into the output directory."""
    project_root = Path.cwd()
    from .build import publish_site

    try:
        result = publish_site(project_root)
    except BuildError as exc:
        click.echo(click.style("Publish failed:", fg="red", bold=True), err=True)
        click.echo(
            click.style(f"  File: {_display_path(exc.source_path, project_root)}", fg="yellow"),
            err=True,
        )
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None

    for report in result.assets:
        click.echo(f"Copied {report.count} {report.label} to {report.destination}")
    click.echo(
        f"Generated {len(result.posts)} posts with {len(result.tags)} unique tags "
        f"into {result.output_dir}"
    )


@cli.command()
@click.argument("title", nargs=-1)
def new(title: tuple[str, ...]):
    """Create a new draft post titled TITLE."""
    text = " ".join(title).strip()
    if not text:
        text = questionary.text(
            "Post title:",
            validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
            style=_questionary_style(),
        ).ask()
        if text is None:
            raise click.Abort()
        text = text.strip()

    config = _load_config()
    try:
        path = create_post(config, text)
    except PostExistsError as exc:
        raise click.ClickException(str(exc)) from None
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="TITLE") from None

    click.echo(f"Created new post: {path.name}")
    click.echo(f"  Path: {path}")
    click.echo(f"Open it with: $EDITOR {path}")


@cli.command()
def dev():
    """Copy the stylesheet into the output directory on every change."""
    from .watcher import StylesheetWatcher

    watcher = StylesheetWatcher(_load_config())
    watcher.start()
    click.echo("Dev mode stopped")


def create_post(config: SiteConfig, title: str, today: date | None = None) -> Path:
    """Write a draft post skeleton named ``<date>-<slug>.md``.

    Args:
        config: Site configuration giving the posts directory.
        title: Post title.
        today: Date used for the filename and front matter.

    Returns:
        Path of the new file.

    Raises:
        ValueError: If the title yields an empty slug.
        PostExistsError: If the file already exists; nothing is written.
    """
    today = today or date.today()
    slug = slugify(title)
    if not slug:
        raise ValueError(f"Cannot derive a slug from title {title!r}")
    path = config.posts_path / f"{today.isoformat()}-{slug}.md"
    if path.exists():
        raise PostExistsError(path)

    template = create_resource_environment().get_template("post.md.jinja")
    content = template.render(title=title, date=today.isoformat(), slug=slug)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _load_config() -> SiteConfig:
    try:
        return load_config(Path.cwd())
    except BuildError as exc:
        raise click.ClickException(str(exc)) from None


def _display_path(path: Path, project_root: Path) -> Path:
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()


def _scaffold(root: Path) -> None:
    """Copy the starter project into ``root``.

    Args:
        root: Root directory for the new project.
    """
    for src_path in _SKELETON_DIR.rglob("*"):
        if src_path.is_dir():
            continue
        rel_path = src_path.relative_to(_SKELETON_DIR)
        dest_path = root / rel_path
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src_path, dest_path)
