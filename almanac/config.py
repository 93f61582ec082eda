"""Site configuration for Almanac.

Configuration is read once from an optional ``almanac.yaml`` at the project
root, merged over DEFAULT_CONFIG and frozen into a SiteConfig. The frozen value
is handed to the publish orchestrator; nothing reads configuration from module
globals after that.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

CONFIG_FILENAME = "almanac.yaml"

# Tag i gets DEFAULT_PALETTE[i % 10].
DEFAULT_PALETTE: tuple[str, ...] = (
    "#ea00ff",  # magenta
    "#ff0808",  # red
    "#009e00",  # green
    "#094fff",  # blue
    "#ffdb0c",  # yellow
    "#ff6b00",  # orange
    "#00d4ff",  # cyan
    "#9d00ff",  # purple
    "#ff0066",  # pink
    "#00ff88",  # teal
)

DEFAULT_CONFIG: dict[str, Any] = {
    "content_dir": "content",
    "templates_dir": "templates",
    "assets_dir": "assets",
    "output_dir": "public",
    "site_url": "https://journal.example.com",
    "title": "Journal",
    "author": "Anonymous",
    "palette": list(DEFAULT_PALETTE),
    "recent_limit": 10,
    "feed_limit": 20,
}


@dataclass(frozen=True)
class SiteConfig:
    """Immutable settings for one publish run.

    Attributes:
        project_root: Root directory of the journal project.
        content_dir: Directory holding ``posts/``, ``about.md`` and ``img/``.
        templates_dir: Directory holding the HTML templates and ``style.css``.
        assets_dir: Directory holding ``fonts/``.
        output_dir: Publish directory.
        site_url: Absolute base URL used in the Atom feed.
        title: Site title used in page titles and the feed.
        author: Feed author name.
        palette: Colours cycled through for tag badges.
        recent_limit: Number of posts on the home and recent pages.
        feed_limit: Number of entries in the Atom feed.
    """

    project_root: Path
    content_dir: str = "content"
    templates_dir: str = "templates"
    assets_dir: str = "assets"
    output_dir: str = "public"
    site_url: str = "https://journal.example.com"
    title: str = "Journal"
    author: str = "Anonymous"
    palette: tuple[str, ...] = DEFAULT_PALETTE
    recent_limit: int = 10
    feed_limit: int = 20

    @property
    def content_path(self) -> Path:
        return self.project_root / self.content_dir

    @property
    def posts_path(self) -> Path:
        return self.content_path / "posts"

    @property
    def about_path(self) -> Path:
        return self.content_path / "about.md"

    @property
    def images_path(self) -> Path:
        return self.content_path / "img"

    @property
    def templates_path(self) -> Path:
        return self.project_root / self.templates_dir

    @property
    def stylesheet_path(self) -> Path:
        return self.templates_path / "style.css"

    @property
    def fonts_path(self) -> Path:
        return self.project_root / self.assets_dir / "fonts"

    @property
    def output_path(self) -> Path:
        return self.project_root / self.output_dir

    @property
    def base_url(self) -> str:
        """Site URL without a trailing slash."""
        return self.site_url.rstrip("/")

    @classmethod
    def from_mapping(cls, project_root: Path, values: dict[str, Any]) -> SiteConfig:
        """Build a config from a mapping, ignoring unknown keys.

        Args:
            project_root: Root directory of the project.
            values: Raw configuration values.

        Returns:
            Frozen SiteConfig.
        """
        known = {f.name for f in fields(cls)} - {"project_root"}
        kwargs = {k: v for k, v in values.items() if k in known}
        if "palette" in kwargs:
            kwargs["palette"] = tuple(str(color) for color in kwargs["palette"])
        if not kwargs.get("palette", True):
            raise ValueError("palette must contain at least one colour")
        for key in ("recent_limit", "feed_limit"):
            if key in kwargs:
                kwargs[key] = int(kwargs[key])
        return cls(project_root=project_root, **kwargs)


def load_config(project_root: Path) -> SiteConfig:
    """Load site configuration from almanac.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        SiteConfig with defaults applied for every missing key.

    Raises:
        ConfigError: If the file is not valid YAML or a value is unusable.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(config_path, f"Invalid YAML: {exc}", exc) from exc
            if isinstance(loaded, dict):
                config.update(loaded)
    try:
        return SiteConfig.from_mapping(project_root, config)
    except (TypeError, ValueError) as exc:
        raise ConfigError(config_path, f"Invalid configuration: {exc}", exc) from exc
