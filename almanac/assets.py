"""Static asset copying for Almanac.

Assets are copied verbatim: the stylesheet from the templates directory, fonts
from ``assets/fonts`` and images from ``content/img``. Missing sources are
skipped silently, and only regular files are copied (no recursion).

Key class:
- AssetPipeline: Copies every asset group into the output directory.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from .config import SiteConfig


@dataclass
class CopyReport:
    """Outcome of copying one asset group.

    Attributes:
        label: Human-readable group name, e.g. "font(s)".
        destination: Where the files were copied to.
        count: Number of files copied.
    """

    label: str
    destination: Path
    count: int


def copy_files(source_dir: Path, dest_dir: Path) -> int:
    """Copy the regular files directly inside ``source_dir``.

    Args:
        source_dir: Directory to copy from.
        dest_dir: Directory to copy into; created when needed.

    Returns:
        Number of files copied, 0 when the source directory does not exist.
    """
    if not source_dir.is_dir():
        return 0
    dest_dir.mkdir(parents=True, exist_ok=True)
    count = 0
    for item in sorted(source_dir.iterdir()):
        if not item.is_file():
            continue
        shutil.copy2(item, dest_dir / item.name)
        count += 1
    return count


def copy_stylesheet(source: Path, output_dir: Path) -> Path | None:
    """Copy the stylesheet to ``<output_dir>/style.css`` if it exists."""
    if not source.is_file():
        return None
    output_dir.mkdir(parents=True, exist_ok=True)
    dest = output_dir / "style.css"
    shutil.copy2(source, dest)
    return dest


class AssetPipeline:
    """Copies static assets into the output directory.

    Attributes:
        config: Site configuration naming the source directories.
        output_dir: Directory where assets are written.
    """

    def __init__(self, config: SiteConfig, output_dir: Path | None = None):
        self.config = config
        self.output_dir = output_dir or config.output_path

    def run(self) -> list[CopyReport]:
        """Copy the stylesheet, fonts and images.

        Returns:
            One report per asset group whose source exists.
        """
        reports: list[CopyReport] = []
        css = copy_stylesheet(self.config.stylesheet_path, self.output_dir)
        if css is not None:
            reports.append(CopyReport("CSS file", css, 1))

        groups = (
            ("font(s)", self.config.fonts_path, self.output_dir / "fonts"),
            ("image(s)", self.config.images_path, self.output_dir / "img"),
        )
        for label, source, dest in groups:
            if source.is_dir():
                reports.append(CopyReport(label, dest, copy_files(source, dest)))
        return reports
