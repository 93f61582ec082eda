"""Stylesheet watch loop for Almanac.

While editing the design it is enough to refresh ``style.css`` in the output
directory; a full publish is not needed. StylesheetWatcher copies the
stylesheet once on start and again whenever it changes.

Key classes:
- StylesheetWatcher: Runs the watchdog observer and copies the stylesheet.
- _ChangeHandler: File system event handler for the templates directory.
"""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .assets import copy_stylesheet
from .config import SiteConfig


class StylesheetWatcher:
    """Copies the stylesheet to the output directory whenever it changes.

    Attributes:
        source: Stylesheet being watched.
        output_dir: Directory receiving ``style.css``.
    """

    def __init__(self, config: SiteConfig):
        self.source = config.stylesheet_path
        self.output_dir = config.output_path
        self._observer = None
        self._last_mtime: int | None = None

    def copy(self) -> bool:
        """Copy the stylesheet if it changed since the last copy.

        Returns:
            True if the file was copied.
        """
        try:
            mtime = self.source.stat().st_mtime_ns
        except FileNotFoundError:
            print(f"Warning: CSS file not found at {self.source}")
            return False
        if self._last_mtime is not None and mtime <= self._last_mtime:
            return False
        dest = copy_stylesheet(self.source, self.output_dir)
        if dest is None:
            return False
        self._last_mtime = mtime
        print(f"[{datetime.now().strftime('%H:%M:%S')}] CSS updated: {dest}")
        return True

    def start(self) -> None:  # pragma: no cover - integration path
        """Copy once, then block until interrupted, copying on every change."""
        print("Watching for CSS changes...")
        print(f"   Source: {self.source}")
        print(f"   Destination: {self.output_dir / 'style.css'}")
        self.copy()
        self._start_observer()
        try:
            while True:
                time.sleep(0.5)
        except KeyboardInterrupt:
            self.stop()

    def stop(self) -> None:
        if self._observer:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def _start_observer(self) -> None:
        self.source.parent.mkdir(parents=True, exist_ok=True)
        observer = Observer()
        observer.schedule(_ChangeHandler(self), str(self.source.parent), recursive=False)
        observer.start()
        self._observer = observer


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, watcher: StylesheetWatcher):
        super().__init__()
        self.watcher = watcher

    def on_any_event(self, event):
        if event.is_directory:
            return
        paths = [Path(event.src_path)]
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            paths.append(Path(dest_path))
        # A save may arrive as a temporary file moved onto the stylesheet.
        if any(p.name == self.watcher.source.name for p in paths):
            self.watcher.copy()
