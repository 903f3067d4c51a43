"""Re-render notes whenever they change on disk."""
from __future__ import annotations

import logging
import os
import threading
import time
from pathlib import Path
from typing import Dict, List, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .file_processor import NoteRenderer

logger = logging.getLogger(__name__)


class NoteChangeHandler(FileSystemEventHandler):
    """Renders a note when it is created, modified or moved into place."""

    def __init__(self, renderer: NoteRenderer, root: Path, debounce_seconds: float = 0.5):
        self.renderer = renderer
        self.root = root
        self.debounce_seconds = debounce_seconds
        self._last_rendered: Dict[Path, float] = {}

    def _handle(self, raw_path) -> None:
        path = Path(os.fsdecode(raw_path))
        if not self.renderer.is_note_file(path, root=self.root):
            return
        now = time.monotonic()
        last = self._last_rendered.get(path)
        if last is not None and now - last < self.debounce_seconds:
            return
        self._last_rendered[path] = now
        logger.info("Change detected: %s", path)
        self.renderer.render_file(path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._handle(event.dest_path)


def watch(
    renderer: NoteRenderer,
    input_paths: List[str],
    stop_event: Optional[threading.Event] = None,
    poll_interval: float = 1.0,
) -> None:
    """
    Watch directories (or the parents of files) until interrupted.

    Args:
        renderer: Renderer used for every change
        input_paths: Files or directories to watch
        stop_event: Optional event that ends the loop when set
        poll_interval: Seconds between checks of the stop event
    """
    options = renderer.config.watch
    observer = Observer()
    for path_str in input_paths or ["."]:
        path = Path(path_str)
        directory = path if path.is_dir() else path.parent
        handler = NoteChangeHandler(renderer, directory, options.debounce_seconds)
        observer.schedule(handler, str(directory), recursive=options.recursive)
        logger.info("Watching %s for changes...", directory)

    observer.start()
    try:
        while stop_event is None or not stop_event.is_set():
            time.sleep(poll_interval)
    except KeyboardInterrupt:
        logger.info("Stopped watching.")
    finally:
        observer.stop()
        observer.join()
