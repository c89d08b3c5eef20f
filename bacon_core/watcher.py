"""Watch files and directories, signalling relevant changes."""

from __future__ import annotations

import logging
import os
import queue
from pathlib import Path
from typing import Iterable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .ignorer import IgnorerSet

logger = logging.getLogger(__name__)

# access events which don't denote a change
_IGNORED_EVENT_TYPES = frozenset({"opened", "closed_no_write"})


class _Handler(FileSystemEventHandler):
    def __init__(self, watcher: "Watcher", only: str | None = None) -> None:
        super().__init__()
        self._watcher = watcher
        self._only = only

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._watcher._on_event(event, self._only)


class Watcher:
    """Watch paths and signal changes to files that aren't ignored."""

    def __init__(
        self,
        paths_to_watch: Iterable[str | os.PathLike],
        ignorer: IgnorerSet | None = None,
    ) -> None:
        self._ignorer = ignorer if ignorer is not None else IgnorerSet()
        self._events: queue.Queue[None] = queue.Queue()
        self._observer = Observer()
        for path in map(Path, paths_to_watch):
            if not path.exists():
                logger.warning("watch path doesn't exist: %s", path)
                continue
            if path.is_dir():
                logger.debug("add watch dir %s", path)
                self._observer.schedule(_Handler(self), str(path), recursive=True)
            elif path.is_file():
                logger.debug("add watch file %s", path)
                absolute = os.path.abspath(path)
                self._observer.schedule(
                    _Handler(self, only=absolute),
                    os.path.dirname(absolute),
                    recursive=False,
                )
        self._observer.start()

    def _on_event(self, event: FileSystemEvent, only: str | None) -> None:
        if event.event_type in _IGNORED_EVENT_TYPES:
            return
        if event.is_directory and event.event_type == "modified":
            return
        paths = [os.fsdecode(event.src_path)]
        dest = getattr(event, "dest_path", "")
        if dest:
            paths.append(os.fsdecode(dest))
        if only is not None and only not in {os.path.abspath(p) for p in paths}:
            return
        try:
            if self._ignorer.excludes_all(paths):
                logger.debug("all excluded")
                return
        except Exception as e:  # a failing check must not stop watching
            logger.warning("exclusion check failed: %s", e)
        logger.debug("notify event: %s", event)
        self._events.put(None)

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for a change; return False if none came within the timeout."""
        try:
            self._events.get(timeout=timeout)
        except queue.Empty:
            return False
        return True

    def close(self) -> None:
        """Stop watching."""
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join()

    def __enter__(self) -> "Watcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()