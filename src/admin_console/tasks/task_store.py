# src/admin_console/tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict
from pathlib import Path

from ..core.models import BufferId, Task

logger = logging.getLogger(__name__)


def _atomic_write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, "utf-8")
    os.replace(tmp, path)


class BufferFiles:
    """
    Plain-text files backing the editor buffers.

    Reads never fail (missing or unreadable file -> empty buffer).
    Writes are best-effort: failures are logged and reported as False so the
    caller keeps the buffer dirty and retries later.
    """

    def __init__(self, paths: Mapping[BufferId, str | Path]) -> None:
        self._paths = {bid: Path(p) for bid, p in paths.items()}

    def path(self, buffer_id: BufferId) -> Path:
        return self._paths[buffer_id]

    def load(self, buffer_id: BufferId) -> str:
        path = self._paths[buffer_id]
        if not path.exists():
            return ""
        try:
            return path.read_text("utf-8")
        except (OSError, UnicodeDecodeError):
            logger.exception("Failed to read buffer %s from %s", buffer_id.name, path)
            return ""

    def save(self, buffer_id: BufferId, text: str) -> bool:
        path = self._paths[buffer_id]
        try:
            _atomic_write(path, text)
        except OSError:
            logger.exception("Failed to write buffer %s to %s", buffer_id.name, path)
            return False
        logger.debug("Saved buffer %s (%d chars) to %s", buffer_id.name, len(text), path)
        return True


class TaskMirror:
    """
    JSON array of task records kept next to the Todo text.

    Only a fallback seed for an empty Todo buffer at startup; the text stays authoritative.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def load(self) -> list[Task]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable task mirror %s", self._path, exc_info=True)
            return []
        if not isinstance(data, list):
            return []

        out: list[Task] = []
        for item in data:
            if not isinstance(item, dict) or not isinstance(item.get("title"), str):
                continue
            out.append(
                Task(
                    title=item["title"],
                    description=str(item.get("description") or ""),
                    time=str(item.get("time") or ""),
                    completed=bool(item.get("completed", False)),
                )
            )
        logger.info("Loaded %d tasks from %s", len(out), self._path)
        return out

    def save(self, tasks: Iterable[Task]) -> bool:
        payload = [asdict(t) for t in tasks]
        try:
            _atomic_write(self._path, json.dumps(payload, ensure_ascii=False, indent=2))
        except OSError:
            logger.exception("Failed to write task mirror %s", self._path)
            return False
        return True


class Debouncer:
    """Reports due() once `quiet_seconds` have passed since the last touch()."""

    def __init__(self, quiet_seconds: float = 30.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.quiet_seconds = float(quiet_seconds)
        self._clock = clock
        self._last_touch = clock()

    def touch(self) -> None:
        self._last_touch = self._clock()

    def due(self) -> bool:
        return self._clock() - self._last_touch >= self.quiet_seconds
