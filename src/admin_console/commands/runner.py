# src/admin_console/commands/runner.py

"""
External command execution.

Each launch runs in its own short-lived daemon thread: the process runs to completion,
stdout/stderr are decoded from the configured legacy encoding, and the combined text is
posted to the event bus as a LogOutput. No cancellation and no output size limit.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Sequence

from ..core.bus import EventBus
from ..core.events import LogOutput

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "cp866"


def decode_output(data: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    try:
        return data.decode(encoding, errors="replace")
    except LookupError:
        logger.warning("Unknown command encoding %r, falling back to utf-8", encoding)
        return data.decode("utf-8", errors="replace")


def format_output(stdout: bytes, stderr: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """stdout, then a labelled stderr section when stderr is non-empty; trimmed."""
    text = decode_output(stdout, encoding)
    if stderr:
        text += "\nERROR:\n" + decode_output(stderr, encoding)
    return text.strip()


def run_command(cmd: str, args: Sequence[str], encoding: str = DEFAULT_ENCODING) -> str:
    """Run to completion and return the text to log. Launch failures become text, never raise."""
    try:
        proc = subprocess.run(
            [cmd, *args],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=False,
        )
    except (OSError, ValueError) as e:
        logger.warning("Failed to launch %s: %s", cmd, e)
        return f"Failed to run: {e}"
    logger.info("Command %s exited with %s", cmd, proc.returncode)
    return format_output(proc.stdout, proc.stderr, encoding)


class CommandRunner:
    def __init__(self, events: EventBus, *, encoding: str = DEFAULT_ENCODING) -> None:
        self._events = events
        self.encoding = encoding

    def _work(self, name: str, cmd: str, args: tuple[str, ...]) -> None:
        try:
            text = run_command(cmd, args, self.encoding)
        except Exception:
            logger.exception("Command worker crashed name=%s", name)
            text = f"Failed to run: internal error while running '{name}'"
        if text:
            self._events.send(LogOutput(text))

    def launch(self, name: str, cmd: str, args: Sequence[str]) -> threading.Thread:
        logger.info("Launching command %s: %s %s", name, cmd, list(args))
        t = threading.Thread(
            target=self._work,
            args=(name, cmd, tuple(args)),
            name=f"cmd-{name}",
            daemon=True,
        )
        t.start()
        return t
