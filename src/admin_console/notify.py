# src/admin_console/notify.py

"""
Desktop-side adapters: notifications (desktop-notifier) and the system clipboard (pyperclip).

Both are best-effort. Nothing here raises into the caller.
"""

from __future__ import annotations

import logging

import pyperclip
from desktop_notifier import DesktopNotifier, Urgency

logger = logging.getLogger(__name__)


class DesktopNotifierSink:
    """
    Notifier port backed by desktop-notifier.

    The DesktopNotifier is created lazily on first use, so it binds to the loop of
    the thread that sends (the monitor thread).
    """

    def __init__(self, app_name: str = "Admin Console", *, enabled: bool = True) -> None:
        self.app_name = app_name
        self.enabled = enabled
        self._notifier: DesktopNotifier | None = None

    def _get_notifier(self) -> DesktopNotifier:
        if self._notifier is None:
            self._notifier = DesktopNotifier(app_name=self.app_name)
        return self._notifier

    async def notify(self, title: str, message: str, *, urgent: bool = False) -> None:
        if not self.enabled:
            return
        try:
            await self._get_notifier().send(
                title=title,
                message=message or " ",
                urgency=Urgency.Critical if urgent else Urgency.Normal,
            )
        except Exception:
            logger.debug("Desktop notification failed title=%s", title, exc_info=True)


class SystemClipboard:
    """Clipboard port backed by pyperclip. An unavailable clipboard reads as empty."""

    def get_text(self) -> str:
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException:
            logger.debug("Clipboard read failed.", exc_info=True)
            return ""

    def set_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException:
            logger.debug("Clipboard write failed.", exc_info=True)
