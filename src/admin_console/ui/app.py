# src/admin_console/ui/app.py

"""
Full-screen dashboard (textual).

Thin adapter around the Dashboard controller:
- key presses are decoded into core Keys and handed to Dashboard.handle_key,
- a fixed-rate timer drains the event bus, runs Dashboard.tick and redraws,
- every panel is produced by the pure helpers in ui.render.
"""

from __future__ import annotations

import logging

import psutil
from rich.panel import Panel
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from ..core.dashboard import Dashboard
from ..core.view import Actions, InputPopup, Key
from . import render

logger = logging.getLogger(__name__)

_SPECIAL_KEYS = {
    "escape": "escape",
    "enter": "enter",
    "tab": "tab",
    "backspace": "backspace",
    "delete": "delete",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "home": "home",
    "end": "end",
    "space": " ",
}


def key_from_textual(key: str, character: str | None = None) -> Key | None:
    """Translate a textual key string ("ctrl+shift+left", "a", "escape") into a core Key."""
    if not key:
        return None
    *mods, base = key.split("+")
    ctrl = "ctrl" in mods
    alt = "alt" in mods or "meta" in mods
    shift = "shift" in mods

    if not ctrl and not alt and character and len(character) == 1 and character.isprintable():
        return Key(character, shift=shift)
    if ctrl and base == "h":
        # Most terminals send Ctrl+Backspace as ^H.
        return Key("backspace", ctrl=True, alt=alt, shift=shift)
    if base in _SPECIAL_KEYS:
        return Key(_SPECIAL_KEYS[base], ctrl=ctrl, alt=alt, shift=shift)
    if len(base) == 1:
        return Key(base, ctrl=ctrl, alt=alt, shift=shift)
    return None


class ContentPane(Static, can_focus=True):
    """Editor / action list pane. Owns keyboard focus and forwards every key."""

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        key = key_from_textual(event.key, event.character)
        if key is not None:
            self.app.handle_key(key)  # type: ignore[attr-defined]

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self.app.handle_paste(event.text)  # type: ignore[attr-defined]


class DashboardApp(App):
    """Servers / schedule / system on the left, tabs + editor or actions on the right."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: horizontal;
    }

    #left {
        width: 45%;
    }

    #right {
        width: 55%;
    }

    #servers {
        height: 1fr;
    }

    #schedule {
        height: 9;
    }

    #system {
        height: 4;
    }

    #tabs {
        height: 1;
    }

    #content {
        height: 1fr;
    }

    #popup {
        height: auto;
        display: none;
    }
    """

    def __init__(
            self,
            dashboard: Dashboard,
            *,
            tick_seconds: float = 0.1,
            stats_seconds: float = 1.0,
            title: str = "Admin Console",
    ) -> None:
        super().__init__()
        self.dashboard = dashboard
        self.tick_seconds = tick_seconds
        self.stats_seconds = stats_seconds
        self.title = title
        self._cpu = 0.0
        self._mem = 0.0

    def compose(self) -> ComposeResult:
        with Vertical(id="left"):
            yield Static(id="servers")
            yield Static(id="schedule")
            yield Static(id="system")
        with Vertical(id="right"):
            yield Static(id="tabs")
            yield ContentPane(id="content")
            yield Static(id="popup")

    def on_mount(self) -> None:
        psutil.cpu_percent(interval=None)
        self._sample_stats()
        self.set_interval(self.tick_seconds, self._on_tick)
        self.set_interval(self.stats_seconds, self._sample_stats)
        self.query_one("#content", ContentPane).focus()
        self.redraw()

    # ---- loop ----

    def _sample_stats(self) -> None:
        try:
            self._cpu = psutil.cpu_percent(interval=None)
            self._mem = psutil.virtual_memory().percent
        except Exception:
            logger.debug("System stats sampling failed.", exc_info=True)

    def _on_tick(self) -> None:
        self.dashboard.pump()
        self.dashboard.tick()
        self.redraw()
        self._exit_if_requested()

    def _exit_if_requested(self) -> None:
        if self.dashboard.should_quit:
            self.exit()

    def handle_key(self, key: Key) -> None:
        self.dashboard.handle_key(key)
        self.redraw()
        self._exit_if_requested()

    def handle_paste(self, text: str) -> None:
        self.dashboard.handle_paste(text)
        self.redraw()

    async def action_quit(self) -> None:
        self.dashboard.should_quit = True
        self.exit()

    # ---- drawing ----

    def redraw(self) -> None:
        d = self.dashboard
        view = d.view

        self.query_one("#servers", Static).update(render.render_servers(d.statuses))
        self.query_one("#schedule", Static).update(render.render_schedule(d.tasks))
        self.query_one("#system", Static).update(render.render_system(self._cpu, self._mem))
        self.query_one("#tabs", Static).update(render.render_tabs(d.displayed_buffer))

        content = self.query_one("#content", ContentPane)
        shown = d.displayed_buffer
        if shown is None:
            selected = view.selected if isinstance(view, Actions) else 0
            if isinstance(view, InputPopup):
                selected = view.command_index
            content.update(render.render_actions(d.commands, selected))
        else:
            height = max(1, content.size.height - 2)
            body = render.render_buffer(d.buffers[shown], height)
            content.update(Panel(body, title=shown.title))

        popup = self.query_one("#popup", Static)
        overlay = render.render_popup(view)
        popup.display = overlay is not None
        if overlay is not None:
            popup.update(overlay)
