# src/admin_console/ui/render.py

"""
Pure render helpers: dashboard state in, rich renderables out.

Nothing here mutates state or talks to the terminal; the textual app only places
the returned renderables into widgets.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.models import OFFLINE_SAMPLE, AdminCommand, BufferId, ServerStatus, Task, WizardStep
from ..core.view import InputPopup, Search, TaskWizard, ViewState
from ..editor.buffer import TextBuffer

SPARK_BARS = "▁▂▃▄▅▆▇█"
OFFLINE_BAR = "×"
SLOW_LATENCY_MS = 100
SCHEDULE_LIMIT = 5
TITLE_WIDTH = 18


def sparkline(history: Iterable[int]) -> str:
    """One glyph per sample, scaled to the largest online latency in the window."""
    samples = list(history)
    online = [s for s in samples if s != OFFLINE_SAMPLE]
    peak = max(online, default=0)
    out = []
    for s in samples:
        if s == OFFLINE_SAMPLE:
            out.append(OFFLINE_BAR)
        elif peak <= 0:
            out.append(SPARK_BARS[0])
        else:
            idx = min(len(SPARK_BARS) - 1, int(s / peak * (len(SPARK_BARS) - 1)))
            out.append(SPARK_BARS[idx])
    return "".join(out)


def status_color(status: ServerStatus) -> str:
    if not status.is_online:
        return "red"
    if status.latency > SLOW_LATENCY_MS:
        return "yellow"
    return "green"


def render_servers(statuses: Sequence[ServerStatus]) -> RenderableType:
    table = Table(expand=True, box=None, header_style="yellow")
    table.add_column("Server", ratio=3, no_wrap=True)
    table.add_column("Ping", ratio=2, no_wrap=True)
    table.add_column("Status", ratio=1, no_wrap=True)
    table.add_column("History", ratio=5, no_wrap=True)

    for s in statuses:
        color = status_color(s)
        ping = f"{s.latency}ms" if s.is_online else "---"
        table.add_row(
            s.name,
            Text(ping, style=color),
            Text("●", style=color),
            Text(sparkline(s.history), style=color),
        )
    return Panel(table, title=" Servers ", border_style="blue")


def schedule_order(tasks: Iterable[Task]) -> list[Task]:
    """Active tasks: timed first (by time), then untimed (by title)."""
    active = [t for t in tasks if not t.completed]
    return sorted(active, key=lambda t: (0, t.time, "") if t.time else (1, "", t.title))


def _short(title: str, width: int = TITLE_WIDTH) -> str:
    return f"{title[:width]}.." if len(title) > width else title


def render_schedule(tasks: Iterable[Task], limit: int = SCHEDULE_LIMIT) -> RenderableType:
    rows: list[Text] = []
    separated = False
    for i, task in enumerate(schedule_order(tasks)[:limit]):
        if task.time:
            rows.append(Text(f" ⏰ {task.time} │ {_short(task.title)}", style="yellow"))
            continue
        if i > 0 and not separated:
            rows.append(Text(" ──────────────────────", style="bright_black"))
        separated = True
        rows.append(Text(f"  --   │ {_short(task.title)}", style="cyan"))

    if not rows:
        rows.append(Text("   (No active tasks)", style="bright_black"))
    return Panel(Group(*rows), title=" Schedule ", border_style="blue")


def _gauge(label: str, percent: float, width: int, color: str) -> Text:
    percent = max(0.0, min(100.0, percent))
    filled = int(round(width * percent / 100.0))
    text = Text(f"{label}: {percent:5.1f}% ")
    text.append("█" * filled, style=color)
    text.append("░" * (width - filled), style="bright_black")
    return text


def render_system(cpu_percent: float, mem_percent: float, width: int = 20) -> RenderableType:
    return Panel(
        Group(_gauge("CPU", cpu_percent, width, "green"), _gauge("RAM", mem_percent, width, "magenta")),
        title=" System ",
        border_style="yellow",
    )


def render_tabs(active: BufferId | None) -> Text:
    text = Text()
    for bid in BufferId:
        style = "bold green" if bid is active else ""
        text.append(bid.title, style=style)
        text.append("│", style="bright_black")
    if active is None:
        text.append(" [TAB] ACTIONS ", style="black on yellow")
    else:
        text.append(" [TAB] Actions | [ALT+T] New Task", style="bright_black")
    return text


def _scroll(cursor_row: int, height: int, total: int) -> int:
    if height <= 0 or total <= height:
        return 0
    return max(0, min(cursor_row - height // 2, total - height))


def render_buffer(buffer: TextBuffer, height: int) -> Text:
    """Visible window of the buffer with cursor, selection and search matches styled."""
    lines = buffer.lines
    top = _scroll(buffer.row, height, len(lines))
    bottom = len(lines) if height <= 0 else min(len(lines), top + height)
    selection = buffer.selection_range()

    out = Text()
    for row in range(top, bottom):
        line = Text(lines[row] + " ")
        for start, end in buffer.matches_in_line(row):
            line.stylize("black on yellow", start, end)
        if selection is not None:
            (r1, c1), (r2, c2) = selection
            if r1 <= row <= r2:
                s = c1 if row == r1 else 0
                e = c2 if row == r2 else len(lines[row])
                line.stylize("reverse", s, max(s, e))
        if row == buffer.row:
            line.stylize("black on white", buffer.col, buffer.col + 1)
        out.append_text(line)
        if row != bottom - 1:
            out.append("\n")
    return out


def render_actions(commands: Sequence[AdminCommand], selected: int) -> RenderableType:
    if not commands:
        return Text("  (No commands configured)", style="bright_black")
    rows = []
    for i, cmd in enumerate(commands):
        if i == selected:
            rows.append(Text(f">> {cmd.name}", style="bold white on blue"))
        else:
            rows.append(Text(f"   {cmd.name}", style="white"))
    return Panel(Group(*rows), title=" Select a command ")


_WIZARD_TITLES = {
    WizardStep.TITLE: " 1/3: Task title ",
    WizardStep.DESCRIPTION: " 2/3: Description ",
    WizardStep.TIME: " 3/3: Reminder time ",
}


def render_popup(view: ViewState) -> RenderableType | None:
    """Overlay for Search / InputPopup / TaskWizard, or None."""
    if isinstance(view, Search):
        return Panel(Text(f"Search: {view.query}", style="yellow"), border_style="cyan")
    if isinstance(view, InputPopup):
        return Panel(Text(view.input_buffer, style="yellow"), title=" Enter argument (IP/Host) ")
    if isinstance(view, TaskWizard):
        if view.step is WizardStep.TITLE:
            body = f"Enter a title:\n\n> {view.input_buffer}"
        elif view.step is WizardStep.DESCRIPTION:
            body = f"Title: {view.title}\n\nEnter a description (may be empty):\n> {view.input_buffer}"
        else:
            body = f"Title: {view.title}\n\nEnter a time (HH:MM) or Enter to skip:\n> {view.input_buffer}"
        return Panel(Text(body, style="cyan"), title=_WIZARD_TITLES[view.step])
    return None
