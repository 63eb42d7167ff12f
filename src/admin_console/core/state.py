# src/admin_console/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .bus import EventBus, MonitorChannel
from .dashboard import Dashboard

if TYPE_CHECKING:
    from ..config import AppConfig
    from ..monitor.monitor import Monitor


@dataclass(slots=True)
class AppState:
    # Settings object (real Settings or a test namespace with the same fields).
    settings: Any
    app_config: AppConfig

    # Foreground side
    dashboard: Dashboard
    events: EventBus

    # Background side (owned by the monitor thread once started)
    monitor: Monitor
    monitor_channel: MonitorChannel
