# src/admin_console/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the monitor in a background thread,
then runs the full-screen dashboard in the main thread. On exit (quit key, editor
escape, Ctrl+C) every buffer is saved synchronously.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..logging_setup import level_from_name, setup_logging
from ..monitor.runner import start_monitor_in_background
from ..ui.app import DashboardApp

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.dashboard.save_all()
    except Exception:
        logger.exception("Final save failed.")


def main() -> None:
    settings = get_settings()

    level = level_from_name(getattr(settings, "log_level", "INFO"))
    setup_logging(log_dir=settings.log_dir, console_level=level, file_level=level, console=False)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    runner = start_monitor_in_background(state.monitor)

    app = DashboardApp(
        state.dashboard,
        tick_seconds=settings.ui_tick_ms / 1000.0,
        title=settings.app_name,
    )
    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, shutting down...")
    finally:
        if runner is not None:
            runner.stop()
            runner.join(timeout=5.0)
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
