# config.example.py

"""
Documentation-only module (safe to commit).

Runtime settings come from environment variables (optionally via a local .env file).
Targets and admin commands live in config.json (see config.example.json).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)
"""

ENV_VARS = {
    # App / logging
    "ADMIN_APP_NAME": "Window title and notification app name (default: Admin Console).",
    "ADMIN_LOG_LEVEL": "Logging level (default: INFO).",
    "ADMIN_LOG_DIR": "Directory for admin_console.log (default: .local/admin_console).",
    # Paths
    "ADMIN_DATA_DIR": "Base directory for the files below (default: current directory).",
    "ADMIN_CONFIG_PATH": "Targets/commands JSON (default: <data_dir>/config.json).",
    "ADMIN_NOTES_PATH": "Notes buffer file (default: <data_dir>/notes.txt).",
    "ADMIN_TODO_PATH": "Todo buffer file (default: <data_dir>/todo.txt).",
    "ADMIN_LOGS_PATH": "Logs buffer file (default: <data_dir>/logs.txt).",
    "ADMIN_TASKS_JSON_PATH": "Task mirror JSON (default: <data_dir>/tasks.json).",
    # Monitor
    "ADMIN_PROBE_TIMEOUT_MS": "TCP connect timeout per probe (default: 500).",
    "ADMIN_MONITOR_INTERVAL_SECONDS": "Pause between monitor ticks (default: 1.0).",
    "ADMIN_NOTIFICATIONS_ENABLED": "Desktop notifications on/off (default: true).",
    # Foreground loop
    "ADMIN_UI_TICK_MS": "Dashboard refresh period (default: 100).",
    "ADMIN_SAVE_DEBOUNCE_SECONDS": "Input inactivity before buffers are written (default: 30).",
    # Commands
    "ADMIN_COMMAND_ENCODING": "Encoding of command output (default: cp866).",
    "ADMIN_INPUT_PLACEHOLDER": "Argument token replaced by user input (default: %INPUT%).",
}
