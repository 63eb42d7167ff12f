# src/admin_console/config.py

"""
Centralized settings loaded from environment variables (+ optional .env),
plus the JSON app config (targets and admin commands).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is fatal: bad values fall back to defaults, a bad config.json to an empty config.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.models import AdminCommand, Target

logger = logging.getLogger(__name__)

ENV_PREFIX = "ADMIN"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Local data paths ----
    data_dir: Path
    config_path: Path
    notes_path: Path
    todo_path: Path
    logs_path: Path
    tasks_json_path: Path

    # ---- Monitor ----
    probe_timeout_ms: int
    monitor_interval_seconds: float
    notifications_enabled: bool

    # ---- Foreground loop ----
    ui_tick_ms: int
    save_debounce_seconds: float

    # ---- Commands ----
    command_encoding: str
    input_placeholder: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Admin Console")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/admin_console"))

        data_dir = _env_path(_k("DATA_DIR"), Path("."))
        config_path = _env_path(_k("CONFIG_PATH"), data_dir / "config.json")
        notes_path = _env_path(_k("NOTES_PATH"), data_dir / "notes.txt")
        todo_path = _env_path(_k("TODO_PATH"), data_dir / "todo.txt")
        logs_path = _env_path(_k("LOGS_PATH"), data_dir / "logs.txt")
        tasks_json_path = _env_path(_k("TASKS_JSON_PATH"), data_dir / "tasks.json")

        probe_timeout_ms = _env_int(_k("PROBE_TIMEOUT_MS"), 500)
        if probe_timeout_ms <= 0:
            probe_timeout_ms = 500
        monitor_interval_seconds = _env_float(_k("MONITOR_INTERVAL_SECONDS"), 1.0)
        if monitor_interval_seconds <= 0:
            monitor_interval_seconds = 1.0
        notifications_enabled = _env_bool(_k("NOTIFICATIONS_ENABLED"), True)

        ui_tick_ms = _env_int(_k("UI_TICK_MS"), 100)
        if ui_tick_ms <= 0:
            ui_tick_ms = 100
        save_debounce_seconds = _env_float(_k("SAVE_DEBOUNCE_SECONDS"), 30.0)
        if save_debounce_seconds < 0:
            save_debounce_seconds = 30.0

        command_encoding = _env(_k("COMMAND_ENCODING"), "cp866")
        input_placeholder = _env(_k("INPUT_PLACEHOLDER"), "%INPUT%") or "%INPUT%"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            data_dir=data_dir,
            config_path=config_path,
            notes_path=notes_path,
            todo_path=todo_path,
            logs_path=logs_path,
            tasks_json_path=tasks_json_path,
            probe_timeout_ms=probe_timeout_ms,
            monitor_interval_seconds=monitor_interval_seconds,
            notifications_enabled=notifications_enabled,
            ui_tick_ms=ui_tick_ms,
            save_debounce_seconds=save_debounce_seconds,
            command_encoding=command_encoding,
            input_placeholder=input_placeholder,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for a few safe switches.
try:
    import config_local as _config_local  # type: ignore

    if hasattr(_config_local, "NOTIFICATIONS_ENABLED"):
        object.__setattr__(SETTINGS, "notifications_enabled", bool(_config_local.NOTIFICATIONS_ENABLED))  # type: ignore[misc]
    if hasattr(_config_local, "COMMAND_ENCODING"):
        object.__setattr__(SETTINGS, "command_encoding", str(_config_local.COMMAND_ENCODING))  # type: ignore[misc]
except Exception:
    pass


def get_settings() -> Settings:
    return SETTINGS


# --------------------------------------------------------------------------------------
# config.json: targets + admin commands (read once at startup).
# --------------------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AppConfig:
    targets: tuple[Target, ...] = field(default_factory=tuple)
    commands: tuple[AdminCommand, ...] = field(default_factory=tuple)


def _parse_targets(raw: object) -> list[Target]:
    out: list[Target] = []
    if not isinstance(raw, list):
        return out
    for item in raw:
        if not isinstance(item, dict):
            logger.warning("Skipping malformed target entry: %r", item)
            continue
        name, address = item.get("name"), item.get("address")
        if not isinstance(name, str) or not isinstance(address, str):
            logger.warning("Skipping target without name/address: %r", item)
            continue
        out.append(Target(name=name, address=address))
    return out


def _parse_commands(raw: object) -> list[AdminCommand]:
    out: list[AdminCommand] = []
    if not isinstance(raw, list):
        return out
    for item in raw:
        if not isinstance(item, dict):
            logger.warning("Skipping malformed command entry: %r", item)
            continue
        name, cmd = item.get("name"), item.get("cmd")
        args = item.get("args", [])
        if not isinstance(name, str) or not isinstance(cmd, str) or not isinstance(args, list):
            logger.warning("Skipping command without name/cmd/args: %r", item)
            continue
        out.append(AdminCommand(name=name, cmd=cmd, args=tuple(str(a) for a in args)))
    return out


def load_app_config(path: str | Path) -> AppConfig:
    """Missing or malformed file -> empty config (never fatal)."""
    path = Path(path)
    if not path.exists():
        logger.info("No config at %s, starting with an empty config.", path)
        return AppConfig()
    try:
        data = json.loads(path.read_text("utf-8"))
    except (OSError, ValueError):
        logger.warning("Failed to read config %s, using an empty config.", path, exc_info=True)
        return AppConfig()
    if not isinstance(data, dict):
        logger.warning("Config %s is not a JSON object, using an empty config.", path)
        return AppConfig()

    cfg = AppConfig(
        targets=tuple(_parse_targets(data.get("targets"))),
        commands=tuple(_parse_commands(data.get("commands"))),
    )
    logger.info("Loaded config %s: %d targets, %d commands", path, len(cfg.targets), len(cfg.commands))
    return cfg
