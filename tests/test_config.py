# tests/test_config.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from admin_console.config import AppConfig, Settings, load_app_config
from admin_console.core.models import AdminCommand, Target


def _write(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), "utf-8")
    return path


def test_missing_config_is_empty(tmp_path: Path) -> None:
    assert load_app_config(tmp_path / "nope.json") == AppConfig()


def test_malformed_config_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{ targets: ", "utf-8")
    assert load_app_config(path) == AppConfig()

    _write(path, ["not", "an", "object"])
    assert load_app_config(path) == AppConfig()


def test_config_loads_targets_and_commands(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.json",
        {
            "targets": [
                {"name": "Google DNS", "address": "8.8.8.8:53"},
                {"name": "Router", "address": "192.168.0.1:80"},
            ],
            "commands": [
                {"name": "Uptime", "cmd": "uptime", "args": []},
                {"name": "Ping host", "cmd": "ping", "args": ["-c", 4, "%INPUT%"]},
                {"name": "No args", "cmd": "whoami"},
            ],
        },
    )

    cfg = load_app_config(path)

    assert cfg.targets == (Target("Google DNS", "8.8.8.8:53"), Target("Router", "192.168.0.1:80"))
    assert cfg.commands == (
        AdminCommand("Uptime", "uptime"),
        AdminCommand("Ping host", "ping", ("-c", "4", "%INPUT%")),
        AdminCommand("No args", "whoami"),
    )


def test_malformed_entries_are_skipped(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.json",
        {
            "targets": [{"name": "ok", "address": "h:1"}, {"name": "no address"}, "junk"],
            "commands": [{"cmd": "missing-name"}, {"name": "bad args", "cmd": "x", "args": "nope"}],
        },
    )

    cfg = load_app_config(path)

    assert cfg.targets == (Target("ok", "h:1"),)
    assert cfg.commands == ()


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ADMIN_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("ADMIN_PROBE_TIMEOUT_MS", "250")
    monkeypatch.setenv("ADMIN_NOTIFICATIONS_ENABLED", "off")
    monkeypatch.setenv("ADMIN_COMMAND_ENCODING", "utf-8")
    monkeypatch.delenv("ADMIN_TODO_PATH", raising=False)

    s = Settings.from_env()

    assert s.todo_path == tmp_path / "todo.txt"
    assert s.config_path == tmp_path / "config.json"
    assert s.probe_timeout_ms == 250
    assert s.notifications_enabled is False
    assert s.command_encoding == "utf-8"


def test_settings_bad_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_PROBE_TIMEOUT_MS", "fast")
    monkeypatch.setenv("ADMIN_MONITOR_INTERVAL_SECONDS", "-1")
    monkeypatch.setenv("ADMIN_SAVE_DEBOUNCE_SECONDS", "")

    s = Settings.from_env()

    assert s.probe_timeout_ms == 500
    assert s.monitor_interval_seconds == 1.0
    assert s.save_debounce_seconds == 30.0
