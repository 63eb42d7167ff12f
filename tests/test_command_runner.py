# tests/test_command_runner.py

from __future__ import annotations

import sys

from admin_console.commands.runner import CommandRunner, decode_output, format_output, run_command
from admin_console.core.bus import EventBus
from admin_console.core.events import LogOutput


def test_format_output_stdout_only_is_trimmed() -> None:
    assert format_output(b"  ok\n\n", b"", "utf-8") == "ok"


def test_format_output_appends_labelled_stderr() -> None:
    assert format_output(b"out\n", b"bad\n", "utf-8") == "out\n\nERROR:\nbad"


def test_format_output_stderr_only() -> None:
    assert format_output(b"", b"boom", "utf-8") == "ERROR:\nboom"


def test_decode_legacy_console_encoding() -> None:
    raw = "Ответ от 10.0.0.1".encode("cp866")
    assert decode_output(raw) == "Ответ от 10.0.0.1"


def test_decode_unknown_encoding_falls_back_to_utf8() -> None:
    assert decode_output("héllo".encode(), "no-such-codec") == "héllo"


def test_run_missing_executable_reports_failure() -> None:
    text = run_command("definitely-not-a-real-binary-xyz", [], "utf-8")
    assert text.startswith("Failed to run:")


def test_run_real_process() -> None:
    text = run_command(sys.executable, ["-c", "print('hi')"], "utf-8")
    assert text == "hi"


def test_run_captures_stderr() -> None:
    code = "import sys; print('out'); print('err', file=sys.stderr)"
    text = run_command(sys.executable, ["-c", code], "utf-8")
    assert text == "out\n\nERROR:\nerr"


def test_launch_posts_log_output() -> None:
    events = EventBus()
    runner = CommandRunner(events, encoding="utf-8")

    thread = runner.launch("Hello", sys.executable, ["-c", "print('hello')"])
    thread.join(timeout=10)

    assert events.drain() == [LogOutput("hello")]


def test_launch_with_empty_output_posts_nothing() -> None:
    events = EventBus()
    runner = CommandRunner(events, encoding="utf-8")

    thread = runner.launch("Quiet", sys.executable, ["-c", "pass"])
    thread.join(timeout=10)

    assert events.drain() == []


def test_launch_failure_is_logged_as_text() -> None:
    events = EventBus()
    runner = CommandRunner(events, encoding="utf-8")

    runner.launch("Broken", "definitely-not-a-real-binary-xyz", []).join(timeout=10)

    (event,) = events.drain()
    assert isinstance(event, LogOutput)
    assert event.text.startswith("Failed to run:")
