# tests/test_logging_setup.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from admin_console.logging_setup import level_from_name, setup_logging


@pytest.fixture()
def root_handlers() -> Iterator[None]:
    root = logging.getLogger()
    saved, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (" error ", logging.ERROR),
        ("loud", logging.INFO),
        ("", logging.INFO),
    ],
)
def test_level_from_name(name: str, expected: int) -> None:
    assert level_from_name(name) == expected


def test_file_handler_uses_configured_level(tmp_path: Path, root_handlers: None) -> None:
    log_file = setup_logging(log_dir=tmp_path, file_level=level_from_name("WARNING"))

    (handler,) = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
    assert handler.level == logging.WARNING

    logging.getLogger("admin_console.test").info("hidden")
    logging.getLogger("admin_console.test").warning("kept")
    handler.flush()

    text = log_file.read_text("utf-8")
    assert "kept" in text
    assert "hidden" not in text
