"""Application logger configuration tests."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

import pricesheet.core
import pricesheet.logger as app_logger


def test_get_logger_writes_rotating_log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_logger, "_LOGGER", None, raising=False)

    logger = app_logger.get_logger(tmp_path / "logs")
    logger.info("hello from tests")

    assert logger.name == "pricesheet"
    assert app_logger.get_logger() is logger
    handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(handlers) == 1
    handlers[0].flush()
    assert "hello from tests" in (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")


def test_service_loggers_are_children(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app_logger, "_LOGGER", None, raising=False)
    monkeypatch.setattr(app_logger, "_work_dir", lambda: tmp_path / "work")

    logger = app_logger.get_logger()

    assert (tmp_path / "work" / "logs" / "app.log").exists()
    child = logging.getLogger("pricesheet.services.template_fill")
    assert child.parent is logger


def test_core_modules_do_not_log() -> None:
    core_dir = Path(pricesheet.core.__file__).parent

    for source in core_dir.glob("*.py"):
        assert "logging" not in source.read_text(encoding="utf-8"), source.name
