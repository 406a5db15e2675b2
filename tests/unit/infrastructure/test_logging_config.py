"""Unit tests for logging setup."""
from __future__ import annotations

import logging

import pytest

from gifzoom.infrastructure.config import LoggingSettings
from gifzoom.infrastructure.logging_config import HANDLER_NAME, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("gifzoom.adapters.outbound.ffmpeg").setLevel(logging.NOTSET)


def _installed() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


class TestSetupLogging:
    def test_level_and_format_from_settings(self):
        settings = LoggingSettings(level="debug", format="%(levelname)s %(message)s", date_format="%H:%M")
        handler = setup_logging(settings)

        assert logging.getLogger().level == logging.DEBUG
        assert handler.formatter._fmt == "%(levelname)s %(message)s"
        assert handler.formatter.datefmt == "%H:%M"

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        setup_logging()
        assert len(_installed()) == 1

    def test_quiet_loggers_raised_to_warning(self):
        setup_logging(LoggingSettings(level="DEBUG", quiet_loggers=["noisy.lib"]))
        assert logging.getLogger("noisy.lib").level == logging.WARNING

    def test_ffmpeg_logger_threshold(self):
        setup_logging(LoggingSettings(level="DEBUG", ffmpeg_level="WARNING"))
        assert logging.getLogger("gifzoom.adapters.outbound.ffmpeg").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(LoggingSettings(level="chatty"))
        assert logging.getLogger().level == logging.INFO
