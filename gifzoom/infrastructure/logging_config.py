"""
Logging configuration for the gifzoom process.
"""
from __future__ import annotations

import logging
import sys

from gifzoom.infrastructure.config import LoggingSettings

HANDLER_NAME = "gifzoom"


def setup_logging(settings: LoggingSettings | None = None) -> logging.Handler:
    """Install the stdout handler on the root logger.

    Safe to call more than once (every app startup does): the handler from a
    previous call is replaced rather than stacked.
    """
    settings = settings or LoggingSettings()
    log_level = getattr(logging, settings.level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(fmt=settings.format, datefmt=settings.date_format))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)

    # ffmpeg command lines are long; they get their own threshold
    ffmpeg_level = getattr(logging, settings.ffmpeg_level.upper(), log_level)
    logging.getLogger("gifzoom.adapters.outbound.ffmpeg").setLevel(ffmpeg_level)

    for name in settings.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
