"""Shared logging setup for the note renderer."""
from __future__ import annotations

import logging

from ..domain.configuration import LoggingOptions

LOGGER_NAME = "note_markdown"


def configure_logger(options: LoggingOptions) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level."""

    logger = logging.getLogger(LOGGER_NAME)
    level = logging.getLevelName(options.level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(options.fmt)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if options.log_file:
        options.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(options.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger
