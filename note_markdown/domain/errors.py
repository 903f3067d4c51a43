"""Error taxonomy for the note renderer.

Malformed Markdown never raises: it degrades to escaped paragraph text. The
errors below cover what happens around the engine (bad input values, broken
configuration files, unreadable notes) so that callers can branch on the
error code instead of parsing messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    INVALID_INPUT = "invalid_input"
    CONFIG = "config"
    IO = "io"


@dataclass
class NoteMarkdownError(Exception):
    code: ErrorCode
    message: str
    source: Optional[str] = None

    def __str__(self) -> str:
        if self.source:
            return f"{self.code.value}: {self.message} ({self.source})"
        return f"{self.code.value}: {self.message}"


class InvalidInputError(NoteMarkdownError):
    """Raised when the converter is handed something other than text."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(ErrorCode.INVALID_INPUT, message, source)


class ConfigError(NoteMarkdownError):
    """Raised when a configuration file cannot be loaded."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        super().__init__(ErrorCode.CONFIG, message, source)


__all__ = [
    "ErrorCode",
    "NoteMarkdownError",
    "InvalidInputError",
    "ConfigError",
]
