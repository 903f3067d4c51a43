"""Note Markdown: a lightweight Markdown-to-HTML engine for note bodies."""
from __future__ import annotations

__version__ = "0.1.0"

from .application.converter import MarkdownConverter, convert
from .domain.errors import ConfigError, ErrorCode, InvalidInputError, NoteMarkdownError
from .domain.registry import LinkRegistry

__all__ = [
    "MarkdownConverter",
    "convert",
    "LinkRegistry",
    "ErrorCode",
    "NoteMarkdownError",
    "InvalidInputError",
    "ConfigError",
]
