"""HTML escaping helpers shared by the block and inline passes."""
from __future__ import annotations


def encode_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``, ampersand first."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def encode_attribute(text: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return encode_html(text).replace('"', "&quot;")


def decode_html(text: str) -> str:
    """Reverse ``encode_html``."""
    return text.replace("&lt;", "<").replace("&gt;", ">").replace("&amp;", "&")
