"""Sentinel encoding applied before the first pass and reversed after the last."""
import re


class SentinelCodec:
    """Escapes characters the pipeline reserves for its own markers.

    ``~`` becomes ``~T`` and ``$`` becomes ``~D``. After encoding, every tilde
    in the buffer starts a two-character sentinel, so passes are free to use
    other ``~`` sequences (block placeholders) without colliding with text.
    """

    _RESTORE_MAP = {"T": "~", "D": "$"}
    _SENTINEL_RE = re.compile(r'~([TD])')

    def normalize(self, text: str) -> str:
        """
        Encode sentinels, unify line endings and pad the buffer.

        Args:
            text: Raw note text

        Returns:
            Buffer framed by two blank lines on each side
        """
        text = text.replace("~", "~T")
        text = text.replace("$", "~D")
        text = text.replace("\r\n", "\n")
        text = text.replace("\r", "\n")
        return "\n\n" + text + "\n\n"

    def restore(self, text: str) -> str:
        """Decode sentinels in a single left-to-right pass."""
        return self._SENTINEL_RE.sub(lambda match: self._RESTORE_MAP[match.group(1)], text)
