"""Extraction of reference-style link definitions."""
import logging
import re

from ..domain.document import ConversionState

logger = logging.getLogger(__name__)


class ReferenceExtractor:
    """Removes ``[label]: url "title"`` definitions and records them.

    A definition starts a line (indented by at most three spaces). The URL may
    be wrapped in angle brackets and the title, wrapped in double quotes,
    single quotes or parentheses, may sit on the same line or the next one.
    The definition and the blank lines after it are dropped from the buffer.
    """

    DEFINITION_RE = re.compile(
        r'^[ ]{0,3}\[([^\]\n]+)\]:[ \t]*\n?[ \t]*'
        r'<?(\S+?)>?[ \t]*'
        r'(?:\n?[ \t]*["\'(](.+?)["\')][ \t]*)?'
        r'(?:\n+|\Z)',
        re.MULTILINE,
    )

    def apply(self, text: str, state: ConversionState) -> str:
        def record(match):
            key = state.registry.define(match.group(1), match.group(2), match.group(3))
            logger.debug("Registered link reference %r", key)
            return ""

        return self.DEFINITION_RE.sub(record, text)
