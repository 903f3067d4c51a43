"""Markdown to HTML conversion engine for note bodies."""
import logging

from ..domain.document import ConversionState
from ..domain.errors import InvalidInputError
from ..domain.registry import LinkRegistry
from .blocks import (
    BlockquotePass,
    CodeBlockPass,
    HeaderPass,
    ListPass,
    ParagraphPass,
    RulePass,
)
from .inline import InlinePass
from .references import ReferenceExtractor
from .sentinels import SentinelCodec

logger = logging.getLogger(__name__)


class MarkdownConverter:
    """Converts one note body at a time into an HTML fragment.

    Link references found in a document stay registered on the converter
    after the call returns. Use a fresh converter per document, or call
    ``reset`` before reusing one. A converter is not safe to share between
    threads.
    """

    def __init__(self):
        """Initialize the converter and its pass pipeline."""
        self.registry = LinkRegistry()
        self.count = 0

        self._sentinels = SentinelCodec()
        self._references = ReferenceExtractor()
        self._paragraphs = ParagraphPass()
        self._block_passes = [
            HeaderPass(),
            ListPass(),
            RulePass(),
            BlockquotePass(self._paragraphs),
            CodeBlockPass(),
        ]
        self._inline = InlinePass()

    def convert(self, text: str) -> str:
        """
        Convert Markdown text to HTML.

        Args:
            text: Note body in Markdown

        Returns:
            HTML fragment, trimmed of surrounding whitespace

        Raises:
            InvalidInputError: If ``text`` is not a string
        """
        if not isinstance(text, str):
            raise InvalidInputError(
                f"Expected text to convert, got {type(text).__name__}"
            )

        self.count += 1
        logger.debug("Conversion #%d: %d characters", self.count, len(text))

        state = ConversionState(registry=self.registry)
        text = self._sentinels.normalize(text)
        text = self._references.apply(text, state)
        for block_pass in self._block_passes:
            text = block_pass.apply(text, state)
        text = self._paragraphs.apply(text, state)
        text = state.blocks.expand(text)
        text = self._inline.apply(text, state)
        text = state.blocks.expand(text, include_protected=True)
        text = self._sentinels.restore(text)
        return text.strip()

    def reset(self) -> None:
        """Drop link references collected from earlier documents."""
        self.registry.clear()


def convert(text: str) -> str:
    """Convert a single document with a converter of its own."""
    return MarkdownConverter().convert(text)
