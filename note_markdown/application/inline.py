"""Inline pass: strong, emphasis, images and links."""
import re

from ..domain.document import ConversionState
from ..shared.text import decode_html, encode_attribute


class InlinePass:
    """Character-level markup applied across the reassembled buffer."""

    # Spans may wrap onto the next line of a block but never reach the next
    # block, which always starts with a tag or a code placeholder.
    SPAN = r'(?:[^\n]|\n(?!<|~K))*?'
    STRONG_RE = re.compile(rf'(\*\*|__)(?=\S)({SPAN}\S[*_]*)\1')
    EMPHASIS_RE = re.compile(rf'(\*|_)(?=\S)({SPAN}\S)\1')
    IMAGE_RE = re.compile(r'!\[(.*?)\]\((.*?)\)')
    # Link text may hold one level of nested brackets, e.g. an image.
    LINK_RE = re.compile(
        r'\[((?:\[[^\]]*\]|[^\[\]])*)\]'
        r'\(([^\'"\s]+)(\s*("[^"]*"|\'[^\']*\')?\s*)?\)'
    )

    def apply(self, text: str, state: ConversionState) -> str:
        text = self.STRONG_RE.sub(r'<strong>\2</strong>', text)
        text = self.EMPHASIS_RE.sub(r'<em>\2</em>', text)
        text = self.IMAGE_RE.sub(r'<img src="\2" alt="\1" />', text)
        return self.LINK_RE.sub(lambda match: self._link(match, state), text)

    @staticmethod
    def _link(match: "re.Match[str]", state: ConversionState) -> str:
        label, href, quoted_title = match.group(1), match.group(2), match.group(4)
        title = quoted_title[1:-1] if quoted_title else ""

        # The visible text doubles as a reference key.
        key = decode_html(label)
        reference_url = state.registry.url_for(key)
        if reference_url is not None:
            href = encode_attribute(reference_url)
        reference_title = state.registry.title_for(key)
        if reference_title:
            title = encode_attribute(reference_title)

        title_attribute = f' title="{title}"' if title else ""
        return f'<a href="{href}"{title_attribute}>{label}</a>'
