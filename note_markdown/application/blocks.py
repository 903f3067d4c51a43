"""Block-level passes: headers, lists, rules, blockquotes, code and paragraphs.

Every pass takes the whole buffer and returns the whole buffer. Finished
blocks are parked in the state's ``BlockStash`` and replaced with a
placeholder, which keeps them out of reach of the passes that follow.
"""
import re

from ..domain.document import ConversionState
from ..shared.text import encode_html


# A line made only of three or more "-", "*" or "_" (spaces allowed between).
_RULE_LOOKAHEAD = r'(?![ ]{0,3}(?P<rule>[-*_])(?:[ \t]*(?P=rule)){2,}[ \t]*$)'
_BLANK_LINE_RE = re.compile(r'[ \t]*(?:\n|\Z)')


def _blank_line_at(text: str, position: int) -> bool:
    return _BLANK_LINE_RE.match(text, position) is not None


class HeaderPass:
    """Setext (``===`` / ``---`` underlines) and ATX (``#``) headers."""

    SETEXT_H1_RE = re.compile(r'^([ \t]*\S.*?)[ \t]*\n=+[ \t]*\n(\n*)', re.MULTILINE)
    SETEXT_H2_RE = re.compile(r'^([ \t]*\S.*?)[ \t]*\n-+[ \t]*\n(\n*)', re.MULTILINE)
    ATX_RE = re.compile(r'^(#{1,6})[ \t]*(.+?)[ \t]*#*\n(\n*)', re.MULTILINE)

    def apply(self, text: str, state: ConversionState) -> str:
        text = self.SETEXT_H1_RE.sub(
            lambda match: self._heading(state, 1, match.group(1), match), text
        )
        text = self.SETEXT_H2_RE.sub(
            lambda match: self._heading(state, 2, match.group(1), match), text
        )
        return self.ATX_RE.sub(
            lambda match: self._heading(state, len(match.group(1)), match.group(2), match),
            text,
        )

    @staticmethod
    def _heading(state: ConversionState, level: int, content: str, match: "re.Match[str]") -> str:
        # The last group holds any newlines past the heading's own line end.
        blank_after = bool(match.groups()[-1]) or _blank_line_at(
            match.string, match.end()
        )
        return state.blocks.hold(
            f"<h{level}>{encode_html(content.strip())}</h{level}>", blank_after=blank_after
        )


class ListPass:
    """Ordered items first, then unordered, one flat list per run of items."""

    ORDERED_MARKER = r'[ ]{0,3}\d+\.[ \t]+'
    UNORDERED_MARKER = r'[ ]{0,3}[*+-][ \t]+'

    def __init__(self):
        self._ordered_re = self._run_pattern(self.ORDERED_MARKER)
        self._unordered_re = self._run_pattern(self.UNORDERED_MARKER)
        self._ordered_marker_re = re.compile(self.ORDERED_MARKER)
        self._unordered_marker_re = re.compile(self.UNORDERED_MARKER)

    @staticmethod
    def _run_pattern(marker: str) -> "re.Pattern[str]":
        # One item per line; a single blank line may separate two items.
        return re.compile(
            rf'^(?:{_RULE_LOOKAHEAD}{marker}\S.*\n(?:[ \t]*\n(?={marker}\S))?)+',
            re.MULTILINE,
        )

    def apply(self, text: str, state: ConversionState) -> str:
        text = self._ordered_re.sub(
            lambda match: self._render(state, "ol", self._ordered_marker_re, match),
            text,
        )
        return self._unordered_re.sub(
            lambda match: self._render(state, "ul", self._unordered_marker_re, match),
            text,
        )

    @staticmethod
    def _render(
        state: ConversionState, tag: str, marker_re: "re.Pattern[str]", match: "re.Match[str]"
    ) -> str:
        items = []
        for line in match.group(0).split("\n"):
            if not line.strip():
                continue
            content = marker_re.sub("", line, count=1)
            items.append(f"<li>{encode_html(content.strip())}</li>")
        return state.blocks.hold(
            f"<{tag}>{''.join(items)}</{tag}>",
            blank_after=_blank_line_at(match.string, match.end()),
        )


class RulePass:
    """Horizontal rules; the line ending is left for the next block to see."""

    RULE_RE = re.compile(r'^[ ]{0,3}([-*_])(?:[ \t]*\1){2,}[ \t]*$', re.MULTILINE)

    def apply(self, text: str, state: ConversionState) -> str:
        def rule(match):
            # Skip the rule's own line end before looking for a blank line.
            end = match.end() + 1 if match.string.startswith("\n", match.end()) else match.end()
            return state.blocks.hold("<hr />", blank_after=_blank_line_at(match.string, end))

        return self.RULE_RE.sub(rule, text)


class ParagraphPass:
    """Wraps every remaining block of text in ``<p>`` and escapes it."""

    BLANK_LINES_RE = re.compile(r'\n(?:[ \t]*\n)+')

    def apply(self, text: str, state: ConversionState) -> str:
        output = []
        for block in self.BLANK_LINES_RE.split(text):
            block = block.strip()
            if not block:
                continue
            if state.blocks.is_placeholder(block):
                output.append(block)
            else:
                output.append(f"<p>{encode_html(block)}</p>")
        return "\n".join(output)


class BlockquotePass:
    """Quoted runs, dequoted once and split into paragraphs.

    A run is one or more ``>`` lines, each followed by any lazily continued
    non-blank lines and blank lines; it stops at the first block that does
    not open with ``>``.
    """

    BLOCKQUOTE_RE = re.compile(
        r'^(?:[ ]{0,3}>.*\n(?:[ \t]*\S.*\n)*(?:[ \t]*\n)*)+',
        re.MULTILINE,
    )
    DEQUOTE_RE = re.compile(r'^[ ]{0,3}>[ \t]?', re.MULTILINE)

    def __init__(self, paragraphs: ParagraphPass):
        self._paragraphs = paragraphs

    def apply(self, text: str, state: ConversionState) -> str:
        def quote(match):
            content = self.DEQUOTE_RE.sub("", match.group(0))
            inner = self._paragraphs.apply(content, state)
            return state.blocks.hold(f"<blockquote>{inner}</blockquote>")

        return self.BLOCKQUOTE_RE.sub(quote, text)


class CodeBlockPass:
    """Indented code: four spaces or a tab, after a blank line.

    Indentation is kept as written. Blank lines that only come from a
    neighbouring block's placeholder padding do not count. The block is held
    as protected so the inline pass never touches its content.
    """

    CODE_BLOCK_RE = re.compile(r'(?:(?<=\n\n)|\A)((?:(?:[ ]{4}|\t).*\n+)+)')
    BLANK_RUN_RE = re.compile(r'\n\n+')

    def apply(self, text: str, state: ConversionState) -> str:
        def code(match):
            if state.blocks.follows_tight_block(match.string, match.start()):
                # Lines up to the author's next blank line continue the text above.
                run = match.group(1)
                split = self.BLANK_RUN_RE.search(run)
                if split is None:
                    return run
                rest = run[split.end():]
                return run[:split.end()] + self.CODE_BLOCK_RE.sub(code, rest)
            content = encode_html(match.group(1).rstrip("\n"))
            return state.blocks.hold(f"<pre><code>{content}</code></pre>", protected=True)

        return self.CODE_BLOCK_RE.sub(code, text)
