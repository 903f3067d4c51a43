"""Per-conversion state shared by the conversion passes."""
import re
from dataclasses import dataclass, field
from typing import List

from .registry import LinkRegistry


PLACEHOLDER_PATTERN = re.compile(r'~K(\d+)K')
# A placeholder immediately before a given position, padding included.
TRAILING_PLACEHOLDER_PATTERN = re.compile(r'~K(\d+)K\n\n+\Z')


@dataclass
class StashedBlock:
    """Finished HTML for one block, parked until the buffer is reassembled."""
    html: str
    protected: bool = False
    blank_after: bool = True


class BlockStash:
    """Holds generated block HTML behind placeholder tokens.

    Block passes replace the markup they consume with a token such as
    ``~K3K`` padded by blank lines, so later block passes see the block as an
    opaque paragraph of its own. Literal tildes are encoded as ``~T`` before
    any pass runs, which keeps author text from ever forming a token.
    Protected blocks (code) survive the inline pass untouched.
    """

    def __init__(self):
        self._blocks: List[StashedBlock] = []

    def hold(self, html: str, protected: bool = False, blank_after: bool = True) -> str:
        """Park a finished block and return its padded placeholder.

        The padding always reads as a blank line. ``blank_after`` records
        whether the author actually left one after the block.
        """
        self._blocks.append(StashedBlock(html, protected, blank_after))
        return f"\n\n~K{len(self._blocks) - 1}K\n\n"

    def is_placeholder(self, block: str) -> bool:
        return PLACEHOLDER_PATTERN.fullmatch(block.strip()) is not None

    def follows_tight_block(self, text: str, position: int) -> bool:
        """True when ``position`` comes right after a block with no blank line after it."""
        start = text.rfind("~K", 0, position)
        if start < 0:
            return False
        match = TRAILING_PLACEHOLDER_PATTERN.match(text, start, position)
        if match is None:
            return False
        return not self._blocks[int(match.group(1))].blank_after

    def expand(self, text: str, include_protected: bool = False) -> str:
        """Swap placeholders back for their HTML."""
        def replace(match):
            block = self._blocks[int(match.group(1))]
            if block.protected and not include_protected:
                return match.group(0)
            return block.html

        return PLACEHOLDER_PATTERN.sub(replace, text)

    def __len__(self) -> int:
        return len(self._blocks)


@dataclass
class ConversionState:
    """Context for a single ``convert`` call."""
    registry: LinkRegistry
    blocks: BlockStash = field(default_factory=BlockStash)
