"""Block selection basket

Users pick several blocks (cmd-click) and copy them in one go. Selection is
keyed by block id, so it survives rescans of an unchanged viewport and is
pruned when the blocks it refers to disappear.
"""

from typing import Iterable, Sequence

from ..config import SELECTION_HEADER, SELECTION_SEPARATOR
from .scanner import Block


class BlockSelection:
    """Set of selected block ids."""

    def __init__(self):
        self._ids: set[str] = set()

    def __contains__(self, block_id: str) -> bool:
        return block_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> set[str]:
        return set(self._ids)

    def toggle(self, block_id: str) -> bool:
        """Toggle a block.

        Returns:
            Whether the block is selected afterwards
        """
        if block_id in self._ids:
            self._ids.discard(block_id)
            return False
        self._ids.add(block_id)
        return True

    def clear(self) -> None:
        self._ids.clear()

    def prune(self, blocks: Iterable[Block]) -> int:
        """Drop selected ids that are not among the current blocks.

        Returns:
            Number of ids dropped
        """
        live = {block.id for block in blocks}
        stale = self._ids - live
        self._ids -= stale
        return len(stale)

    def selected(self, blocks: Sequence[Block]) -> list[Block]:
        """Selected blocks in scan order."""
        return [block for block in blocks if block.id in self._ids]

    def format(self, blocks: Sequence[Block]) -> str:
        """Render the selection for the clipboard.

        Each selected block becomes "### Block N" followed by its text,
        numbered from 1 in scan order; sections are separated by a blank line.
        """
        return SELECTION_SEPARATOR.join(
            f"{SELECTION_HEADER.format(index=i)}\n{block.text}"
            for i, block in enumerate(self.selected(blocks), start=1)
        )
