"""Block scanner

Segments the visible rows of a terminal into blocks: maximal runs of
consecutive non-empty rows. Each block carries its pixel offset and height so
an overlay (copy button, hover outline) can be positioned over it.

The scanner is a pure function of its snapshot and keeps no state between
calls; it is safe to call on every render or resize tick.
"""

from dataclasses import dataclass, field
from typing import Sequence

from ..config import BLOCK_ID_PREFIX


@dataclass
class GridSnapshot:
    """Visible rows of a terminal view

    Attributes:
        rows: One entry per screen row; None or "" for blank rows
        row_height: Rendered height of one row (pixels or cells)
        viewport_offset: Buffer line index of the first visible row
    """

    rows: list[str | None]
    row_height: float
    viewport_offset: int = 0


@dataclass
class Block:
    """A contiguous run of non-empty rows

    Attributes:
        id: "blk-<viewport_offset>-<start_row>", stable for an unchanged viewport
        y: Vertical offset of the first row, relative to the top of the view
        height: Height of the run
        lines: Row text, top to bottom
        start_row: First row (relative to the viewport)
        end_row: Last row, inclusive
    """

    id: str
    y: float
    height: float
    lines: list[str] = field(default_factory=list)
    start_row: int = 0
    end_row: int = 0

    @property
    def text(self) -> str:
        """Block text for copying."""
        return "\n".join(self.lines)

    def contains(self, y: float) -> bool:
        return self.y <= y <= self.y + self.height


def make_block_id(viewport_offset: int, start_row: int) -> str:
    return f"{BLOCK_ID_PREFIX}-{viewport_offset}-{start_row}"


def row_height_for(pixel_height: float, rows: int) -> float:
    """Height of one row given the rendered screen height."""
    if rows <= 0:
        return 0.0
    return pixel_height / rows


def _row_text(row: str | None) -> str:
    # Terminal buffers pad lines with spaces; trailing padding is not content
    if not row:
        return ""
    return row.rstrip()


def scan_blocks(
    rows: Sequence[str | None],
    row_height: float,
    viewport_offset: int = 0,
) -> list[Block]:
    """Split visible rows into blocks.

    Args:
        rows: Visible row strings, one per screen row
        row_height: Height of one row
        viewport_offset: Buffer line index of the first visible row, used in ids

    Returns:
        Blocks in top-to-bottom order
    """
    blocks: list[Block] = []

    in_block = False
    start = 0
    lines: list[str] = []

    def flush(end: int) -> None:
        blocks.append(
            Block(
                id=make_block_id(viewport_offset, start),
                y=start * row_height,
                height=(end - start + 1) * row_height,
                lines=lines,
                start_row=start,
                end_row=end,
            )
        )

    for i, row in enumerate(rows):
        text = _row_text(row)
        if text:
            if not in_block:
                in_block = True
                start = i
                lines = []
            lines.append(text)
        elif in_block:
            flush(i - 1)
            in_block = False

    if in_block:
        flush(len(rows) - 1)

    return blocks


def scan_snapshot(snapshot: GridSnapshot) -> list[Block]:
    """Scan a GridSnapshot."""
    return scan_blocks(snapshot.rows, snapshot.row_height, snapshot.viewport_offset)


def block_at(blocks: Sequence[Block], y: float) -> Block | None:
    """Find the block under a vertical position (bounds inclusive)."""
    for block in blocks:
        if block.contains(y):
            return block
    return None
