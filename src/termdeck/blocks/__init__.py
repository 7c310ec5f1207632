"""Blocks module

- scanner: split visible terminal rows into positioned blocks
- selection: multi-block selection basket
"""

from .scanner import (
    Block,
    GridSnapshot,
    block_at,
    make_block_id,
    row_height_for,
    scan_blocks,
    scan_snapshot,
)
from .selection import BlockSelection

__all__ = [
    "Block",
    "GridSnapshot",
    "block_at",
    "make_block_id",
    "row_height_for",
    "scan_blocks",
    "scan_snapshot",
    "BlockSelection",
]
