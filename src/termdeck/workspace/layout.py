"""Tile layout calculation"""

from .types import TileLayout


def layout_for(count: int) -> TileLayout:
    """Map a pane count to a grid shape.

    - 0 or 1 pane: 1x1
    - 2 panes: 1x2 (side by side)
    - 3-4 panes: 2x2
    - 5-6 panes: 2x3
    - 7 or more: 3x3

    Counts above 9 still return 3x3; the extra panes overflow the grid.

    Args:
        count: Number of panes (>= 0)

    Returns:
        TileLayout for the count
    """
    if count <= 1:
        return TileLayout(rows=1, cols=1)
    if count == 2:
        return TileLayout(rows=1, cols=2)
    if count <= 4:
        return TileLayout(rows=2, cols=2)
    if count <= 6:
        return TileLayout(rows=2, cols=3)
    return TileLayout(rows=3, cols=3)
