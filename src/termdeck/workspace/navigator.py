"""Pane navigation inside a tiled group

Panes are laid out row-major: index i sits at row i // cols, column i % cols.
The last row may be partially filled, so every move is clamped to [0, n).
"""

from ..telemetry import format_tab_log, get_logger, metrics
from .groups import GroupRegistry
from .types import Direction, TileLayout

logger = get_logger(__name__)


def next_pane_index(index: int, count: int, layout: TileLayout, direction: Direction) -> int:
    """Compute the pane index reached by moving in a direction.

    - next/prev cycle through all panes
    - left/right wrap within the current row
    - up/down wrap within the current column

    Args:
        index: Current pane index
        count: Number of panes
        layout: Grid shape
        direction: Move direction

    Returns:
        Target index; equal to index when the move goes nowhere
    """
    if count <= 0 or not 0 <= index < count:
        return index

    cols = max(layout.cols, 1)

    if direction is Direction.NEXT:
        return (index + 1) % count

    if direction is Direction.PREV:
        return (index - 1 + count) % count

    if direction is Direction.RIGHT:
        target = index + 1
        if target % cols == 0 or target >= count:
            target = index - index % cols
        return target

    if direction is Direction.LEFT:
        if index % cols == 0:
            return min(index + cols - 1, count - 1)
        return index - 1

    if direction is Direction.DOWN:
        target = index + cols
        if target >= count:
            target = index % cols
        return target

    if direction is Direction.UP:
        target = index - cols
        if target < 0:
            last_row_start = (count - 1) // cols * cols
            target = min(last_row_start + index % cols, count - 1)
        return target

    return index


class PaneNavigator:
    """Moves focus between panes of a group."""

    def __init__(self, groups: GroupRegistry):
        self._groups = groups

    def navigate(self, group_id: str, direction: Direction | str) -> bool:
        """Move the group's focus.

        Args:
            group_id: Group id
            direction: Direction or its string value

        Returns:
            Whether focus changed
        """
        group = self._groups.get(group_id)
        if group is None:
            return False

        if isinstance(direction, str):
            try:
                direction = Direction(direction)
            except ValueError:
                logger.debug(f"[Navigator] Unknown direction: {direction!r}")
                return False

        index = group.focused_index
        if index == -1:
            return False

        count = len(group.tab_ids)
        target = next_pane_index(index, count, group.layout, direction)
        if target == index or not 0 <= target < count:
            return False

        self._groups.set_focused_pane(group_id, group.tab_ids[target])
        metrics.inc("pane.navigated", {"direction": direction.value})
        logger.debug(
            format_tab_log("Navigator", group_id, f"{direction.value}: {index} -> {target}")
        )
        return True
