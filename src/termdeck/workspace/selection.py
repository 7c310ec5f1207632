"""Tab selection for combining

Users mark tabs (shift-click, context menu) and combine them into a group in
one go. Selection order is kept and becomes the tiling order.
"""

from typing import Iterable


class TabSelection:
    """Ordered set of tab ids marked for combining."""

    def __init__(self):
        self._ids: dict[str, None] = {}

    def __contains__(self, tab_id: str) -> bool:
        return tab_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def ids(self) -> list[str]:
        """Selected ids in selection order."""
        return list(self._ids)

    def toggle(self, tab_id: str) -> bool:
        """Toggle a tab.

        Returns:
            Whether the tab is selected afterwards
        """
        if tab_id in self._ids:
            del self._ids[tab_id]
            return False
        self._ids[tab_id] = None
        return True

    def discard(self, tab_id: str) -> None:
        self._ids.pop(tab_id, None)

    def clear(self) -> None:
        self._ids.clear()

    def prune(self, live_ids: Iterable[str]) -> int:
        """Drop ids of tabs that no longer exist.

        Returns:
            Number of ids dropped
        """
        live = set(live_ids)
        stale = [tab_id for tab_id in self._ids if tab_id not in live]
        for tab_id in stale:
            del self._ids[tab_id]
        return len(stale)
