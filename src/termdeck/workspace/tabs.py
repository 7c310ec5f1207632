"""TabRegistry - ordered tab collection

Owns Tab records, their pin state and the active-tab selection. All ordering
for navigation goes through sorted_tabs(), which is recomputed on each call.
"""

from ..config import DEFAULT_TAB_TITLE_PREFIX
from ..core.ids import IdGenerator
from ..telemetry import format_tab_log, get_logger
from .types import Tab, view_sort_key

logger = get_logger(__name__)


class TabRegistry:
    """Tab registry

    Attributes:
        ids: Id generator and logical clock
        active_tab_id: Id of the active tab, None when empty
    """

    def __init__(self, ids: IdGenerator | None = None):
        self._ids = ids or IdGenerator()
        self._tabs: dict[str, Tab] = {}
        self._active_tab_id: str | None = None

    # === Queries ===

    @property
    def ids(self) -> IdGenerator:
        return self._ids

    @property
    def active_tab_id(self) -> str | None:
        return self._active_tab_id

    @property
    def active_tab(self) -> Tab | None:
        if self._active_tab_id is None:
            return None
        return self._tabs.get(self._active_tab_id)

    def get(self, tab_id: str) -> Tab | None:
        return self._tabs.get(tab_id)

    def __contains__(self, tab_id: str) -> bool:
        return tab_id in self._tabs

    def __len__(self) -> int:
        return len(self._tabs)

    @property
    def tabs(self) -> list[Tab]:
        """Tabs in insertion order."""
        return list(self._tabs.values())

    def find_by_session(self, session_id: str) -> Tab | None:
        for tab in self._tabs.values():
            if tab.session_id == session_id:
                return tab
        return None

    def sorted_tabs(self) -> list[Tab]:
        """Pinned tabs by pin time, then unpinned tabs by creation time."""
        return sorted(
            self._tabs.values(),
            key=lambda t: view_sort_key(t.is_pinned, t.pinned_at, t.created_at),
        )

    # === Lifecycle ===

    def new_tab(self, session_id: str, title: str | None = None) -> Tab:
        """Build a fresh Tab record without registering it.

        Args:
            session_id: Backing session id
            title: Display title, defaults to "<prefix> <n>"
        """
        tab_id = self._ids.next_tab_id()
        return Tab(
            id=tab_id,
            session_id=session_id,
            title=title or f"{DEFAULT_TAB_TITLE_PREFIX} {self._ids.tab_count}",
            created_at=self._ids.now(),
        )

    def add(self, tab: Tab) -> Tab:
        """Append a tab and make it active."""
        self._tabs[tab.id] = tab
        self._active_tab_id = tab.id
        logger.debug(format_tab_log("Tabs", tab.id, f"Added '{tab.title}'"))
        return tab

    def remove(self, tab_id: str) -> Tab | None:
        """Remove a tab.

        If the removed tab was active, the tab now occupying its position in
        the sorted order becomes active (clamped to the last tab).

        Returns:
            The removed Tab, or None for an unknown id
        """
        if tab_id not in self._tabs:
            return None

        old_index = [t.id for t in self.sorted_tabs()].index(tab_id)
        tab = self._tabs.pop(tab_id)

        if self._active_tab_id == tab_id:
            remaining = self.sorted_tabs()
            if remaining:
                self._active_tab_id = remaining[min(old_index, len(remaining) - 1)].id
            else:
                self._active_tab_id = None

        logger.debug(format_tab_log("Tabs", tab_id, f"Removed, active={self._active_tab_id}"))
        return tab

    # === Pinning ===

    def pin(self, tab_id: str) -> bool:
        tab = self._tabs.get(tab_id)
        if tab is None:
            return False
        tab.pin(self._ids.now())
        return True

    def unpin(self, tab_id: str) -> bool:
        tab = self._tabs.get(tab_id)
        if tab is None:
            return False
        tab.unpin()
        return True

    def toggle_pin(self, tab_id: str) -> bool:
        """Toggle pin state.

        Returns:
            False for an unknown id, True otherwise
        """
        tab = self._tabs.get(tab_id)
        if tab is None:
            return False
        if tab.is_pinned:
            return self.unpin(tab_id)
        return self.pin(tab_id)

    # === Selection ===

    def switch_to(self, tab_id: str) -> bool:
        if tab_id not in self._tabs:
            return False
        self._active_tab_id = tab_id
        return True

    def switch_by_index(self, index: int) -> bool:
        """Activate the tab at a position of the sorted order."""
        ordered = self.sorted_tabs()
        if 0 <= index < len(ordered):
            self._active_tab_id = ordered[index].id
            return True
        return False

    def switch_to_previous(self) -> bool:
        """Activate the previous tab in sorted order, wrapping to the last."""
        return self._step(-1)

    def switch_to_next(self) -> bool:
        """Activate the next tab in sorted order, wrapping to the first."""
        return self._step(1)

    def _step(self, offset: int) -> bool:
        ordered = [t.id for t in self.sorted_tabs()]
        if not ordered:
            return False
        try:
            current = ordered.index(self._active_tab_id)
        except ValueError:
            # No valid active tab: next lands on the first, previous on the last
            current = -1 if offset > 0 else 0
        self._active_tab_id = ordered[(current + offset) % len(ordered)]
        return True

    # === Misc ===

    def update_title(self, tab_id: str, title: str) -> bool:
        tab = self._tabs.get(tab_id)
        if tab is None:
            return False
        tab.title = title
        return True
