"""Workspace - single owner of tab and group state

Coordinates the TabRegistry, GroupRegistry and PaneNavigator with the
outside world:
- Session lifecycle through a SessionProvider (create/close/write/resize)
- View-handle table: tab id -> TerminalView
- Tab selection for combining into groups
- Output routing and block scanning for the focused view

Session calls are awaited before any registry mutation; the mutation itself
runs without awaiting, so an observer never sees half of an operation.
Provider and view failures are logged and counted here and never reach the
caller.
"""

from ..blocks.scanner import Block, scan_snapshot
from ..core.ids import IdGenerator, is_group_id
from ..sessions.base import SessionProvider, TerminalView
from ..telemetry import format_tab_log, get_logger, metrics
from .groups import GroupRegistry
from .navigator import PaneNavigator
from .selection import TabSelection
from .tabs import TabRegistry
from .types import Direction, GroupView, SingleView, Tab, TabGroup, TabView

logger = get_logger(__name__)


class Workspace:
    """Tab workspace

    Attributes:
        provider: Session backend
        tabs: Tab registry
        groups: Group registry
        navigator: Pane navigator for groups
        selection: Tabs marked for combining
    """

    def __init__(self, provider: SessionProvider, ids: IdGenerator | None = None):
        self._provider = provider
        self._tabs = TabRegistry(ids)
        self._groups = GroupRegistry(self._tabs)
        self._navigator = PaneNavigator(self._groups)
        self._selection = TabSelection()
        self._views: dict[str, TerminalView] = {}
        self._closing: set[str] = set()

    @property
    def provider(self) -> SessionProvider:
        return self._provider

    @property
    def tabs(self) -> TabRegistry:
        return self._tabs

    @property
    def groups(self) -> GroupRegistry:
        return self._groups

    @property
    def navigator(self) -> PaneNavigator:
        return self._navigator

    @property
    def selection(self) -> TabSelection:
        return self._selection

    # === Tab lifecycle ===

    async def create_tab(self, title: str | None = None) -> Tab | None:
        """Start a session and add a tab for it.

        The session and its view are both set up before the tab is
        registered; if either fails nothing is added and a started session
        is closed again.

        Returns:
            The new active Tab, or None if the session could not be created
        """
        try:
            session_id = await self._provider.create_session()
        except Exception as e:
            logger.warning(f"[Workspace] Failed to create session: {e}")
            metrics.inc("tab.create_failed", {"provider": self._provider.name})
            return None

        try:
            view = self._provider.open_view(session_id)
        except Exception as e:
            logger.warning(f"[Workspace] Failed to open view for {session_id}: {e}")
            metrics.inc("tab.create_failed", {"provider": self._provider.name})
            await self._close_session(session_id, None)
            return None

        tab = self._tabs.add(self._tabs.new_tab(session_id, title))
        if view is not None:
            self._views[tab.id] = view

        metrics.inc("tab.created")
        logger.info(format_tab_log("Workspace", tab.id, f"Created '{tab.title}' on {session_id}"))
        return tab

    async def close_tab(self, tab_id: str) -> bool:
        """Close a tab and its session.

        A failing session close is logged and counted; the tab is removed
        regardless. A second close of a tab that is already closing is a
        no-op.

        Returns:
            Whether a tab was removed
        """
        tab = self._tabs.get(tab_id)
        if tab is None or tab_id in self._closing:
            return False

        self._closing.add(tab_id)
        try:
            await self._close_session(tab.session_id, tab_id)
        finally:
            self._closing.discard(tab_id)

        if tab_id not in self._tabs:
            return False

        self._groups.handle_tab_close(tab_id)
        self._tabs.remove(tab_id)
        self._selection.discard(tab_id)
        view = self._views.pop(tab_id, None)
        if view is not None:
            self._dispose_view(tab_id, view)

        metrics.inc("tab.closed")
        logger.info(format_tab_log("Workspace", tab_id, "Closed"))
        return True

    async def close_active_tab(self) -> bool:
        """Close the focused tab (the focused pane when a group is active)."""
        tab_id = self.focused_tab_id()
        if tab_id is None:
            return False
        return await self.close_tab(tab_id)

    async def _close_session(self, session_id: str, tab_id: str | None) -> None:
        try:
            await self._provider.close_session(session_id)
        except Exception as e:
            logger.warning(
                format_tab_log("Workspace", tab_id, f"Session {session_id} close failed, may leak: {e}")
            )
            metrics.inc("session.close_failed", {"provider": self._provider.name})

    # === View handles ===

    def register_view(self, tab_id: str, view: TerminalView) -> bool:
        """Attach a renderer to a tab, replacing any previous one."""
        if tab_id not in self._tabs:
            return False
        old = self._views.get(tab_id)
        if old is not None and old is not view:
            self._dispose_view(tab_id, old)
        self._views[tab_id] = view
        return True

    def get_view(self, tab_id: str) -> TerminalView | None:
        return self._views.get(tab_id)

    def _dispose_view(self, tab_id: str, view: TerminalView) -> None:
        try:
            view.dispose()
        except Exception as e:
            logger.warning(format_tab_log("Workspace", tab_id, f"View dispose failed: {e}"))

    # === Active view ===

    def view_for_tab(self, tab_id: str) -> TabView | None:
        """The tab bar entry containing a tab."""
        tab = self._tabs.get(tab_id)
        if tab is None:
            return None
        group = self._groups.group_for_tab(tab_id)
        if group is not None:
            for view in self._groups.tab_views():
                if view.id == group.id:
                    return view
        return SingleView(tab)

    def active_view(self) -> TabView | None:
        if self._tabs.active_tab_id is None:
            return None
        return self.view_for_tab(self._tabs.active_tab_id)

    def focused_tab_id(self) -> str | None:
        """The tab receiving input: the active tab, or its group's focused pane."""
        tab_id = self._tabs.active_tab_id
        if tab_id is None:
            return None
        group = self._groups.group_for_tab(tab_id)
        if group is not None:
            return group.focused_tab_id
        return tab_id

    def activate_view(self, view_id: str) -> bool:
        """Activate a tab bar entry by tab or group id."""
        if is_group_id(view_id):
            group = self._groups.get(view_id)
            if group is None:
                return False
            return self._tabs.switch_to(group.focused_tab_id)
        return self._tabs.switch_to(view_id)

    def toggle_active_pin(self) -> bool:
        """Toggle pin on the active entry (the group when the tab is grouped)."""
        view = self.active_view()
        if isinstance(view, GroupView):
            return self._groups.toggle_pin(view.group.id)
        if isinstance(view, SingleView):
            return self._tabs.toggle_pin(view.tab.id)
        return False

    def navigate_active_group(self, direction: Direction | str) -> bool:
        """Move pane focus in the active group and make the new pane active."""
        view = self.active_view()
        if not isinstance(view, GroupView):
            return False
        if not self._navigator.navigate(view.group.id, direction):
            return False
        return self._tabs.switch_to(view.group.focused_tab_id)

    # === Combining ===

    def toggle_tab_selection(self, tab_id: str) -> bool:
        """Mark or unmark a tab for combining.

        Returns:
            Whether the tab is selected afterwards (False for an unknown id)
        """
        if tab_id not in self._tabs:
            return False
        return self._selection.toggle(tab_id)

    def combine_selected(self) -> TabGroup | None:
        """Combine the selected tabs, in selection order, into a new group.

        On success the selection is cleared and the group becomes active.

        Returns:
            The new TabGroup, or None if fewer than two selected tabs remain
        """
        self._selection.prune(tab.id for tab in self._tabs.tabs)
        if len(self._selection) < 2:
            return None

        group = self._groups.combine(self._selection.ids)
        if group is None:
            return None

        self._selection.clear()
        self.activate_view(group.id)
        return group

    def detach_focused_pane(self) -> bool:
        """Detach the focused pane of the active group into its own tab."""
        view = self.active_view()
        if not isinstance(view, GroupView):
            return False
        return self._groups.detach(view.group.id, view.group.focused_tab_id)

    # === I/O ===

    async def write_to_tab(self, tab_id: str, data: bytes) -> bool:
        tab = self._tabs.get(tab_id)
        if tab is None:
            return False
        try:
            await self._provider.write(tab.session_id, data)
            return True
        except Exception as e:
            logger.warning(format_tab_log("Workspace", tab_id, f"Write failed: {e}"))
            return False

    async def resize_tab(self, tab_id: str, rows: int, cols: int) -> bool:
        """Resize a tab's view and session.

        Returns:
            Whether the session was resized
        """
        tab = self._tabs.get(tab_id)
        if tab is None:
            return False
        view = self._views.get(tab_id)
        if view is not None:
            try:
                await view.resize(rows, cols)
            except Exception as e:
                logger.warning(format_tab_log("Workspace", tab_id, f"View resize failed: {e}"))
        try:
            await self._provider.resize(tab.session_id, rows, cols)
            return True
        except Exception as e:
            logger.warning(format_tab_log("Workspace", tab_id, f"Resize failed: {e}"))
            return False

    async def route_output(self, session_id: str, data: bytes) -> bool:
        """Deliver session output to its tab's view.

        Returns:
            Whether the output landed in the focused view, i.e. a block
            rescan is due
        """
        tab = self._tabs.find_by_session(session_id)
        if tab is None:
            return False
        view = self._views.get(tab.id)
        if view is None:
            return False
        try:
            await view.feed(data)
        except Exception as e:
            logger.warning(format_tab_log("Workspace", tab.id, f"View feed failed: {e}"))
            return False
        return tab.id == self.focused_tab_id()

    async def scan_focused_blocks(self) -> list[Block]:
        """Scan the focused view's visible rows into blocks."""
        tab_id = self.focused_tab_id()
        if tab_id is None:
            return []
        view = self._views.get(tab_id)
        if view is None:
            return []

        try:
            snapshot = await view.snapshot()
        except Exception as e:
            logger.warning(format_tab_log("Workspace", tab_id, f"Snapshot failed: {e}"))
            return []

        blocks = scan_snapshot(snapshot)
        metrics.inc("blocks.scanned")
        metrics.gauge("blocks.count", len(blocks))
        return blocks

    # === Debug ===

    def to_dict(self) -> dict:
        """Serializable state dump."""
        return {
            "active_tab_id": self._tabs.active_tab_id,
            "focused_tab_id": self.focused_tab_id(),
            "selected_tab_ids": self._selection.ids,
            "tabs": [tab.to_dict() for tab in self._tabs.sorted_tabs()],
            "groups": [group.to_dict() for group in self._groups.groups],
        }
