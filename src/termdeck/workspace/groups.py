"""GroupRegistry - tiled tab groups

Owns TabGroup records. Groups hold tab ids only; the Tab records stay owned by
the TabRegistry. Every mutation here writes both sides (group membership and
Tab.group_id / pin state) before returning, so callers never observe a tab
pointing at a dissolved group or a group listing an ungrouped tab.

Dissolution rule: a group whose membership would drop below MIN_GROUP_SIZE is
removed, and its survivors become ungrouped tabs carrying the group's pin state.
"""

from ..config import MAX_GROUP_SIZE, MIN_GROUP_SIZE
from ..core.ids import short_id
from ..telemetry import format_tab_log, get_logger, metrics
from .layout import layout_for
from .tabs import TabRegistry
from .types import GroupView, SingleView, Tab, TabGroup, TabView

logger = get_logger(__name__)


class GroupRegistry:
    """Group registry

    Attributes:
        tabs: The TabRegistry whose tabs are grouped
    """

    def __init__(self, tabs: TabRegistry):
        self._tabs = tabs
        self._groups: dict[str, TabGroup] = {}

    # === Queries ===

    @property
    def groups(self) -> list[TabGroup]:
        """Groups in creation order."""
        return list(self._groups.values())

    def get(self, group_id: str) -> TabGroup | None:
        return self._groups.get(group_id)

    def __contains__(self, group_id: str) -> bool:
        return group_id in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    def group_for_tab(self, tab_id: str) -> TabGroup | None:
        tab = self._tabs.get(tab_id)
        if tab is None or tab.group_id is None:
            return None
        return self._groups.get(tab.group_id)

    # === Structural mutations ===

    def combine(self, tab_ids: list[str]) -> TabGroup | None:
        """Combine tabs into a new group.

        Unknown and repeated ids are dropped; the remaining ids keep their
        order and become the tiling order. Tabs taken from existing groups are
        removed from them first, dissolving any group left with one member.

        The new group is pinned iff any combined tab was pinned. Combined tabs
        lose their standalone pin state.

        Args:
            tab_ids: Tab ids in tiling order

        Returns:
            The new TabGroup, or None if fewer than two ids resolve
        """
        members: list[Tab] = []
        for tab_id in dict.fromkeys(tab_ids):
            tab = self._tabs.get(tab_id)
            if tab is not None:
                members.append(tab)

        if len(members) < MIN_GROUP_SIZE:
            logger.debug(f"[Groups] combine rejected: {len(members)} resolvable tab(s)")
            return None

        member_ids = [tab.id for tab in members]
        member_set = set(member_ids)

        # 1. Pull members out of the groups they currently belong to
        for group in list(self._groups.values()):
            if member_set.isdisjoint(group.tab_ids):
                continue
            remaining = [tid for tid in group.tab_ids if tid not in member_set]
            if len(remaining) < MIN_GROUP_SIZE:
                self._dissolve(group, remaining)
            else:
                self._set_members(group, remaining)

        # 2. Create the group
        ids = self._tabs.ids
        was_pinned = any(tab.is_pinned for tab in members)
        group = TabGroup(
            id=ids.next_group_id(),
            tab_ids=member_ids,
            focused_tab_id=member_ids[0],
            layout=layout_for(len(member_ids)),
            created_at=ids.now(),
        )
        if was_pinned:
            group.pin(ids.now())

        # 3. Pin state moves from the tabs to the group
        for tab in members:
            tab.unpin()
            tab.group_id = group.id

        self._groups[group.id] = group
        metrics.inc("group.combined")
        logger.info(
            format_tab_log(
                "Groups", group.id,
                f"Combined {len(member_ids)} tabs, layout={group.layout}, pinned={was_pinned}",
            )
        )
        return group

    def detach(self, group_id: str, tab_id: str) -> bool:
        """Detach a tab from its group.

        The detached tab inherits the group's pin state. If fewer than two
        members remain the group dissolves and the survivors inherit it too.

        Returns:
            Whether the tab was detached
        """
        group = self._groups.get(group_id)
        if group is None or tab_id not in group.tab_ids:
            return False

        remaining = [tid for tid in group.tab_ids if tid != tab_id]

        tab = self._tabs.get(tab_id)
        if tab is not None:
            self._release(tab, group)

        if len(remaining) < MIN_GROUP_SIZE:
            self._dissolve(group, remaining)
        else:
            self._set_members(group, remaining)

        metrics.inc("group.detached")
        logger.debug(format_tab_log("Groups", group_id, f"Detached {short_id(tab_id)}"))
        return True

    def add_to_group(self, group_id: str, tab_id: str) -> bool:
        """Append a tab to an existing group.

        A tab in another group is detached from it first; that detach runs to
        completion (including dissolving the source group) before the append.

        Returns:
            Whether the tab was added
        """
        group = self._groups.get(group_id)
        tab = self._tabs.get(tab_id)
        if group is None or tab is None:
            return False
        if tab_id in group.tab_ids:
            return False
        if len(group.tab_ids) >= MAX_GROUP_SIZE:
            logger.warning(
                format_tab_log("Groups", group_id, f"Full ({MAX_GROUP_SIZE}), refusing {short_id(tab_id)}")
            )
            return False

        # Step 1: leave the source group
        if tab.group_id is not None and tab.group_id != group_id:
            if not self.detach(tab.group_id, tab_id):
                # Stale back-reference
                tab.group_id = None

        # Step 2: join the target group
        self._set_members(group, group.tab_ids + [tab_id])
        tab.unpin()
        tab.group_id = group_id

        logger.debug(format_tab_log("Groups", group_id, f"Added {short_id(tab_id)}, layout={group.layout}"))
        return True

    def handle_tab_close(self, tab_id: str) -> bool:
        """Remove a tab that is being closed from its group.

        Unlike detach(), the closing tab takes no pin state; survivors keep
        the group while it still has enough members. If the group dissolves,
        the survivors inherit its pin state.

        Returns:
            Whether the tab was grouped
        """
        tab = self._tabs.get(tab_id)
        if tab is None or tab.group_id is None:
            return False

        group = self._groups.get(tab.group_id)
        tab.group_id = None
        if group is None:
            return False

        remaining = [tid for tid in group.tab_ids if tid != tab_id]
        if len(remaining) < MIN_GROUP_SIZE:
            self._dissolve(group, remaining)
        else:
            self._set_members(group, remaining)
        return True

    def set_focused_pane(self, group_id: str, tab_id: str) -> bool:
        group = self._groups.get(group_id)
        if group is None or tab_id not in group.tab_ids:
            return False
        group.focused_tab_id = tab_id
        return True

    # === Pinning ===

    def pin(self, group_id: str) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return False
        group.pin(self._tabs.ids.now())
        return True

    def unpin(self, group_id: str) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return False
        group.unpin()
        return True

    def toggle_pin(self, group_id: str) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return False
        if group.is_pinned:
            return self.unpin(group_id)
        return self.pin(group_id)

    # === Derived views ===

    def tab_views(self) -> list[TabView]:
        """Build the tab bar entries.

        Ungrouped tabs become SingleView, groups with at least two live
        members become GroupView. Sorted like TabRegistry.sorted_tabs(),
        reading pin/creation times from the group for group entries.
        """
        grouped = {tid for group in self._groups.values() for tid in group.tab_ids}

        views: list[TabView] = [
            SingleView(tab) for tab in self._tabs.tabs if tab.id not in grouped
        ]
        for group in self._groups.values():
            members = [self._tabs.get(tid) for tid in group.tab_ids]
            members = [tab for tab in members if tab is not None]
            if len(members) >= MIN_GROUP_SIZE:
                views.append(GroupView(group, members))

        return sorted(views, key=lambda view: view.sort_key)

    # === Internal ===

    def _set_members(self, group: TabGroup, tab_ids: list[str]) -> None:
        """Replace membership, keeping focus on a member and layout in sync."""
        group.tab_ids = tab_ids
        group.layout = layout_for(len(tab_ids))
        if group.focused_tab_id not in tab_ids:
            group.focused_tab_id = tab_ids[0]

    def _release(self, tab: Tab, group: TabGroup) -> None:
        """Return a tab to ungrouped status with the group's pin state."""
        tab.group_id = None
        if group.is_pinned:
            tab.pin(self._tabs.ids.now())
        else:
            tab.unpin()

    def _dissolve(self, group: TabGroup, survivors: list[str]) -> None:
        for tid in survivors:
            tab = self._tabs.get(tid)
            if tab is not None and tab.group_id == group.id:
                self._release(tab, group)
        self._groups.pop(group.id, None)
        metrics.inc("group.dissolved")
        logger.info(format_tab_log("Groups", group.id, f"Dissolved, {len(survivors)} survivor(s)"))
