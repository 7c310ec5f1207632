"""Workspace data types

Contains:
- TileLayout: grid shape of a group
- Tab: one terminal session's presence in the workspace
- TabGroup: a tiled arrangement of >= 2 tabs
- SingleView / GroupView: derived display entries for the tab bar
- Direction: pane navigation directions
"""

from dataclasses import dataclass, field
from enum import Enum


class Direction(Enum):
    """Pane navigation direction within a group."""

    NEXT = "next"
    PREV = "prev"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class TileLayout:
    """Row/column shape of a tiled group."""

    rows: int
    cols: int

    def __str__(self) -> str:
        return f"{self.rows}x{self.cols}"


@dataclass
class Tab:
    """A terminal tab

    Attributes:
        id: Stable unique id, never reused
        session_id: Id of the backing session from the session provider
        title: Display title
        created_at: Logical creation timestamp
        is_pinned: Whether the tab is pinned
        pinned_at: Logical pin timestamp, set iff is_pinned
        group_id: Id of the containing group, None when ungrouped
    """

    id: str
    session_id: str
    title: str
    created_at: int
    is_pinned: bool = False
    pinned_at: int | None = None
    group_id: str | None = None

    def pin(self, at: int) -> None:
        self.is_pinned = True
        self.pinned_at = at

    def unpin(self) -> None:
        self.is_pinned = False
        self.pinned_at = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "session_id": self.session_id,
            "title": self.title,
            "created_at": self.created_at,
            "is_pinned": self.is_pinned,
            "pinned_at": self.pinned_at,
            "group_id": self.group_id,
        }


@dataclass
class TabGroup:
    """A tiled group of tabs

    Attributes:
        id: Unique id, distinct from tab ids
        tab_ids: Member tab ids in tiling order (left-to-right, top-to-bottom)
        focused_tab_id: Focused member, always an element of tab_ids
        layout: Grid shape derived from len(tab_ids)
        created_at: Logical creation timestamp
        is_pinned: Whether the group is pinned
        pinned_at: Logical pin timestamp, set iff is_pinned
    """

    id: str
    tab_ids: list[str]
    focused_tab_id: str
    layout: TileLayout
    created_at: int
    is_pinned: bool = False
    pinned_at: int | None = None

    def pin(self, at: int) -> None:
        self.is_pinned = True
        self.pinned_at = at

    def unpin(self) -> None:
        self.is_pinned = False
        self.pinned_at = None

    @property
    def focused_index(self) -> int:
        """Index of the focused member, -1 if focus is somehow stale."""
        try:
            return self.tab_ids.index(self.focused_tab_id)
        except ValueError:
            return -1

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tab_ids": list(self.tab_ids),
            "focused_tab_id": self.focused_tab_id,
            "layout": {"rows": self.layout.rows, "cols": self.layout.cols},
            "created_at": self.created_at,
            "is_pinned": self.is_pinned,
            "pinned_at": self.pinned_at,
        }


def view_sort_key(is_pinned: bool, pinned_at: int | None, created_at: int) -> tuple:
    """Sort key shared by tabs and views.

    Pinned entries first by pin time, then unpinned entries by creation time.
    """
    if is_pinned:
        return (0, pinned_at or 0)
    return (1, created_at)


@dataclass
class SingleView:
    """Tab bar entry for an ungrouped tab."""

    tab: Tab
    kind: str = field(default="single", init=False)

    @property
    def id(self) -> str:
        return self.tab.id

    @property
    def is_pinned(self) -> bool:
        return self.tab.is_pinned

    @property
    def pinned_at(self) -> int | None:
        return self.tab.pinned_at

    @property
    def created_at(self) -> int:
        return self.tab.created_at

    @property
    def tab_ids(self) -> list[str]:
        return [self.tab.id]

    @property
    def sort_key(self) -> tuple:
        return view_sort_key(self.is_pinned, self.pinned_at, self.created_at)


@dataclass
class GroupView:
    """Tab bar entry for a group, with its member tabs resolved in order."""

    group: TabGroup
    tabs: list[Tab]
    kind: str = field(default="group", init=False)

    @property
    def id(self) -> str:
        return self.group.id

    @property
    def is_pinned(self) -> bool:
        return self.group.is_pinned

    @property
    def pinned_at(self) -> int | None:
        return self.group.pinned_at

    @property
    def created_at(self) -> int:
        return self.group.created_at

    @property
    def tab_ids(self) -> list[str]:
        return [tab.id for tab in self.tabs]

    @property
    def sort_key(self) -> tuple:
        return view_sort_key(self.is_pinned, self.pinned_at, self.created_at)


TabView = SingleView | GroupView
