"""Workspace module

State for tabs and tiled groups:
- types: Tab, TabGroup, TileLayout, tab bar views
- layout: pane count -> grid shape
- tabs: TabRegistry
- groups: GroupRegistry
- navigator: pane focus movement inside a group
- manager: Workspace, the single owner wiring them to sessions and views
"""

from .types import (
    Direction,
    GroupView,
    SingleView,
    Tab,
    TabGroup,
    TabView,
    TileLayout,
)
from .layout import layout_for
from .tabs import TabRegistry
from .groups import GroupRegistry
from .navigator import PaneNavigator, next_pane_index
from .selection import TabSelection
from .manager import Workspace

__all__ = [
    # Types
    "Direction",
    "GroupView",
    "SingleView",
    "Tab",
    "TabGroup",
    "TabView",
    "TileLayout",
    # Layout
    "layout_for",
    # Registries
    "TabRegistry",
    "GroupRegistry",
    # Navigation
    "PaneNavigator",
    "next_pane_index",
    # Selection
    "TabSelection",
    # Manager
    "Workspace",
]
