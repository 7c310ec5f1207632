"""Text rendering of the tab bar and block overlays using Rich."""

import io
from typing import Collection, Sequence

from rich.console import Console
from rich.style import Style
from rich.text import Text

from ..blocks.scanner import Block, GridSnapshot
from ..blocks.selection import BlockSelection
from ..config import GROUP_MEMBER_SEPARATOR, PIN_MARKER, TAB_SELECTED_MARKER
from ..workspace.types import GroupView, SingleView, TabView

ACTIVE_STYLE = Style(bold=True, reverse=True)
FOCUSED_MEMBER_STYLE = Style(bold=True, underline=True)
INACTIVE_STYLE = Style(dim=True)
GUTTER_STYLE = Style(color="bright_black")
HOVER_STYLE = Style(color="cyan", bold=True)
SELECTED_STYLE = Style(color="green", bold=True)


def _render_view(view: TabView, active: bool, selected: Collection[str]) -> Text:
    text = Text()
    if view.is_pinned:
        text.append(f"{PIN_MARKER} ")

    if isinstance(view, GroupView):
        for i, tab in enumerate(view.tabs):
            if i:
                text.append(GROUP_MEMBER_SEPARATOR)
            style = FOCUSED_MEMBER_STYLE if tab.id == view.group.focused_tab_id else None
            text.append(tab.title, style=style)
        text.append(f" [{view.group.layout}]")
    else:
        text.append(view.tab.title)

    text.stylize(ACTIVE_STYLE if active else INACTIVE_STYLE)
    if isinstance(view, SingleView) and view.tab.id in selected:
        text.append(f" {TAB_SELECTED_MARKER}", style=SELECTED_STYLE)
    return text


def render_tab_bar(
    views: Sequence[TabView],
    active_tab_id: str | None,
    selected: Collection[str] | None = None,
) -> Text:
    """Render tab bar entries left to right.

    An entry is active when it contains the active tab. Ungrouped tabs marked
    for combining get a trailing marker.

    Args:
        views: Sorted tab bar entries
        active_tab_id: Active tab id
        selected: Tab ids marked for combining

    Returns:
        Rich Text, one cell per entry separated by spaces
    """
    selected = selected or ()
    bar = Text()
    for i, view in enumerate(views):
        if i:
            bar.append(" ")
        bar.append("[")
        bar.append_text(_render_view(view, active_tab_id in view.tab_ids, selected))
        bar.append("]")
    return bar


def render_blocks(
    snapshot: GridSnapshot,
    blocks: Sequence[Block],
    hovered_id: str | None = None,
    selection: BlockSelection | None = None,
) -> Text:
    """Render visible rows with a gutter marking block extents.

    Gutter markers: "┃" inside a block, "▶" on a hovered block, "●" on a
    selected block; blank rows get no marker.
    """
    marks: dict[int, tuple[str, Style]] = {}
    for block in blocks:
        if selection is not None and block.id in selection:
            mark = ("●", SELECTED_STYLE)
        elif block.id == hovered_id:
            mark = ("▶", HOVER_STYLE)
        else:
            mark = ("┃", GUTTER_STYLE)
        for row in range(block.start_row, block.end_row + 1):
            marks[row] = mark

    out = Text()
    for i, row in enumerate(snapshot.rows):
        if i:
            out.append("\n")
        symbol, style = marks.get(i, (" ", GUTTER_STYLE))
        out.append(symbol, style=style)
        out.append(" ")
        out.append(row or "")
    return out


def to_svg(text: Text, width: int = 80, height: int | None = None) -> str:
    """Render Rich Text to SVG.

    Args:
        text: Rich Text
        width: Terminal width in characters
        height: Terminal height in rows
    """
    console = Console(
        record=True,
        width=width,
        height=height,
        force_terminal=True,
        color_system="truecolor",
        file=io.StringIO(),
    )
    console.print(text, end="")
    return console.export_svg(title="")
