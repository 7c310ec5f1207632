"""Keyboard shortcuts for the workspace.

Chord syntax: modifiers and a key joined by "+", case-insensitive and in any
order ("Cmd+Shift+P" == "shift+cmd+p"). Modifiers: cmd, ctrl, alt, shift.

Default bindings:
- cmd+t: new tab
- cmd+w: close the focused tab
- cmd+shift+[ / cmd+shift+]: previous / next tab
- cmd+shift+p: toggle pin on the active tab or group
- cmd+shift+g: combine the tabs selected for combining into a group
- cmd+shift+d: detach the focused pane from the active group
- cmd+1 .. cmd+9: switch to tab N
- cmd+alt+<arrow>: move pane focus in the active group
- cmd+alt+[ / cmd+alt+]: previous / next pane in the active group
"""

import logging

from .workspace.manager import Workspace
from .workspace.types import Direction

logger = logging.getLogger(__name__)

_MODIFIER_ORDER = ("cmd", "ctrl", "alt", "shift")
_MODIFIER_ALIASES = {
    "meta": "cmd",
    "command": "cmd",
    "super": "cmd",
    "control": "ctrl",
    "option": "alt",
    "opt": "alt",
}

DEFAULT_BINDINGS: dict[str, str] = {
    "cmd+t": "new_tab",
    "cmd+w": "close_tab",
    "cmd+shift+[": "previous_tab",
    "cmd+shift+]": "next_tab",
    "cmd+shift+p": "toggle_pin",
    "cmd+shift+g": "combine_selected",
    "cmd+shift+d": "detach_pane",
    "cmd+alt+up": "pane_up",
    "cmd+alt+down": "pane_down",
    "cmd+alt+left": "pane_left",
    "cmd+alt+right": "pane_right",
    "cmd+alt+[": "pane_prev",
    "cmd+alt+]": "pane_next",
    **{f"cmd+{n}": f"switch_to_{n}" for n in range(1, 10)},
}


def normalize_chord(chord: str) -> str:
    """Normalize a chord to canonical form.

    "Shift+Cmd+P" -> "cmd+shift+p", "Meta+T" -> "cmd+t"

    Args:
        chord: Chord string

    Returns:
        Canonical chord, or "" for an empty chord
    """
    # "+" itself can be the key ("cmd++")
    parts = chord.strip().lower().split("+")
    if len(parts) >= 2 and parts[-1] == "" and parts[-2] == "":
        parts = parts[:-2] + ["+"]
    parts = [p.strip() for p in parts if p.strip()]
    if not parts:
        return ""

    modifiers = set()
    key = ""
    for part in parts:
        name = _MODIFIER_ALIASES.get(part, part)
        if name in _MODIFIER_ORDER:
            modifiers.add(name)
        else:
            key = name

    ordered = [m for m in _MODIFIER_ORDER if m in modifiers]
    return "+".join(ordered + ([key] if key else []))


def format_chord(chord: str) -> str:
    """Format a chord for display: "cmd+shift+p" -> "Cmd+Shift+P"."""
    return "+".join(part.capitalize() for part in normalize_chord(chord).split("+") if part)


class KeyDispatcher:
    """Maps key chords to workspace actions."""

    def __init__(self, workspace: Workspace, bindings: dict[str, str] | None = None):
        self._workspace = workspace
        self._bindings = {
            normalize_chord(chord): action
            for chord, action in (bindings if bindings is not None else DEFAULT_BINDINGS).items()
        }

    @property
    def bindings(self) -> dict[str, str]:
        return dict(self._bindings)

    def bind(self, chord: str, action: str) -> None:
        self._bindings[normalize_chord(chord)] = action

    def action_for(self, chord: str) -> str | None:
        return self._bindings.get(normalize_chord(chord))

    async def dispatch(self, chord: str) -> bool:
        """Run the action bound to a chord.

        Returns:
            Whether the chord was bound (the caller should swallow the event)
        """
        action = self.action_for(chord)
        if action is None:
            return False

        logger.debug(f"[Keys] {normalize_chord(chord)} -> {action}")
        await self.run_action(action)
        return True

    async def run_action(self, action: str) -> bool:
        """Execute a named action.

        Returns:
            Whether the action changed anything
        """
        ws = self._workspace

        if action == "new_tab":
            return await ws.create_tab() is not None
        if action == "close_tab":
            return await ws.close_active_tab()
        if action == "previous_tab":
            return ws.tabs.switch_to_previous()
        if action == "next_tab":
            return ws.tabs.switch_to_next()
        if action == "toggle_pin":
            return ws.toggle_active_pin()
        if action == "combine_selected":
            return ws.combine_selected() is not None
        if action == "detach_pane":
            return ws.detach_focused_pane()
        if action.startswith("switch_to_"):
            try:
                index = int(action.removeprefix("switch_to_")) - 1
            except ValueError:
                logger.warning(f"[Keys] Bad switch action: {action}")
                return False
            return ws.tabs.switch_by_index(index)
        if action.startswith("pane_"):
            try:
                direction = Direction(action.removeprefix("pane_"))
            except ValueError:
                logger.warning(f"[Keys] Bad pane action: {action}")
                return False
            return ws.navigate_active_group(direction)

        logger.warning(f"[Keys] Unknown action: {action}")
        return False
