"""Tests for keyboard shortcuts"""

import pytest

from termdeck.keybindings import DEFAULT_BINDINGS, KeyDispatcher, format_chord, normalize_chord


class TestNormalizeChord:
    @pytest.mark.parametrize(
        "chord,expected",
        [
            ("Cmd+T", "cmd+t"),
            ("shift+cmd+p", "cmd+shift+p"),
            ("Meta+W", "cmd+w"),
            ("option+command+Up", "cmd+alt+up"),
            ("control+c", "ctrl+c"),
            ("cmd++", "cmd++"),
            (" cmd + 1 ", "cmd+1"),
            ("", ""),
        ],
    )
    def test_normalize(self, chord, expected):
        """Test chords are lowercased, aliased and put in modifier order"""
        assert normalize_chord(chord) == expected

    def test_format(self):
        """Test chords are formatted for display"""
        assert format_chord("shift+cmd+p") == "Cmd+Shift+P"


class TestKeyDispatcher:
    """Dispatching chords to workspace actions"""

    @pytest.fixture
    def keys(self, workspace):
        return KeyDispatcher(workspace)

    def test_default_bindings_normalized(self, keys):
        """Test default bindings are looked up by normalized chord"""
        assert keys.action_for("Shift+Cmd+P") == "toggle_pin"
        assert len(keys.bindings) == len(DEFAULT_BINDINGS)

    @pytest.mark.asyncio
    async def test_unbound_chord(self, keys):
        """Test an unbound chord is not handled"""
        assert await keys.dispatch("cmd+k") is False

    @pytest.mark.asyncio
    async def test_new_and_close_tab(self, keys, workspace):
        """Test cmd+t opens a tab and cmd+w closes it"""
        assert await keys.dispatch("cmd+t") is True
        assert len(workspace.tabs) == 1

        await keys.dispatch("cmd+w")
        assert len(workspace.tabs) == 0

    @pytest.mark.asyncio
    async def test_switch_by_number(self, keys, workspace):
        """Test cmd+1 activates the first tab"""
        a = await workspace.create_tab()
        await workspace.create_tab()

        await keys.dispatch("cmd+1")

        assert workspace.tabs.active_tab_id == a.id

    @pytest.mark.asyncio
    async def test_cycle_tabs(self, keys, workspace):
        """Test bracket chords cycle tabs with wrap-around"""
        a = await workspace.create_tab()
        b = await workspace.create_tab()

        await keys.dispatch("cmd+shift+]")
        assert workspace.tabs.active_tab_id == a.id

        await keys.dispatch("cmd+shift+[")
        assert workspace.tabs.active_tab_id == b.id

    @pytest.mark.asyncio
    async def test_toggle_pin(self, keys, workspace):
        """Test cmd+shift+p pins the active tab"""
        a = await workspace.create_tab()

        await keys.dispatch("cmd+shift+p")

        assert a.is_pinned is True

    @pytest.mark.asyncio
    async def test_pane_navigation(self, keys, workspace):
        """Test cmd+alt+arrow moves group focus"""
        a = await workspace.create_tab()
        b = await workspace.create_tab()
        group = workspace.groups.combine([a.id, b.id])

        await keys.dispatch("cmd+alt+right")

        assert group.focused_tab_id == b.id

    @pytest.mark.asyncio
    async def test_rebind(self, keys, workspace):
        """Test a custom binding takes effect"""
        keys.bind("ctrl+shift+t", "new_tab")

        await keys.dispatch("shift+ctrl+T")

        assert len(workspace.tabs) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", ["explode", "switch_to_x", "pane_diagonal"])
    async def test_bad_actions(self, workspace, action):
        """Test malformed actions are handled and change nothing"""
        keys = KeyDispatcher(workspace, bindings={"cmd+k": action})

        assert await keys.dispatch("cmd+k") is True
        assert await keys.run_action(action) is False

    @pytest.mark.asyncio
    async def test_combine_selected(self, keys, workspace):
        """Test cmd+shift+g combines the selected tabs"""
        a = await workspace.create_tab()
        b = await workspace.create_tab()
        workspace.toggle_tab_selection(b.id)
        workspace.toggle_tab_selection(a.id)

        assert await keys.dispatch("cmd+shift+g") is True

        group = workspace.groups.group_for_tab(a.id)
        assert group.tab_ids == [b.id, a.id]
        assert workspace.selection.ids == []

    @pytest.mark.asyncio
    async def test_combine_selected_needs_two(self, keys, workspace):
        """Test cmd+shift+g with one selected tab does nothing"""
        a = await workspace.create_tab()
        workspace.toggle_tab_selection(a.id)

        assert await keys.run_action("combine_selected") is False
        assert len(workspace.groups) == 0

    @pytest.mark.asyncio
    async def test_detach_pane(self, keys, workspace):
        """Test cmd+shift+d detaches the focused pane"""
        a = await workspace.create_tab()
        b = await workspace.create_tab()
        c = await workspace.create_tab()
        group = workspace.groups.combine([a.id, b.id, c.id])
        workspace.activate_view(group.id)
        workspace.groups.set_focused_pane(group.id, b.id)

        assert await keys.dispatch("cmd+shift+d") is True

        assert group.tab_ids == [a.id, c.id]
        assert b.group_id is None
