"""Tests for BlockSelection"""

from termdeck.blocks import BlockSelection, scan_blocks


def _blocks():
    return scan_blocks(["$ make", "ok", "", "$ ls", "a b", "", "$ pwd"], row_height=1)


class TestBlockSelection:
    def test_toggle(self):
        """Test toggling adds then removes a block"""
        selection = BlockSelection()

        assert selection.toggle("blk-0-0") is True
        assert "blk-0-0" in selection
        assert selection.toggle("blk-0-0") is False
        assert len(selection) == 0

    def test_ids_is_a_copy(self):
        """Test mutating ids does not change the selection"""
        selection = BlockSelection()
        selection.toggle("blk-0-0")

        selection.ids.add("other")

        assert selection.ids == {"blk-0-0"}

    def test_format_in_scan_order(self):
        """Test blocks are formatted in screen order, not selection order"""
        blocks = _blocks()
        selection = BlockSelection()
        selection.toggle(blocks[2].id)
        selection.toggle(blocks[0].id)

        text = selection.format(blocks)

        assert text == "### Block 1\n$ make\nok\n\n### Block 2\n$ pwd"

    def test_format_empty(self):
        """Test an empty selection formats to an empty string"""
        assert BlockSelection().format(_blocks()) == ""

    def test_prune_drops_vanished_blocks(self):
        """Test prune drops ids missing from the latest scan"""
        blocks = _blocks()
        selection = BlockSelection()
        selection.toggle(blocks[0].id)
        selection.toggle("blk-9-9")

        assert selection.prune(blocks) == 1
        assert selection.ids == {blocks[0].id}

    def test_clear(self):
        """Test clear empties the selection"""
        selection = BlockSelection()
        selection.toggle("a")
        selection.toggle("b")

        selection.clear()

        assert len(selection) == 0
