"""Tests for workspace.layout"""

import pytest

from termdeck.workspace import TileLayout, layout_for


class TestLayoutFor:
    """Pane count -> grid shape"""

    @pytest.mark.parametrize(
        "count,rows,cols",
        [
            (0, 1, 1),
            (1, 1, 1),
            (2, 1, 2),
            (3, 2, 2),
            (4, 2, 2),
            (5, 2, 3),
            (6, 2, 3),
            (7, 3, 3),
            (9, 3, 3),
            (12, 3, 3),
        ],
    )
    def test_policy(self, count, rows, cols):
        """Test each pane count maps to its grid"""
        assert layout_for(count) == TileLayout(rows=rows, cols=cols)

    def test_overflow_beyond_nine_still_three_by_three(self):
        """Test more than nine panes overflow the grid instead of failing"""
        assert layout_for(12) == layout_for(9)

    def test_str(self):
        """Test the display form is RxC"""
        assert str(layout_for(5)) == "2x3"
