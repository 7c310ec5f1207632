"""Tests for core.ids - workspace ID utilities"""

from termdeck.core.ids import IdGenerator, IdKind, is_group_id, make_id, short_id


class TestIdGenerator:
    """Test IdGenerator"""

    def test_tab_and_group_ids_distinct(self):
        """Test tab and group ids carry their own prefix and share a counter"""
        ids = IdGenerator(clock=lambda: 1000)

        tab_id = ids.next_tab_id()
        group_id = ids.next_group_id()

        assert tab_id == "tab-1000-1"
        assert group_id == "group-1000-2"

    def test_ids_unique_with_frozen_clock(self):
        """Test ids stay unique when the clock does not move"""
        ids = IdGenerator(clock=lambda: 5)
        created = {ids.next_tab_id() for _ in range(100)}
        assert len(created) == 100

    def test_tab_count(self):
        """Test tab_count ignores group ids"""
        ids = IdGenerator()
        ids.next_tab_id()
        ids.next_group_id()
        ids.next_tab_id()
        assert ids.tab_count == 2

    def test_now_strictly_increasing_with_frozen_clock(self):
        """Test now() advances even when the clock is frozen"""
        ids = IdGenerator(clock=lambda: 42)
        ticks = [ids.now() for _ in range(5)]
        assert ticks == [42, 43, 44, 45, 46]

    def test_now_survives_clock_stepping_back(self):
        """Test now() never goes backwards"""
        readings = iter([100, 50, 200])
        ids = IdGenerator(clock=lambda: next(readings))

        assert [ids.now(), ids.now(), ids.now()] == [100, 101, 200]


class TestMakeId:
    def test_enum_kind(self):
        """Test make_id formats kind, timestamp and counter"""
        assert make_id(IdKind.TAB, 1700000000000, 3) == "tab-1700000000000-3"

    def test_string_kind(self):
        """Test make_id accepts the kind's string value"""
        assert make_id("group", 1, 2) == "group-1-2"


class TestHelpers:
    def test_is_group_id(self):
        """Test group ids are told apart from tab ids"""
        assert is_group_id("group-1-1") is True
        assert is_group_id("tab-1-1") is False
        assert is_group_id(IdGenerator().next_group_id()) is True

    def test_short_id_keeps_tail(self):
        """Test short_id keeps the last eight characters"""
        assert short_id("tab-1700000000000-42") == "00000-42"
        assert short_id("tab-1-2") == "tab-1-2"
