"""Tests for distribution.report.pairs module."""

from distribution.report.pairs import Pair, select_top


class TestPairOrdering:
    """Tests for the natural ordering of Pair."""

    def test_compares_value_first(self) -> None:
        assert Pair(1, "b") < Pair(2, "a")

    def test_ties_compare_key(self) -> None:
        assert Pair(1, "a") < Pair(1, "b")

    def test_equal_pairs(self) -> None:
        assert Pair(1, "a") == Pair(1, "a")
        assert not Pair(1, "a") < Pair(1, "a")

    def test_reverse_sort(self) -> None:
        """Test that reverse sorting gives display order."""
        pairs = [Pair(1, "aa"), Pair(2, "ab"), Pair(1, "ba")]
        pairs.sort(reverse=True)
        assert pairs == [Pair(2, "ab"), Pair(1, "ba"), Pair(1, "aa")]


class TestSelectTop:
    """Tests for select_top function."""

    def test_truncates_to_height(self) -> None:
        pairs = [Pair(i, str(i)) for i in range(10)]
        top = select_top(pairs, 3)
        assert top == [Pair(9, "9"), Pair(8, "8"), Pair(7, "7")]

    def test_height_larger_than_input(self) -> None:
        pairs = [Pair(1, "a"), Pair(3, "b")]
        assert select_top(pairs, 15) == [Pair(3, "b"), Pair(1, "a")]

    def test_ties_broken_by_descending_key(self) -> None:
        pairs = [Pair(2, "log"), Pair(1, "apparmor"), Pair(2, "var"), Pair(1, "dmesg.1.gz")]
        assert select_top(pairs, 15) == [
            Pair(2, "var"),
            Pair(2, "log"),
            Pair(1, "dmesg.1.gz"),
            Pair(1, "apparmor"),
        ]

    def test_sorts_in_place(self) -> None:
        pairs = [Pair(1, "a"), Pair(2, "b")]
        select_top(pairs, 1)
        assert pairs == [Pair(2, "b"), Pair(1, "a")]

    def test_idempotent(self) -> None:
        pairs = [Pair(3, "c"), Pair(1, "a"), Pair(3, "d"), Pair(2, "b")]
        once = select_top(pairs, 3)
        twice = select_top(list(once), 3)
        assert once == twice

    def test_empty_input(self) -> None:
        assert select_top([], 15) == []

    def test_zero_height(self) -> None:
        assert select_top([Pair(1, "a")], 0) == []
