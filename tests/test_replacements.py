"""
Tests for the replacement arena.
"""

import pytest

from codelingua.errors import OverlappingReplacements
from codelingua.translate.replacements import Replacement, ReplacementArena


class TestReplacementArena:
    """Test validation and the linear rebuild."""

    def test_apply_in_any_insertion_order(self):
        """Test replacements recorded out of order are applied by position."""
        source = b"let alpha = beta;"
        arena = ReplacementArena()
        arena.add(12, 16, "B", "beta")
        arena.add(4, 9, "A", "alpha")

        assert arena.apply(source) == b"let A = B;"

    def test_offsets_are_bytes(self):
        """Test multibyte text before a replacement does not shift it."""
        source = "値 = value;".encode("utf-8")
        start = source.index(b"value")
        arena = ReplacementArena()
        arena.add(start, start + 5, "数値", "value")

        assert arena.apply(source).decode("utf-8") == "値 = 数値;"

    def test_adjacent_ranges_are_allowed(self):
        """Test ranges that touch but do not overlap."""
        arena = ReplacementArena()
        arena.add(0, 2, "x", "ab")
        arena.add(2, 4, "y", "cd")

        assert arena.apply(b"abcd") == b"xy"

    def test_overlap_is_rejected(self):
        """Test overlapping ranges raise before anything is rebuilt."""
        arena = ReplacementArena()
        arena.add(0, 5, "x", "hello")
        arena.add(3, 8, "y", "lo wo")

        with pytest.raises(OverlappingReplacements):
            arena.apply(b"hello world")

    def test_range_past_end(self):
        """Test a range beyond the input is rejected."""
        arena = ReplacementArena()
        arena.add(2, 10, "x", "")

        with pytest.raises(OverlappingReplacements):
            arena.apply(b"abc")

    def test_reversed_range(self):
        """Test start after end is a programming error."""
        with pytest.raises(ValueError):
            ReplacementArena().add(5, 2, "x", "")

    def test_validated_is_sorted(self):
        """Test validated() returns records by start offset."""
        arena = ReplacementArena()
        arena.add(6, 7, "b", "y")
        arena.add(0, 1, "a", "x")

        assert arena.validated() == [Replacement(0, 1, "a", "x"), Replacement(6, 7, "b", "y")]
        assert len(arena) == 2

    def test_empty_arena_returns_source(self):
        """Test no replacements means no change."""
        assert ReplacementArena().apply(b"unchanged") == b"unchanged"
