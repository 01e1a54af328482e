"""Tests for scrolling and selection helpers."""

from jukebox.utils.scrolling import (
    calculate_scroll_offset,
    clamp_scroll,
    clamp_selection,
    move_selection,
)


class TestCalculateScrollOffset:
    """Test keeping the selection inside the viewport."""

    def test_no_scroll_when_visible(self):
        """Selection inside the window leaves the offset alone."""
        assert calculate_scroll_offset(3, 0, 5, 20) == 0

    def test_scroll_down_minimally(self):
        """Selection just below the window scrolls by one."""
        assert calculate_scroll_offset(5, 0, 5, 20) == 1

    def test_scroll_up_minimally(self):
        """Selection above the window puts it at the top."""
        assert calculate_scroll_offset(2, 10, 5, 20) == 2

    def test_clamped_at_end(self):
        """The window never shows rows past the end."""
        assert calculate_scroll_offset(19, 18, 5, 20) == 15

    def test_small_lists(self):
        """Lists shorter than the window never scroll."""
        assert calculate_scroll_offset(2, 4, 10, 3) == 0

    def test_zero_height(self):
        """A zero-height viewport has offset 0."""
        assert calculate_scroll_offset(5, 3, 0, 20) == 0


class TestClampScroll:
    """Test scroll offset clamping."""

    def test_range(self):
        assert clamp_scroll(-4, 5, 20) == 0
        assert clamp_scroll(50, 5, 20) == 15
        assert clamp_scroll(7, 5, 20) == 7


class TestMoveSelection:
    """Test moving the selection."""

    def test_clamps_at_ends(self):
        """Movement stops at both ends."""
        assert move_selection(0, -1, 10) == 0
        assert move_selection(9, 1, 10) == 9
        assert move_selection(4, 3, 10) == 7

    def test_empty(self):
        """An empty list always selects 0."""
        assert move_selection(3, 1, 0) == 0
        assert clamp_selection(3, 0) == 0
