"""Pure helper functions for scrolling and selection in list-based views."""


def calculate_scroll_offset(
    selected: int,
    current_scroll: int,
    visible_items: int,
    total_items: int,
) -> int:
    """Calculate scroll offset to keep selected item visible in viewport.

    Moves the window by the minimum amount needed (edge scrolling), then clamps
    it so it never shows empty rows past the end of the list.

    Args:
        selected: Index of the currently selected item (0-based)
        current_scroll: Current scroll offset (0-based)
        visible_items: Number of items visible in the viewport
        total_items: Total number of items in the list

    Returns:
        New scroll offset to keep selected item visible

    Examples:
        >>> calculate_scroll_offset(
        ...     selected=15, current_scroll=0, visible_items=10, total_items=20
        ... )
        6
        >>> calculate_scroll_offset(
        ...     selected=2, current_scroll=10, visible_items=10, total_items=20
        ... )
        2
        >>> calculate_scroll_offset(
        ...     selected=5, current_scroll=0, visible_items=10, total_items=20
        ... )
        0
    """
    if visible_items <= 0:
        return 0

    offset = current_scroll
    if selected >= offset + visible_items:
        offset = selected - visible_items + 1
    elif selected < offset:
        offset = selected

    return clamp_scroll(offset, visible_items, total_items)


def clamp_scroll(offset: int, visible_items: int, total_items: int) -> int:
    """Clamp a scroll offset to [0, max(0, total_items - visible_items)].

    Examples:
        >>> clamp_scroll(offset=50, visible_items=10, total_items=20)
        10
        >>> clamp_scroll(offset=3, visible_items=10, total_items=5)
        0
    """
    max_offset = max(0, total_items - max(visible_items, 0))
    return max(0, min(offset, max_offset))


def move_selection(current: int, delta: int, total_items: int) -> int:
    """Move selection by delta, stopping at both ends.

    Args:
        current: Current selection index (0-based)
        delta: Amount to move (-1 for up, +1 for down)
        total_items: Total number of items in the list

    Returns:
        New selection index

    Examples:
        >>> move_selection(current=9, delta=1, total_items=10)
        9
        >>> move_selection(current=0, delta=-3, total_items=10)
        0
    """
    return clamp_selection(current + delta, total_items)


def clamp_selection(selection: int, total_items: int) -> int:
    """Clamp selection to valid range [0, total_items - 1].

    Examples:
        >>> clamp_selection(selection=15, total_items=10)
        9
        >>> clamp_selection(selection=-5, total_items=10)
        0
        >>> clamp_selection(selection=5, total_items=0)
        0
    """
    if total_items == 0:
        return 0
    return max(0, min(selection, total_items - 1))
