"""
View projection over the catalog.

The visible sequence is built in a fixed order: the active playlist narrows the
catalog, then the text filter narrows that. All functions return a new
ViewState and never mutate the one passed in.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional

from loguru import logger

from jukebox.domain.library.catalog import Catalog, Playlist
from jukebox.utils.scrolling import (
    calculate_scroll_offset,
    clamp_scroll,
    clamp_selection,
    move_selection,
)


class InvalidPattern(ValueError):
    """Filter text is not a valid regular expression."""


@dataclass(frozen=True)
class ViewState:
    """Projected view of the catalog plus cursor and scroll window.

    `indices` caches the projection so callers never re-run the filter; it is
    recomputed by every operation that changes filter or playlist.
    """

    indices: tuple[int, ...] = ()
    filter_text: str = ""
    filter_active: bool = False
    playlist: Optional[Playlist] = None
    cursor: int = 0
    scroll_offset: int = 0
    list_rows: int = 20


def compile_filter(text: str) -> re.Pattern:
    """Compile filter text as a case-insensitive regular expression.

    Raises:
        InvalidPattern: If the text does not compile
    """
    try:
        return re.compile(text, re.IGNORECASE)
    except re.error as e:
        raise InvalidPattern(f"Invalid filter pattern {text!r}: {e}") from e


def project(
    catalog: Catalog,
    playlist: Optional[Playlist] = None,
    pattern: Optional[re.Pattern] = None,
) -> tuple[int, ...]:
    """Compute the visible catalog indices for a playlist and filter."""
    if playlist is not None:
        source = tuple(i for i in playlist.members if 0 <= i < len(catalog))
    else:
        source = tuple(range(len(catalog)))

    if pattern is None:
        return source
    return tuple(i for i in source if pattern.search(catalog.name(i)))


def create_view(catalog: Catalog, list_rows: int = 20) -> ViewState:
    """Initial view: whole catalog, cursor on the first track."""
    return ViewState(indices=project(catalog), list_rows=max(1, list_rows))


def current_view(view: ViewState) -> tuple[int, ...]:
    return view.indices


def view_length(view: ViewState) -> int:
    return len(view.indices)


def index_at(view: ViewState, pos: int) -> int:
    """Catalog index at a view position.

    Raises:
        IndexError: If pos is outside the view
    """
    if not 0 <= pos < len(view.indices):
        raise IndexError(f"View position {pos} out of range (len={len(view.indices)})")
    return view.indices[pos]


def selected_track(view: ViewState) -> Optional[int]:
    """Catalog index under the cursor, or None for an empty view."""
    if not view.indices:
        return None
    return view.indices[view.cursor]


def position_of(view: ViewState, index: int) -> Optional[int]:
    """View position of a catalog index, or None if not visible."""
    try:
        return view.indices.index(index)
    except ValueError:
        return None


def _with_cursor(view: ViewState, cursor: int) -> ViewState:
    cursor = clamp_selection(cursor, len(view.indices))
    offset = calculate_scroll_offset(
        cursor, view.scroll_offset, view.list_rows, len(view.indices)
    )
    return replace(view, cursor=cursor, scroll_offset=offset)


def _reproject(
    view: ViewState,
    indices: tuple[int, ...],
    **changes,
) -> ViewState:
    """Swap in a new projection, keeping the cursor on the same track if visible."""
    previous = selected_track(view)
    projected = replace(view, indices=indices, **changes)

    cursor = 0
    if previous is not None:
        pos = position_of(projected, previous)
        if pos is not None:
            cursor = pos
    return _with_cursor(projected, cursor)


def set_filter(catalog: Catalog, view: ViewState, text: str) -> ViewState:
    """Filter the view by a regex over track names.

    An empty text clears the filter. An invalid pattern leaves the view as it
    was (the caller sees no change).
    """
    if not text:
        return clear_filter(catalog, view)

    try:
        pattern = compile_filter(text)
    except InvalidPattern as e:
        logger.debug(str(e))
        return view

    indices = project(catalog, view.playlist, pattern)
    return _reproject(view, indices, filter_text=text, filter_active=True)


def clear_filter(catalog: Catalog, view: ViewState) -> ViewState:
    """Remove the text filter, keeping the cursor on the same track."""
    indices = project(catalog, view.playlist)
    return _reproject(view, indices, filter_text="", filter_active=False)


def set_playlist(
    catalog: Catalog, view: ViewState, playlist: Optional[Playlist]
) -> ViewState:
    """Switch the view source to a playlist (or back to the full catalog).

    An active filter is re-applied to the new source.
    """
    pattern = compile_filter(view.filter_text) if view.filter_active else None
    indices = project(catalog, playlist, pattern)
    return _reproject(view, indices, playlist=playlist)


def move_cursor(view: ViewState, delta: int) -> ViewState:
    """Move the cursor by delta, clamped to the view, scrolling at the edges."""
    return _with_cursor(view, move_selection(view.cursor, delta, len(view.indices)))


def jump(view: ViewState, pos: int) -> ViewState:
    """Put the cursor on a view position (clamped)."""
    return _with_cursor(view, pos)


def jump_to_track(view: ViewState, index: int) -> ViewState:
    """Put the cursor on a catalog index if it is visible; otherwise no change."""
    pos = position_of(view, index)
    if pos is None:
        return view
    return _with_cursor(view, pos)


def scroll(view: ViewState, delta: int) -> ViewState:
    """Move the window without moving the cursor, unless it would go off-screen."""
    total = len(view.indices)
    offset = clamp_scroll(view.scroll_offset + delta, view.list_rows, total)

    cursor = view.cursor
    if cursor < offset:
        cursor = offset
    elif cursor >= offset + view.list_rows:
        cursor = offset + view.list_rows - 1

    cursor = clamp_selection(cursor, total)
    return replace(view, cursor=cursor, scroll_offset=offset)


def set_list_rows(view: ViewState, list_rows: int) -> ViewState:
    """Resize the window (terminal resize), keeping the cursor visible."""
    resized = replace(view, list_rows=max(1, list_rows))
    return _with_cursor(resized, resized.cursor)


def visible_window(view: ViewState) -> list[tuple[int, int]]:
    """(view position, catalog index) pairs inside the scroll window."""
    end = min(len(view.indices), view.scroll_offset + view.list_rows)
    return [(pos, view.indices[pos]) for pos in range(view.scroll_offset, end)]
