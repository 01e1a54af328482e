"""Header and track list rendering."""

from blessed import Terminal

from jukebox.context import AppContext
from jukebox.domain.playback.state import LoopMode
from jukebox.domain.playback.view import visible_window

from ..helpers import truncate, write_at

TITLE = "Jukebox"


def render_header(term: Terminal, ctx: AppContext, y: int) -> None:
    """Title line (with active playlist and filter) plus a separator."""
    parts = [f"  {TITLE}"]
    if ctx.view.playlist is not None:
        parts.append(f"[{ctx.view.playlist.name}]")
    if ctx.view.filter_active:
        parts.append(f"/{ctx.view.filter_text}")
    parts.append(f"({len(ctx.view.indices)}/{len(ctx.catalog)})")

    title = truncate(" ".join(parts), term.width)
    write_at(term, 0, y, term.bold(title))
    write_at(term, 0, y + 1, "-" * term.width)


def _track_suffix(ctx: AppContext) -> str:
    if ctx.playback.loop_mode is LoopMode.SINGLE:
        return " [repeat]"
    if ctx.playback.shuffle:
        return " [shuffle]"
    return ""


def render_track_list(term: Terminal, ctx: AppContext, y: int, height: int) -> None:
    """
    Render the scroll window of the current view.

    The cursor row is prefixed with `> ` and bold; the playing track is green
    and carries the active mode as a suffix.

    Args:
        term: blessed Terminal instance
        ctx: Application context
        y: Starting y position
        height: Rows available for the list
    """
    playing = ctx.playback.playing
    rows = visible_window(ctx.view)[:height]

    for line, (pos, index) in enumerate(rows):
        is_cursor = pos == ctx.view.cursor
        is_playing = index == playing

        prefix = "> " if is_cursor else "  "
        suffix = _track_suffix(ctx) if is_playing else ""
        text = truncate(prefix + ctx.catalog.name(index) + suffix, term.width)

        if is_cursor and is_playing:
            text = term.bold_green(text)
        elif is_cursor:
            text = term.bold(text)
        elif is_playing:
            text = term.green(text)
        write_at(term, 0, y + line, text)

    for line in range(len(rows), height):
        write_at(term, 0, y + line, "")
