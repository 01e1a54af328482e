"""Status line, progress bar, help line and search prompt."""

from blessed import Terminal

from jukebox.context import AppContext
from jukebox.domain.playback.state import LoopMode

from ..helpers import truncate, write_at
from ..state import UIState
from ..styles.formatting import format_progress_bar, format_time

HELP_TEXT = (
    "j/k:nav  enter:play  spc:play/pause  h/l:seek  -/+:vol  "
    "m:loop  n:shuffle  p:playlist  /:search  esc:stop  q:quit"
)


def format_status(ctx: AppContext) -> str:
    """Plain status text, e.g. `[playing][shuffle] song.mp3  vol 80`."""
    playback = ctx.playback
    if playback.playing is None:
        return f"[stopped]  vol {playback.volume}"

    state = "[paused]" if playback.paused else "[playing]"
    mode = ""
    if playback.loop_mode is LoopMode.SINGLE:
        mode = "[repeat]"
    elif playback.shuffle:
        mode = "[shuffle]"
    name = ctx.catalog.name(playback.playing)
    return f"{state}{mode} {name}  vol {playback.volume}"


def format_progress(position: float, duration: float, width: int) -> str:
    """`m:ss [===>---] m:ss` fitted to width columns."""
    elapsed = format_time(position)
    total = format_time(duration)
    bar_width = width - len(elapsed) - len(total) - 4
    bar = format_progress_bar(position, duration, bar_width)
    return f"{elapsed} [{bar}] {total}"


def render_status(term: Terminal, ctx: AppContext, y: int) -> None:
    text = truncate(format_status(ctx), term.width)
    if ctx.playback.playing is None:
        write_at(term, 0, y, term.dim(text))
    else:
        write_at(term, 0, y, term.green(text))


def render_bottom_line(term: Terminal, ctx: AppContext, ui_state: UIState, y: int) -> None:
    """Search prompt while searching, else progress while playing, else help."""
    if ui_state.search_active:
        prompt = truncate(f"/{ui_state.search_text}_", term.width)
        write_at(term, 0, y, term.dim(prompt))
    elif ctx.playback.playing is not None:
        playback = ctx.playback
        write_at(
            term,
            0,
            y,
            truncate(
                format_progress(playback.position, playback.duration, term.width),
                term.width,
            ),
        )
    else:
        write_at(term, 0, y, term.dim(truncate(HELP_TEXT, term.width)))
