"""Command execution logic.

Each handler has signature (ctx, ui_state, data) -> (AppContext, UIState, bool),
the bool asking the main loop to quit.
"""

from typing import Callable

from loguru import logger

from jukebox.context import AppContext
from jukebox.domain.playback import player
from jukebox.domain.playback import view as views
from jukebox.ui.blessed.state import (
    InternalCommand,
    UIState,
    end_search,
    start_search,
)

# Type alias for internal command handlers
InternalHandlerResult = tuple[AppContext, UIState, bool]
InternalHandlerData = dict


def _handle_quit(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return ctx, ui_state, True


def _handle_move(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return ctx.with_view(views.move_cursor(ctx.view, data.get("delta", 1))), ui_state, False


def _handle_jump(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    """Jump to the top or bottom of the view (g/G)."""
    if data.get("target") == "bottom":
        target = views.view_length(ctx.view) - 1
    else:
        target = 0
    return ctx.with_view(views.jump(ctx.view, target)), ui_state, False


def _handle_scroll(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    """Scroll the window by lines or whole pages without moving the cursor."""
    delta = data.get("lines", 0) + data.get("pages", 0) * ctx.view.list_rows
    return ctx.with_view(views.scroll(ctx.view, delta)), ui_state, False


def _handle_play_selected(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.play_selected(ctx), ui_state, False


def _handle_toggle_pause(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.toggle_pause(ctx), ui_state, False


def _handle_stop(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.stop(ctx), ui_state, False


def _handle_seek(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    seconds = data.get("direction", 1) * ctx.config.player.seek_seconds
    return player.seek(ctx, seconds), ui_state, False


def _handle_volume(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    delta = data.get("direction", 1) * ctx.config.player.volume_step
    return player.adjust_volume(ctx, delta), ui_state, False


def _handle_toggle_loop(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.toggle_loop(ctx), ui_state, False


def _handle_toggle_shuffle(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.toggle_shuffle(ctx), ui_state, False


def _handle_cycle_playlist(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.cycle_playlist(ctx), ui_state, False


def _handle_leave_playlist(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.select_playlist(ctx, None), ui_state, False


def _handle_start_search(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    """Open the prompt on a fresh filter, keeping the cursor on its track."""
    previous = views.selected_track(ctx.view)
    ctx = player.clear_filter(ctx)
    if previous is not None:
        ctx = ctx.with_view(views.jump_to_track(ctx.view, previous))
    return ctx, start_search(ui_state, previous), False


def _handle_filter(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return player.apply_filter(ctx, data.get("text", "")), ui_state, False


def _handle_accept_search(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    return ctx, end_search(ui_state), False


def _handle_cancel_search(ctx: AppContext, ui_state: UIState, data: InternalHandlerData) -> InternalHandlerResult:
    ctx = player.clear_filter(ctx)
    track = data.get("track")
    if track is not None:
        ctx = ctx.with_view(views.jump_to_track(ctx.view, track))
    return ctx, end_search(ui_state), False


INTERNAL_HANDLERS: dict[str, Callable[[AppContext, UIState, InternalHandlerData], InternalHandlerResult]] = {
    "quit": _handle_quit,
    "move": _handle_move,
    "jump": _handle_jump,
    "scroll": _handle_scroll,
    "play_selected": _handle_play_selected,
    "toggle_pause": _handle_toggle_pause,
    "stop": _handle_stop,
    "seek": _handle_seek,
    "volume": _handle_volume,
    "toggle_loop": _handle_toggle_loop,
    "toggle_shuffle": _handle_toggle_shuffle,
    "cycle_playlist": _handle_cycle_playlist,
    "leave_playlist": _handle_leave_playlist,
    "start_search": _handle_start_search,
    "filter": _handle_filter,
    "accept_search": _handle_accept_search,
    "cancel_search": _handle_cancel_search,
}


def execute_command(
    ctx: AppContext, ui_state: UIState, command: InternalCommand
) -> tuple[AppContext, UIState, bool]:
    """
    Execute a UI command against the player.

    Args:
        ctx: Application context
        ui_state: Current UI state
        command: Command produced by the key handlers

    Returns:
        Tuple of (updated AppContext, updated UIState, should_quit)
    """
    handler = INTERNAL_HANDLERS.get(command.action)
    if handler is None:
        logger.warning(f"Unknown UI command: {command.action}")
        return ctx, ui_state, False

    return handler(ctx, ui_state, command.data)
