"""Main event loop and entry point for blessed UI."""

import contextlib
import signal
import sys
import time
from pathlib import Path
from typing import Optional

from blessed import Terminal
from loguru import logger

from jukebox.context import AppContext
from jukebox.domain.playback import player
from jukebox.domain.playback.supervisor import EngineSupervisor
from jukebox.domain.playback.view import set_list_rows
from jukebox.domain.session import SessionRecord, save_session, snapshot_session

from .components import (
    calculate_layout,
    render_bottom_line,
    render_header,
    render_status,
    render_track_list,
)
from .events.commands import execute_command
from .events.keyboard import handle_key
from .state import UIState, create_initial_state, mark_drawn, request_redraw

TERMINATION_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def make_termination_handler(supervisor: EngineSupervisor):
    """Build a SIGTERM/SIGHUP handler that stops the engine and exits.

    Further termination signals are blocked while tearing down. SystemExit
    unwinds through the blessed context managers, which restore the terminal.
    """

    def handle_termination(signum, frame):
        signal.pthread_sigmask(
            signal.SIG_BLOCK, {signal.SIGINT, signal.SIGTERM, signal.SIGHUP}
        )
        logger.info(f"Received signal {signum} - stopping engine")
        supervisor.stop()
        raise SystemExit(128 + signum)

    return handle_termination


def install_signal_handlers(supervisor: EngineSupervisor) -> dict:
    """Install termination handlers, returning the previous ones for restore."""
    handler = make_termination_handler(supervisor)
    previous = {}
    for signum in TERMINATION_SIGNALS:
        previous[signum] = signal.signal(signum, handler)
    return previous


def restore_signal_handlers(previous: dict) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def run_interactive_ui(ctx: AppContext, session_path: Optional[Path] = None) -> AppContext:
    """
    Run the main interactive UI event loop.

    Args:
        ctx: Application context with config, catalog and restored state
        session_path: Where to persist the session each tick (None disables it)

    Returns:
        Updated AppContext after UI session ends
    """
    term = Terminal()
    if not ctx.config.ui.use_colors:
        term.number_of_colors = 0

    screen = term.fullscreen() if ctx.config.ui.alternate_screen else contextlib.nullcontext()
    with screen, term.cbreak(), term.hidden_cursor():
        try:
            ctx = main_loop(term, ctx, session_path)
        except KeyboardInterrupt:
            pass  # Cleanup already done in main_loop

    return ctx


def _frame_key(ctx: AppContext, ui_state: UIState, term: Terminal) -> tuple:
    """Everything a frame depends on; a new frame is drawn only when it changes."""
    return (
        ctx.view,
        ctx.playback,
        ui_state.search_active,
        ui_state.search_text,
        term.width,
        term.height,
    )


def render_frame(term: Terminal, ctx: AppContext, ui_state: UIState, layout: dict) -> None:
    render_header(term, ctx, layout["header_y"])
    render_track_list(term, ctx, layout["list_y"], layout["list_rows"])
    render_status(term, ctx, layout["status_y"])
    render_bottom_line(term, ctx, ui_state, layout["bottom_y"])
    sys.stdout.flush()


def tick(ctx: AppContext) -> AppContext:
    """Periodic work: reap the engine (auto-advance) and refresh position."""
    ctx = player.check_engine_exit(ctx)
    return player.refresh_position(ctx)


def persist_session(
    ctx: AppContext, session_path: Optional[Path], last_saved: Optional[SessionRecord]
) -> Optional[SessionRecord]:
    """Save the session if it differs from what was last written."""
    if session_path is None:
        return last_saved

    record = snapshot_session(ctx)
    if record == last_saved:
        return last_saved
    if save_session(session_path, record):
        return record
    return last_saved


def main_loop(
    term: Terminal, ctx: AppContext, session_path: Optional[Path] = None
) -> AppContext:
    """
    Main event loop - functional style.

    Args:
        term: blessed Terminal instance
        ctx: Application context
        session_path: Session file (None when persistence is disabled)

    Returns:
        Updated AppContext after loop exits
    """
    ui_state = create_initial_state()
    tick_interval = ctx.config.ui.tick_interval
    last_frame = None
    last_saved: Optional[SessionRecord] = None
    next_tick = time.monotonic()

    logger.info("Entering main loop")
    try:
        while True:
            now = time.monotonic()
            if now >= next_tick:
                ctx = tick(ctx)
                last_saved = persist_session(ctx, session_path, last_saved)
                next_tick = now + tick_interval

            layout = calculate_layout(term)
            if layout["list_rows"] != ctx.view.list_rows:
                ctx = ctx.with_view(set_list_rows(ctx.view, layout["list_rows"]))
                ui_state = request_redraw(ui_state)

            frame = _frame_key(ctx, ui_state, term)
            if ui_state.needs_redraw or frame != last_frame:
                if ui_state.needs_redraw:
                    sys.stdout.write(term.home + term.clear)
                render_frame(term, ctx, ui_state, layout)
                ui_state = mark_drawn(ui_state)
                last_frame = frame

            # Wait for input, at most until the next tick is due
            timeout = max(0.0, next_tick - time.monotonic())
            key = term.inkey(timeout=timeout)
            if not key:
                continue

            ui_state, command = handle_key(ui_state, key)
            if command is None:
                continue

            ctx, ui_state, should_quit = execute_command(ctx, ui_state, command)
            if should_quit:
                logger.info("Quit requested")
                break
    except KeyboardInterrupt:
        # Cleanup BEFORE propagating exception
        logger.info("Ctrl+C detected - cleaning up")
        raise
    finally:
        persist_session(ctx, session_path, last_saved)
        ctx = player.shutdown(ctx)

    return ctx
