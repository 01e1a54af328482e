"""
Jukebox - interactive mode

Startup order: config -> logging -> catalog -> terminal check -> context ->
session restore -> UI. Anything that fails before the UI starts is reported on
stderr and leaves the terminal untouched.
"""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from loguru import logger
from rich.console import Console

from jukebox.context import AppContext
from jukebox.core import config
from jukebox.core.output import get_log_file_path, setup_loguru
from jukebox.domain.library import load_catalog
from jukebox.domain.playback import player
from jukebox.domain.playback.supervisor import check_engine_available
from jukebox.domain.session import load_session, restore_session

console = Console(stderr=True)


class StartupError(Exception):
    """Setup failure that ends the program before the UI starts."""


def apply_cli_overrides(
    cfg: config.Config,
    songs_dir: Optional[str] = None,
    tmux: bool = False,
    no_session: bool = False,
    debug: bool = False,
) -> config.Config:
    """Layer command line options on top of file and environment config."""
    if songs_dir:
        cfg = replace(cfg, music=replace(cfg.music, songs_dir=songs_dir))
    if tmux:
        cfg = replace(cfg, ui=replace(cfg.ui, alternate_screen=False))
    if no_session:
        cfg = replace(cfg, session=replace(cfg.session, enabled=False))
    if debug:
        cfg = replace(cfg, logging=replace(cfg.logging, level="DEBUG"))
    return cfg


def require_terminal() -> None:
    """Raise StartupError unless stdin and stdout are both terminals."""
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise StartupError("Jukebox needs an interactive terminal (stdin/stdout are not a tty)")


def build_context(cfg: config.Config) -> AppContext:
    """Scan the catalog and create the initial context.

    Raises:
        StartupError: If the songs directory is missing or holds no tracks
    """
    songs_dir = Path(cfg.music.songs_dir).expanduser()
    if not songs_dir.is_dir():
        raise StartupError(f"Songs directory not found: {songs_dir}")

    catalog = load_catalog(songs_dir, Path(cfg.music.playlists_dir).expanduser())
    if len(catalog) == 0:
        raise StartupError(f"No tracks found in {songs_dir}")

    logger.info(f"Catalog: {len(catalog)} tracks from {songs_dir}")
    return AppContext.create(cfg, catalog)


def interactive_mode(
    songs_dir: Optional[str] = None,
    tmux: bool = False,
    no_session: bool = False,
    debug: bool = False,
) -> int:
    """Run the player until the user quits.

    Returns:
        Exit code (0 for success, 1 for a startup failure)
    """
    cfg = apply_cli_overrides(
        config.load_config(), songs_dir=songs_dir, tmux=tmux, no_session=no_session, debug=debug
    )
    setup_loguru(get_log_file_path(cfg), level=cfg.logging.level)
    logger.info("Jukebox starting")

    try:
        ctx = build_context(cfg)
        require_terminal()
    except StartupError as e:
        logger.error(str(e))
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if not check_engine_available(cfg.player.engine):
        logger.warning(f"Playback engine not found: {cfg.player.engine}")
        console.print(
            f"[yellow]Warning:[/yellow] '{cfg.player.engine}' not found - tracks will not play"
        )

    session_path = Path(cfg.session.path).expanduser() if cfg.session.enabled else None

    from jukebox.ui.blessed import run_interactive_ui
    from jukebox.ui.blessed.app import install_signal_handlers, restore_signal_handlers

    # Restore may start the engine; every exit path below stops it
    previous_handlers = install_signal_handlers(ctx.supervisor)
    try:
        if session_path is not None:
            ctx = restore_session(ctx, load_session(session_path))
        ctx = run_interactive_ui(ctx, session_path)
    except KeyboardInterrupt:
        logger.info("Interrupted before the UI started")
    finally:
        ctx = player.shutdown(ctx)
        restore_signal_handlers(previous_handlers)

    logger.info("Jukebox exited")
    return 0
