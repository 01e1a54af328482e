"""
Player control for Jukebox
Functional approach: every operation takes an AppContext and returns the
updated one. The engine process and control socket are the only mutable pieces
and are reached through ctx.supervisor and ctx.channel.
"""

from dataclasses import replace
from typing import Optional

from loguru import logger

from jukebox.context import AppContext
from jukebox.domain.library.catalog import list_playlists, load_playlist
from jukebox.domain.playback import protocol
from jukebox.domain.playback import shuffle
from jukebox.domain.playback import view as views
from jukebox.domain.playback.state import LoopMode


def _fresh_history(ctx: AppContext, indices: tuple[int, ...]) -> shuffle.ShuffleHistory:
    """New shuffle cycle over indices, with the playing track already counted."""
    history = shuffle.reset()
    if ctx.playback.playing is not None:
        history = shuffle.mark_played(history, ctx.playback.playing, indices)
    return history


def _set_view(ctx: AppContext, new_view: views.ViewState) -> AppContext:
    """Install a new view; a membership change restarts the shuffle cycle."""
    if new_view.indices != ctx.view.indices and ctx.playback.shuffle:
        ctx = ctx.with_shuffle_history(_fresh_history(ctx, new_view.indices))
    return ctx.with_view(new_view)


def play_track(ctx: AppContext, index: int) -> AppContext:
    """Launch the engine on a catalog index, replacing whatever was playing."""
    # The old connection points at the old process's socket
    ctx.channel.disconnect()
    ctx.supervisor.start(str(ctx.catalog.path(index)), ctx.playback.volume)

    ctx = ctx.with_playback(replace(ctx.playback.cleared(), playing=index))

    if ctx.playback.shuffle:
        ctx = ctx.with_shuffle_history(
            shuffle.mark_played(ctx.shuffle_history, index, ctx.view.indices)
        )

    logger.info(f"Playing [{index}] {ctx.catalog.name(index)}")
    return ctx


def play_selected(ctx: AppContext) -> AppContext:
    """Play the track under the cursor (no-op for an empty view)."""
    index = views.selected_track(ctx.view)
    if index is None:
        return ctx
    return play_track(ctx, index)


def stop(ctx: AppContext) -> AppContext:
    """Stop the engine and clear transport state."""
    ctx.channel.disconnect()
    ctx.supervisor.stop()
    return ctx.with_playback(ctx.playback.cleared())


def shutdown(ctx: AppContext) -> AppContext:
    """Release the engine and socket before the program exits."""
    logger.info("Shutting down player")
    return stop(ctx)


def toggle_pause(ctx: AppContext) -> AppContext:
    """Pause/resume the engine, or start the selected track when idle."""
    if not ctx.supervisor.running:
        return play_selected(ctx)

    ctx.channel.send(protocol.cycle_pause())
    paused = not ctx.playback.paused
    logger.debug(f"Pause toggled: paused={paused}")
    return ctx.with_playback(replace(ctx.playback, paused=paused))


def seek(ctx: AppContext, seconds: float) -> AppContext:
    """Seek relative to the current position."""
    if ctx.supervisor.running:
        ctx.channel.send(protocol.seek_relative(seconds))
    return ctx


def seek_to(ctx: AppContext, seconds: float) -> AppContext:
    """Seek to an absolute position."""
    if ctx.supervisor.running:
        ctx.channel.send(protocol.seek_absolute(seconds))
        ctx = ctx.with_playback(replace(ctx.playback, position=seconds))
    return ctx


def adjust_volume(ctx: AppContext, delta: int) -> AppContext:
    """Change volume by delta (clamped to 0-100).

    The tracked volume always changes; the engine gets a live `add volume` for
    the applied step. Every launch passes the tracked volume, so the level
    carries over to the next track and into the saved session.
    """
    before = ctx.playback.volume
    playback = ctx.playback.with_volume(before + delta)
    applied = playback.volume - before

    if applied and ctx.supervisor.running:
        ctx.channel.send(protocol.add_volume(applied))
    return ctx.with_playback(playback)


def toggle_loop(ctx: AppContext) -> AppContext:
    """Toggle single-track repeat (turning it on disables shuffle)."""
    if ctx.playback.loop_mode is LoopMode.SINGLE:
        return ctx.with_playback(ctx.playback.with_loop_mode(LoopMode.ALL))
    return ctx.with_playback(ctx.playback.with_loop_mode(LoopMode.SINGLE))


def toggle_shuffle(ctx: AppContext) -> AppContext:
    """Toggle shuffle (turning it on disables single repeat and starts a new cycle)."""
    enabled = not ctx.playback.shuffle
    ctx = ctx.with_playback(ctx.playback.with_shuffle(enabled))
    if enabled:
        ctx = ctx.with_shuffle_history(_fresh_history(ctx, ctx.view.indices))
    return ctx


def apply_filter(ctx: AppContext, text: str) -> AppContext:
    """Filter the view by regex; invalid patterns leave everything unchanged."""
    return _set_view(ctx, views.set_filter(ctx.catalog, ctx.view, text))


def clear_filter(ctx: AppContext) -> AppContext:
    return _set_view(ctx, views.clear_filter(ctx.catalog, ctx.view))


def select_playlist(ctx: AppContext, name: Optional[str]) -> AppContext:
    """Activate a playlist by name, or return to the full catalog with None.

    The definition is read when activated. An unknown name changes nothing.
    """
    if name is None:
        return _set_view(ctx, views.set_playlist(ctx.catalog, ctx.view, None))

    playlist = load_playlist(ctx.catalog, name)
    if playlist is None:
        logger.warning(f"Playlist not found: {name}")
        return ctx
    return _set_view(ctx, views.set_playlist(ctx.catalog, ctx.view, playlist))


def cycle_playlist(ctx: AppContext) -> AppContext:
    """Step to the next playlist definition; after the last, back to the catalog."""
    names = list_playlists(ctx.catalog)
    if not names:
        return ctx

    current = ctx.view.playlist.name if ctx.view.playlist else None
    if current not in names:
        return select_playlist(ctx, names[0])

    position = names.index(current)
    if position + 1 < len(names):
        return select_playlist(ctx, names[position + 1])
    return select_playlist(ctx, None)


def next_after_exit(ctx: AppContext, previous: int) -> tuple[AppContext, Optional[int]]:
    """Auto-advance policy: which track follows `previous` once it ended.

    - single repeat: the same track
    - shuffle: a random unplayed track from the current view
    - otherwise: the next track in the current view, wrapping to the first;
      if `previous` is no longer visible, the first track of the view

    Returns:
        Tuple of (context with updated shuffle history, next index or None)
    """
    if ctx.playback.loop_mode is LoopMode.SINGLE:
        return ctx, previous

    indices = ctx.view.indices
    if not indices:
        return ctx, None

    if ctx.playback.shuffle:
        pick, history = shuffle.next_track(ctx.shuffle_history, indices, ctx.rng)
        return ctx.with_shuffle_history(history), pick

    position = views.position_of(ctx.view, previous)
    if position is None:
        return ctx, indices[0]
    return ctx, indices[(position + 1) % len(indices)]


def check_engine_exit(ctx: AppContext) -> AppContext:
    """Reap an exited engine and apply the auto-advance policy.

    Runs the policy at most once per exit: poll_exit() reports each exit a
    single time and the handle is replaced by the next start.
    """
    if not ctx.supervisor.poll_exit():
        return ctx

    previous = ctx.playback.playing
    ctx.channel.disconnect()
    ctx = ctx.with_playback(ctx.playback.cleared())

    if previous is None:
        return ctx

    ctx, upcoming = next_after_exit(ctx, previous)
    if upcoming is None:
        logger.info("Nothing left to play")
        return ctx

    logger.debug(f"Auto-advance: {previous} -> {upcoming}")
    return play_track(ctx, upcoming)


def refresh_position(ctx: AppContext) -> AppContext:
    """Refresh position and duration from the engine.

    No round trip while paused or idle. Values the engine did not answer in
    time keep their previous estimate.
    """
    playback = ctx.playback
    if playback.playing is None or playback.paused or not ctx.supervisor.running:
        return ctx

    position, duration = ctx.channel.query_pair(protocol.TIME_POS, protocol.DURATION)
    if position is None and duration is None:
        return ctx

    return ctx.with_playback(
        replace(
            playback,
            position=position if position is not None else playback.position,
            duration=duration if duration is not None else playback.duration,
        )
    )
