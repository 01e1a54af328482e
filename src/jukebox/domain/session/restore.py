"""
Snapshot and restore of a running session.

Restore order is fixed: modes, then playlist, then cursor (it resolves against
the playlist's view), then the playing track, then position, then pause.
"""

import time
from dataclasses import replace
from typing import Callable

from loguru import logger

from jukebox.context import AppContext
from jukebox.domain.playback import player, protocol
from jukebox.domain.playback import view as views

from .store import SessionRecord


def snapshot_session(ctx: AppContext) -> SessionRecord:
    """Capture the resumable part of the current state."""
    playback = ctx.playback
    catalog = ctx.catalog

    cursor_index = views.selected_track(ctx.view)
    playing = playback.playing

    return SessionRecord(
        volume=playback.volume,
        track=catalog.name(playing) if playing is not None else None,
        position=playback.position if playing is not None else None,
        cursor=catalog.name(cursor_index) if cursor_index is not None else None,
        playlist=ctx.view.playlist.name if ctx.view.playlist else None,
        loop=playback.loop_mode,
        shuffle=playback.shuffle,
        paused=playback.paused if playing is not None else None,
    )


def _restore_modes(ctx: AppContext, record: SessionRecord) -> AppContext:
    playback = ctx.playback
    if record.volume is not None:
        playback = playback.with_volume(record.volume)
    # Shuffle wins over single repeat if a hand-edited file sets both
    if record.loop is not None:
        playback = playback.with_loop_mode(record.loop)
    if record.shuffle is not None:
        playback = playback.with_shuffle(record.shuffle)
    return ctx.with_playback(playback)


def _wait_until_loaded(
    ctx: AppContext,
    deadline: float,
    sleep: Callable[[float], None],
    clock: Callable[[], float],
    interval: float = 0.05,
) -> tuple[AppContext, bool]:
    """Poll the engine until it reports a duration, or the deadline passes.

    The control socket comes up before the file is loaded, and a seek sent in
    between is rejected. A known duration means the track is loaded.
    """
    while True:
        _, duration = ctx.channel.query_pair(protocol.TIME_POS, protocol.DURATION)
        if duration is not None:
            return ctx.with_playback(replace(ctx.playback, duration=duration)), True
        if clock() >= deadline:
            logger.warning("Resumed track not loaded in time - starting from the beginning")
            return ctx, False
        sleep(interval)


def restore_session(
    ctx: AppContext,
    record: SessionRecord,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> AppContext:
    """Apply a saved session to a freshly created context.

    Names that no longer resolve (deleted track, removed playlist) are skipped
    and the rest of the record is still applied.
    """
    if record.is_empty():
        return ctx

    ctx = _restore_modes(ctx, record)

    if record.playlist is not None:
        ctx = player.select_playlist(ctx, record.playlist)

    if record.cursor is not None:
        cursor_index = ctx.catalog.index_of(record.cursor)
        if cursor_index is not None:
            ctx = ctx.with_view(views.jump_to_track(ctx.view, cursor_index))

    if record.track is None:
        return ctx

    playing = ctx.catalog.index_of(record.track)
    if playing is None:
        logger.info(f"Saved track no longer in catalog: {record.track}")
        return ctx

    logger.info(f"Resuming {record.track} at {record.position or 0:.1f}s")
    ctx = player.play_track(ctx, playing)

    # One settle budget covers both the socket and the track load
    deadline = clock() + ctx.config.player.restore_settle
    ready = ctx.channel.wait_until_ready(
        ctx.config.player.restore_settle, sleep=sleep, clock=clock
    )

    if ready and record.position:
        ctx, loaded = _wait_until_loaded(ctx, deadline, sleep, clock)
        if loaded:
            ctx = player.seek_to(ctx, record.position)

    if record.paused and ready:
        ctx = player.toggle_pause(ctx)

    return ctx
