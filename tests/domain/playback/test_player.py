"""Tests for player operations and the auto-advance policy."""

from pathlib import Path

import pytest

from jukebox.context import AppContext
from jukebox.domain.playback import player
from jukebox.domain.playback.state import LoopMode
from jukebox.domain.playback.view import jump, selected_track


def play_and_finish(ctx: AppContext, popen) -> AppContext:
    """Let the current engine exit and run one tick of exit handling."""
    popen.last.finish(0)
    return player.check_engine_exit(ctx)


class TestAutoAdvance:
    """Test which track follows when the engine exits."""

    def test_sequential_wraps(self, ctx: AppContext, popen):
        """Test a -> b -> c -> a with no shuffle and loop all."""
        ctx = player.play_track(ctx, 0)
        assert ctx.playback.playing == 0

        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing == 1
        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing == 2
        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing == 0

        assert popen.launched_tracks() == ["a.mp3", "b.mp3", "c.mp3", "a.mp3"]

    def test_single_repeat(self, ctx: AppContext, popen):
        """Test single repeat restarts the same track."""
        ctx = player.toggle_loop(ctx)
        ctx = player.play_track(ctx, 1)
        for _ in range(3):
            ctx = play_and_finish(ctx, popen)
            assert ctx.playback.playing == 1
        assert popen.launched_tracks() == ["b.mp3"] * 4

    def test_no_exit_no_change(self, ctx: AppContext, popen):
        """Test a running engine is left alone."""
        ctx = player.play_track(ctx, 0)
        assert player.check_engine_exit(ctx) == ctx
        assert len(popen.processes) == 1

    def test_exit_handled_once(self, ctx: AppContext, popen):
        """Test one exit starts exactly one new track."""
        ctx = player.play_track(ctx, 0)
        ctx = play_and_finish(ctx, popen)
        ctx = player.check_engine_exit(ctx)
        assert len(popen.processes) == 2

    def test_previous_track_filtered_out(self, ctx: AppContext, popen):
        """Test advance restarts at the top when the last track is no longer visible."""
        ctx = player.play_track(ctx, 0)
        ctx = player.apply_filter(ctx, "[bc]")
        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing == 1

    def test_empty_view_stops(self, ctx: AppContext, popen):
        """Test nothing plays when the view is empty."""
        ctx = player.play_track(ctx, 0)
        ctx = player.apply_filter(ctx, "nothing-matches")
        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing is None
        assert len(popen.processes) == 1

    def test_advance_follows_view(self, ctx: AppContext, popen):
        """Test the next track comes from the filtered view."""
        ctx = player.apply_filter(ctx, "[ac]")
        ctx = player.play_track(ctx, 0)
        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing == 2
        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing == 0

    def test_exit_clears_transport(self, ctx: AppContext, popen, channel):
        """Test an exit resets position and pause before the next track."""
        ctx = player.play_track(ctx, 0)
        ctx = player.toggle_pause(ctx)
        assert ctx.playback.paused
        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.paused is False
        assert ctx.playback.position == 0.0
        assert channel.disconnects >= 2


class TestShuffleAdvance:
    """Test auto-advance with shuffle on."""

    def test_cycle_never_repeats_early(self, ctx: AppContext, popen):
        """Test every track plays once before any repeats."""
        ctx = player.toggle_shuffle(ctx)
        ctx = player.play_track(ctx, 0)
        played = [0]
        for _ in range(2):
            ctx = play_and_finish(ctx, popen)
            played.append(ctx.playback.playing)
        assert sorted(played) == [0, 1, 2]

    def test_history_reset_after_cycle(self, ctx: AppContext, popen):
        """Test a finished cycle starts a new one."""
        ctx = player.toggle_shuffle(ctx)
        ctx = player.play_track(ctx, 0)
        for _ in range(2):
            ctx = play_and_finish(ctx, popen)
        assert len(ctx.shuffle_history) == 0

        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing in (0, 1, 2)
        assert len(ctx.shuffle_history) == 1

    def test_view_change_restarts_cycle(self, ctx: AppContext):
        """Test a filter change restarts the cycle with only the playing track counted."""
        ctx = player.toggle_shuffle(ctx)
        ctx = player.play_track(ctx, 0)
        ctx = player.play_track(ctx, 1)
        assert 0 in ctx.shuffle_history

        ctx = player.apply_filter(ctx, "[bc]")
        assert 0 not in ctx.shuffle_history
        assert 1 in ctx.shuffle_history
        assert len(ctx.shuffle_history) == 1

    def test_view_change_does_not_replay_current(self, ctx: AppContext, popen):
        """Test the track playing across a filter change is not picked again next."""
        ctx = player.toggle_shuffle(ctx)
        ctx = player.play_track(ctx, 0)
        ctx = player.apply_filter(ctx, "[ab]")

        ctx = play_and_finish(ctx, popen)
        assert ctx.playback.playing == 1


class TestSpawnFailureSkip:
    """Test a missing engine is treated as a track that ended instantly."""

    def test_skips_to_next_track(self, ctx: AppContext, popen):
        """Test a failed spawn advances on the next exit check."""
        popen.fail = True
        ctx = player.play_track(ctx, 0)
        assert ctx.playback.playing == 0

        ctx = player.check_engine_exit(ctx)
        assert ctx.playback.playing == 1
        ctx = player.check_engine_exit(ctx)
        assert ctx.playback.playing == 2


class TestModes:
    """Test loop and shuffle toggles."""

    def test_single_disables_shuffle(self, ctx: AppContext):
        """Test enabling single repeat turns shuffle off."""
        ctx = player.toggle_shuffle(ctx)
        ctx = player.toggle_loop(ctx)
        assert ctx.playback.loop_mode is LoopMode.SINGLE
        assert ctx.playback.shuffle is False

    def test_shuffle_disables_single(self, ctx: AppContext):
        """Test enabling shuffle returns to loop all."""
        ctx = player.toggle_loop(ctx)
        ctx = player.toggle_shuffle(ctx)
        assert ctx.playback.shuffle is True
        assert ctx.playback.loop_mode is LoopMode.ALL

    def test_shuffle_on_marks_playing(self, ctx: AppContext):
        """Test turning shuffle on counts the current track as played."""
        ctx = player.play_track(ctx, 2)
        ctx = player.toggle_shuffle(ctx)
        assert 2 in ctx.shuffle_history


class TestTransport:
    """Test pause, seek, stop and volume."""

    def test_toggle_pause_when_idle_plays_selected(self, ctx: AppContext, popen):
        """Test space with nothing playing starts the cursor track."""
        ctx = ctx.with_view(jump(ctx.view, 1))
        ctx = player.toggle_pause(ctx)
        assert ctx.playback.playing == 1
        assert popen.launched_tracks() == ["b.mp3"]

    def test_toggle_pause_sends_cycle(self, ctx: AppContext, channel):
        """Test pause and resume send cycle pause."""
        ctx = player.play_track(ctx, 0)
        ctx = player.toggle_pause(ctx)
        ctx = player.toggle_pause(ctx)
        assert channel.sent == [["cycle", "pause"], ["cycle", "pause"]]
        assert ctx.playback.paused is False

    def test_seek_only_while_running(self, ctx: AppContext, channel):
        """Test seeking does nothing without an engine."""
        player.seek(ctx, 5)
        assert channel.sent == []
        ctx = player.play_track(ctx, 0)
        player.seek(ctx, -5)
        assert channel.sent == [["seek", -5, "relative"]]

    def test_stop(self, ctx: AppContext, popen, tmp_path: Path):
        """Test stop ends the engine and clears transport."""
        ctx = player.play_track(ctx, 0)
        ctx = player.stop(ctx)
        assert popen.last.terminated
        assert ctx.playback.playing is None
        assert not ctx.supervisor.running
        assert player.check_engine_exit(ctx) == ctx

    def test_volume_clamped(self, ctx: AppContext):
        """Test volume stays within 0-100."""
        assert ctx.playback.volume == 80
        for _ in range(10):
            ctx = player.adjust_volume(ctx, 5)
        assert ctx.playback.volume == 100
        for _ in range(30):
            ctx = player.adjust_volume(ctx, -5)
        assert ctx.playback.volume == 0

    def test_volume_sent_live_and_carried_over(self, ctx: AppContext, popen, channel):
        """Test the applied step is sent and the next launch uses the new level."""
        ctx = player.play_track(ctx, 0)
        assert "--volume=80" in popen.last.cmd
        ctx = player.adjust_volume(ctx, 15)
        ctx = player.adjust_volume(ctx, 15)
        assert channel.sent == [["add", "volume", 15], ["add", "volume", 5]]

        ctx = play_and_finish(ctx, popen)
        assert "--volume=100" in popen.last.cmd

    def test_volume_when_idle_not_sent(self, ctx: AppContext, channel):
        """Test adjusting volume with no engine only updates the tracked level."""
        ctx = player.adjust_volume(ctx, -10)
        assert ctx.playback.volume == 70
        assert channel.sent == []


class TestRefreshPosition:
    """Test polling position and duration."""

    def test_updates_while_playing(self, ctx: AppContext, channel):
        """Test values from the engine are stored."""
        ctx = player.play_track(ctx, 0)
        channel.answers = (12.0, 200.0)
        ctx = player.refresh_position(ctx)
        assert (ctx.playback.position, ctx.playback.duration) == (12.0, 200.0)

    def test_keeps_old_values_on_timeout(self, ctx: AppContext, channel):
        """Test unanswered values keep the last estimate."""
        ctx = player.play_track(ctx, 0)
        channel.answers = (12.0, 200.0)
        ctx = player.refresh_position(ctx)
        channel.answers = (15.0, None)
        ctx = player.refresh_position(ctx)
        assert (ctx.playback.position, ctx.playback.duration) == (15.0, 200.0)

    def test_no_query_when_paused_or_idle(self, ctx: AppContext, channel):
        """Test no round trip while idle or paused."""
        player.refresh_position(ctx)
        ctx = player.play_track(ctx, 0)
        ctx = player.toggle_pause(ctx)
        player.refresh_position(ctx)
        assert channel.queries == 0


class TestPlaylists:
    """Test switching between playlists and the full catalog."""

    @pytest.fixture
    def with_playlists(self, playlists_dir: Path):
        (playlists_dir / "evens.txt").write_text("a.mp3\nc.mp3\n")
        (playlists_dir / "reversed.txt").write_text("c.mp3\nb.mp3\na.mp3\n")

    def test_select_playlist(self, ctx: AppContext, with_playlists):
        """Test activating a playlist narrows the view."""
        ctx = player.select_playlist(ctx, "reversed")
        assert ctx.view.indices == (2, 1, 0)
        assert ctx.view.playlist.name == "reversed"

    def test_unknown_playlist_ignored(self, ctx: AppContext, with_playlists):
        """Test an unknown name leaves the view unchanged."""
        assert player.select_playlist(ctx, "nope") == ctx

    def test_cycle_playlist(self, ctx: AppContext, with_playlists):
        """Test p walks the playlists then returns to the catalog."""
        ctx = player.cycle_playlist(ctx)
        assert ctx.view.playlist.name == "evens"
        ctx = player.cycle_playlist(ctx)
        assert ctx.view.playlist.name == "reversed"
        ctx = player.cycle_playlist(ctx)
        assert ctx.view.playlist is None
        assert ctx.view.indices == (0, 1, 2)

    def test_cursor_follows_track_into_playlist(self, ctx: AppContext, with_playlists):
        """Test the selected track keeps the cursor when it is a member."""
        ctx = ctx.with_view(jump(ctx.view, 2))
        ctx = player.select_playlist(ctx, "evens")
        assert selected_track(ctx.view) == 2
        assert ctx.view.cursor == 1

    def test_cycle_without_playlists(self, ctx: AppContext):
        """Test p does nothing when no playlists exist."""
        assert player.cycle_playlist(ctx) == ctx
