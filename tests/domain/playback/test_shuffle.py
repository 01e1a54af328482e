"""Tests for shuffle sequencing without replacement."""

import random

from jukebox.domain.playback.shuffle import (
    ShuffleHistory,
    mark_played,
    next_track,
    remaining,
    reset,
)


class TestMarkPlayed:
    """Test recording plays in the history."""

    def test_records_index(self):
        """Test a play is added to the history."""
        history = mark_played(reset(), 2, (0, 1, 2, 3))
        assert 2 in history
        assert len(history) == 1

    def test_resets_when_view_covered(self):
        """Test the last play of a cycle clears the history."""
        view = (4, 7, 9)
        history = reset()
        for index in view[:-1]:
            history = mark_played(history, index, view)
        assert len(history) == 2
        history = mark_played(history, view[-1], view)
        assert history == ShuffleHistory()

    def test_only_visible_tracks_count(self):
        """Test plays outside the view do not complete a cycle."""
        history = mark_played(reset(), 99, (1, 2))
        history = mark_played(history, 1, (1, 2))
        assert remaining(history, (1, 2)) == [2]


class TestNextTrack:
    """Test picking the next shuffled track."""

    def test_empty_view(self):
        """Test an empty view has nothing to pick."""
        pick, history = next_track(reset(), ())
        assert pick is None
        assert history == reset()

    def test_never_picks_played_track(self):
        """Test picks come only from the unplayed part of the view."""
        rng = random.Random(7)
        view = tuple(range(10))
        history = ShuffleHistory(played=frozenset({0, 1, 2, 3, 4, 5, 6, 7}))
        for _ in range(50):
            pick, _ = next_track(history, view, rng)
            assert pick in (8, 9)

    def test_exhausted_history_restarts_from_full_view(self):
        """Test a fully played view resets and picks from every track."""
        view = (1, 2, 3)
        history = ShuffleHistory(played=frozenset(view))
        pick, history = next_track(history, view, random.Random(3))
        assert pick in view
        assert history == reset()

    def test_cycle_completeness(self):
        """Test N picks over a view of N tracks cover it exactly once."""
        rng = random.Random(42)
        view = tuple(range(0, 20, 2))
        history = reset()
        picks = []
        for _ in range(len(view)):
            pick, history = next_track(history, view, rng)
            picks.append(pick)
            history = mark_played(history, pick, view)

        assert sorted(picks) == list(view)
        # Cycle complete: history is cleared and the next pick may be any track
        assert history == reset()
        assert remaining(history, view) == list(view)
