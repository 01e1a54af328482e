"""
Shuffle sequencing without replacement.

Every visible track plays once per cycle before any repeats. History is scoped
to the view it is used with: only indices that are currently visible count
toward completing a cycle.
"""

import random
from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass(frozen=True)
class ShuffleHistory:
    """Tracks played in the current shuffle cycle."""

    played: frozenset[int] = field(default_factory=frozenset)

    def __len__(self) -> int:
        return len(self.played)

    def __contains__(self, index: object) -> bool:
        return index in self.played


def reset() -> ShuffleHistory:
    return ShuffleHistory()


def remaining(history: ShuffleHistory, view: Sequence[int]) -> list[int]:
    """Visible tracks not yet played this cycle, in view order."""
    return [i for i in view if i not in history.played]


def mark_played(
    history: ShuffleHistory, index: int, view: Sequence[int]
) -> ShuffleHistory:
    """Record a play; clear history once every visible track has played."""
    updated = ShuffleHistory(played=history.played | {index})
    if not remaining(updated, view):
        return reset()
    return updated


def next_track(
    history: ShuffleHistory,
    view: Sequence[int],
    rng: Optional[random.Random] = None,
) -> tuple[Optional[int], ShuffleHistory]:
    """Pick a random unplayed visible track.

    When nothing is left the cycle restarts and the pick comes from the full
    view, so a cycle never stalls.

    Returns:
        Tuple of (picked catalog index or None for an empty view, history to
        continue with). The pick is not marked; call mark_played when it starts.
    """
    if not view:
        return None, history

    chooser = rng or random
    candidates = remaining(history, view)
    if not candidates:
        history = reset()
        candidates = list(view)

    return chooser.choice(candidates), history
