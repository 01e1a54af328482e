"""
Playback state for Jukebox

Transport fields (playing, paused, position, duration) describe the engine
process and are cleared whenever it goes away. Mode fields (volume, loop mode,
shuffle) belong to the user and survive track changes.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

MIN_VOLUME = 0
MAX_VOLUME = 100


class LoopMode(Enum):
    ALL = "all"
    SINGLE = "single"


@dataclass(frozen=True)
class PlaybackState:
    """Immutable playback state.

    loop_mode SINGLE and shuffle are mutually exclusive; use with_loop_mode()
    and with_shuffle() to keep it that way.
    """

    playing: Optional[int] = None  # Catalog index of the track the engine plays
    paused: bool = False
    position: float = 0.0
    duration: float = 0.0
    volume: int = 100
    loop_mode: LoopMode = LoopMode.ALL
    shuffle: bool = False

    def cleared(self) -> "PlaybackState":
        """Transport fields reset; modes and volume kept."""
        return replace(self, playing=None, paused=False, position=0.0, duration=0.0)

    def with_loop_mode(self, loop_mode: LoopMode) -> "PlaybackState":
        shuffle = False if loop_mode is LoopMode.SINGLE else self.shuffle
        return replace(self, loop_mode=loop_mode, shuffle=shuffle)

    def with_shuffle(self, shuffle: bool) -> "PlaybackState":
        loop_mode = LoopMode.ALL if shuffle else self.loop_mode
        return replace(self, shuffle=shuffle, loop_mode=loop_mode)

    def with_volume(self, volume: int) -> "PlaybackState":
        return replace(self, volume=clamp_volume(volume))


def clamp_volume(volume: int) -> int:
    return max(MIN_VOLUME, min(MAX_VOLUME, volume))
