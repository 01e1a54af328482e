"""Playback domain - view projection, shuffle, engine process and control socket.

This domain handles:
- Projecting the catalog through playlist and filter into the visible view
- Shuffle cycles without replacement
- The engine subprocess lifecycle
- JSON IPC over the engine's control socket

Player operations live in jukebox.domain.playback.player and are imported from
there directly (they depend on jukebox.context, which depends on this package).
"""

from .state import LoopMode, PlaybackState, clamp_volume
from .view import (
    InvalidPattern,
    ViewState,
    create_view,
    current_view,
    view_length,
    index_at,
    selected_track,
    position_of,
    set_filter,
    clear_filter,
    set_playlist,
    move_cursor,
    jump,
    jump_to_track,
    scroll,
    set_list_rows,
    visible_window,
)
from .shuffle import ShuffleHistory
from .channel import ControlChannel, ControlChannelError, ConnectFailed, WriteFailed
from .supervisor import (
    EngineStatus,
    EngineSupervisor,
    build_engine_command,
    check_engine_available,
)

__all__ = [
    "LoopMode",
    "PlaybackState",
    "clamp_volume",
    "InvalidPattern",
    "ViewState",
    "create_view",
    "current_view",
    "view_length",
    "index_at",
    "selected_track",
    "position_of",
    "set_filter",
    "clear_filter",
    "set_playlist",
    "move_cursor",
    "jump",
    "jump_to_track",
    "scroll",
    "set_list_rows",
    "visible_window",
    "ShuffleHistory",
    "ControlChannel",
    "ControlChannelError",
    "ConnectFailed",
    "WriteFailed",
    "EngineStatus",
    "EngineSupervisor",
    "build_engine_command",
    "check_engine_available",
]
