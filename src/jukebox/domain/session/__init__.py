"""Session domain - persisting and resuming player state between runs."""

from .store import (
    SessionRecord,
    format_session,
    parse_session,
    save_session,
    load_session,
)
from .restore import snapshot_session, restore_session

__all__ = [
    "SessionRecord",
    "format_session",
    "parse_session",
    "save_session",
    "load_session",
    "snapshot_session",
    "restore_session",
]
