"""
Session persistence for Jukebox

The session file is a handful of `key=value` lines. Tracks and playlists are
stored by name rather than index so a rescanned catalog still resolves them.
Reading never fails: a missing file, unknown keys and malformed values all
degrade to "field not set".
"""

import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from loguru import logger

from jukebox.domain.playback.state import LoopMode, clamp_volume

SESSION_KEYS = (
    "volume",
    "track",
    "position",
    "cursor",
    "playlist",
    "loop",
    "shuffle",
    "paused",
)


@dataclass(frozen=True)
class SessionRecord:
    """Snapshot of what a later run needs to resume.

    Every field is optional; None means "not saved" and leaves the matching
    part of the state at its default on restore.
    """

    volume: Optional[int] = None
    track: Optional[str] = None  # Name of the track that was playing
    position: Optional[float] = None
    cursor: Optional[str] = None  # Name of the track under the cursor
    playlist: Optional[str] = None
    loop: Optional[LoopMode] = None
    shuffle: Optional[bool] = None
    paused: Optional[bool] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


def _format_value(value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, LoopMode):
        return value.value
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def format_session(record: SessionRecord) -> str:
    """Serialize a record; unset fields are omitted."""
    lines = []
    for key in SESSION_KEYS:
        value = getattr(record, key)
        if value is None:
            continue
        text = _format_value(value)
        if "\n" in text:
            logger.warning(f"Skipping session key {key}: value spans lines")
            continue
        lines.append(f"{key}={text}")
    return "\n".join(lines) + "\n" if lines else ""


def _parse_flag(text: str) -> bool:
    if text == "1":
        return True
    if text == "0":
        return False
    raise ValueError(f"expected 0 or 1, got {text!r}")


def _parse_value(key: str, text: str):
    match key:
        case "volume":
            return clamp_volume(int(text))
        case "position":
            position = float(text)
            if not math.isfinite(position) or position < 0:
                raise ValueError(f"invalid position {text!r}")
            return position
        case "loop":
            return LoopMode(text)
        case "shuffle" | "paused":
            return _parse_flag(text)
        case "track" | "cursor" | "playlist":
            if not text:
                raise ValueError("empty name")
            return text
    raise KeyError(key)


def parse_session(text: str) -> SessionRecord:
    """Parse session text, ignoring unknown keys and malformed values."""
    values = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip()
        if key not in SESSION_KEYS:
            logger.debug(f"Ignoring unknown session key: {key}")
            continue

        try:
            values[key] = _parse_value(key, value.strip())
        except ValueError as e:
            logger.debug(f"Ignoring session value for {key}: {e}")

    return SessionRecord(**values)


def save_session(path: Path, record: SessionRecord) -> bool:
    """Write the session file, creating its directory if needed.

    Returns:
        True if the file was written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(format_session(record), encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not save session to {path}: {e}")
        return False
    return True


def load_session(path: Path) -> SessionRecord:
    """Read the session file; missing or unreadable files give an empty record."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return SessionRecord()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read session from {path}: {e}")
        return SessionRecord()

    return parse_session(text)
