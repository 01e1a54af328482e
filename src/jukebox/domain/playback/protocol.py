"""
Line-oriented codec for the engine's JSON IPC protocol.

Requests are single-line JSON objects `{"command": [...]}` with an optional
integer `request_id`. Replies and events come back one JSON object per line;
replies carry the matching `request_id` and a `data` field.
"""

import json
from typing import Any, Optional

TIME_POS = "time-pos"
DURATION = "duration"


def encode(command: list[Any], request_id: Optional[int] = None) -> bytes:
    """Serialize a command as one newline-terminated JSON line."""
    payload: dict[str, Any] = {"command": command}
    if request_id is not None:
        payload["request_id"] = request_id
    return (json.dumps(payload, separators=(",", ":")) + "\n").encode("utf-8")


def cycle_pause() -> list[Any]:
    return ["cycle", "pause"]


def seek_relative(seconds: float) -> list[Any]:
    return ["seek", seconds, "relative"]


def seek_absolute(seconds: float) -> list[Any]:
    return ["seek", seconds, "absolute"]


def add_volume(delta: int) -> list[Any]:
    return ["add", "volume", delta]


def get_property(name: str) -> list[Any]:
    return ["get_property", name]


def decode_lines(buffer: bytes) -> tuple[list[dict[str, Any]], bytes]:
    """Split a receive buffer into decoded records and an unfinished tail.

    Only newline-terminated lines are decoded. Lines that are not JSON objects
    are dropped. The bytes after the last newline are returned untouched so
    they can be completed by the next read.

    Returns:
        Tuple of (records, remainder)
    """
    *lines, remainder = buffer.split(b"\n")
    records = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line.decode("utf-8", errors="replace"))
        except json.JSONDecodeError:
            continue
        if isinstance(record, dict):
            records.append(record)
    return records, remainder


def extract_number(record: dict[str, Any]) -> Optional[float]:
    """Numeric `data` payload of a reply, or None (error, null, non-numeric)."""
    if record.get("error", "success") != "success":
        return None
    data = record.get("data")
    if isinstance(data, bool) or not isinstance(data, (int, float)):
        return None
    return float(data)
