"""Keyboard event handling dispatcher for all modes.

Key Functions:
    - handle_key: Main keyboard dispatcher
"""

from blessed.keyboard import Keystroke

from jukebox.ui.blessed.state import InternalCommand, UIState

from .keys import handle_normal_mode_key, handle_search_key, parse_key


def detect_mode(state: UIState) -> str:
    """Current input mode: "search" while the prompt is open, else "normal"."""
    if state.search_active:
        return "search"
    return "normal"


def handle_key(
    state: UIState, key: Keystroke
) -> tuple[UIState, InternalCommand | None]:
    """
    Handle keyboard input and return updated state.

    Args:
        state: Current UI state
        key: blessed Keystroke

    Returns:
        Tuple of (updated state, command to execute or None)
    """
    event = parse_key(key)

    match detect_mode(state):
        case "search":
            return handle_search_key(state, event)
        case _:
            return handle_normal_mode_key(state, event)
