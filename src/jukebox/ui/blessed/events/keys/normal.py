"""Normal mode keyboard handlers (navigation, transport and modes)."""

from jukebox.ui.blessed.state import InternalCommand, UIState, request_redraw

# Printable keys with a fixed command
CHAR_COMMANDS = {
    "q": InternalCommand("quit"),
    "j": InternalCommand("move", {"delta": 1}),
    "k": InternalCommand("move", {"delta": -1}),
    "g": InternalCommand("jump", {"target": "top"}),
    "G": InternalCommand("jump", {"target": "bottom"}),
    " ": InternalCommand("toggle_pause"),
    "h": InternalCommand("seek", {"direction": -1}),
    "l": InternalCommand("seek", {"direction": 1}),
    "+": InternalCommand("volume", {"direction": 1}),
    "=": InternalCommand("volume", {"direction": 1}),
    "-": InternalCommand("volume", {"direction": -1}),
    "m": InternalCommand("toggle_loop"),
    "n": InternalCommand("toggle_shuffle"),
    "p": InternalCommand("cycle_playlist"),
    "P": InternalCommand("leave_playlist"),
    "/": InternalCommand("start_search"),
    "?": InternalCommand("start_search"),
}

# Special keys by parsed event type
EVENT_COMMANDS = {
    "enter": InternalCommand("play_selected"),
    "escape": InternalCommand("stop"),
    "arrow_down": InternalCommand("move", {"delta": 1}),
    "arrow_up": InternalCommand("move", {"delta": -1}),
    "arrow_left": InternalCommand("seek", {"direction": -1}),
    "arrow_right": InternalCommand("seek", {"direction": 1}),
    "home": InternalCommand("jump", {"target": "top"}),
    "end": InternalCommand("jump", {"target": "bottom"}),
    "scroll_down": InternalCommand("scroll", {"lines": 1}),
    "scroll_up": InternalCommand("scroll", {"lines": -1}),
    "page_down": InternalCommand("scroll", {"pages": 1}),
    "page_up": InternalCommand("scroll", {"pages": -1}),
}


def handle_normal_mode_key(
    state: UIState, event: dict
) -> tuple[UIState, InternalCommand | None]:
    """
    Map a key in normal mode to a player command.

    Args:
        state: Current UI state
        event: Parsed key event

    Returns:
        Tuple of (updated state, command to execute or None)
    """
    if event["type"] == "ctrl_l":
        return request_redraw(state), None

    if event["type"] == "char":
        return state, CHAR_COMMANDS.get(event["char"])

    return state, EVENT_COMMANDS.get(event["type"])
