"""Search prompt keyboard handler.

Typing narrows the view live; Enter keeps the filter, Esc drops it and puts the
cursor back where it was before the search started.
"""

from jukebox.ui.blessed.state import (
    InternalCommand,
    UIState,
    append_search_char,
    delete_search_char,
)


def handle_search_key(
    state: UIState, event: dict
) -> tuple[UIState, InternalCommand | None]:
    match event["type"]:
        case "enter":
            return state, InternalCommand("accept_search")
        case "escape":
            return state, InternalCommand(
                "cancel_search", {"track": state.search_prev_track}
            )
        case "backspace":
            if not state.search_text:
                return state, None
            state = delete_search_char(state)
            return state, InternalCommand("filter", {"text": state.search_text})
        case "char":
            state = append_search_char(state, event["char"])
            return state, InternalCommand("filter", {"text": state.search_text})
    return state, None
