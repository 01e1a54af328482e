"""UI state management - immutable state updates.

UIState holds only what the terminal interface needs between frames. The
player's own state lives in AppContext.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional


@dataclass
class InternalCommand:
    """Type-safe internal command protocol for UI -> command handler communication."""

    action: str  # Command action type
    data: dict[str, Any] = field(default_factory=dict)  # Command data


@dataclass
class UIState:
    """UI-only state (search prompt and redraw bookkeeping)."""

    # Search prompt
    search_active: bool = False
    search_text: str = ""
    search_prev_track: Optional[int] = None  # Restored to the cursor on cancel

    # Rendering
    needs_redraw: bool = True


def create_initial_state() -> UIState:
    """Create the initial UI state."""
    return UIState()


def start_search(state: UIState, prev_track: Optional[int]) -> UIState:
    """Open the search prompt, remembering the track under the cursor."""
    return replace(
        state,
        search_active=True,
        search_text="",
        search_prev_track=prev_track,
    )


def append_search_char(state: UIState, char: str) -> UIState:
    return replace(state, search_text=state.search_text + char)


def delete_search_char(state: UIState) -> UIState:
    """Delete last character from the search text (backspace)."""
    if not state.search_text:
        return state
    return replace(state, search_text=state.search_text[:-1])


def end_search(state: UIState) -> UIState:
    """Close the search prompt; the filter it produced stays in effect."""
    return replace(
        state,
        search_active=False,
        search_text="",
        search_prev_track=None,
    )


def request_redraw(state: UIState) -> UIState:
    """Force a full clear and repaint on the next frame."""
    return replace(state, needs_redraw=True)


def mark_drawn(state: UIState) -> UIState:
    return replace(state, needs_redraw=False)
