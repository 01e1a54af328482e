"""Utility functions for keyboard handling."""

from blessed.keyboard import Keystroke


def parse_key(key: Keystroke) -> dict:
    """
    Parse keystroke into event dictionary.

    Args:
        key: blessed Keystroke

    Returns:
        Event dictionary describing the key press
    """
    event = {
        "type": "unknown",
        "key": key,
        "name": key.name if hasattr(key, "name") else None,
        "char": str(key) if key and key.isprintable() else None,
    }

    # Identify key type
    if key.name == "KEY_ENTER" or key in ("\r", "\n"):
        event["type"] = "enter"
    elif key.name == "KEY_ESCAPE" or key == "\x1b":
        event["type"] = "escape"
    elif key.name == "KEY_BACKSPACE" or key in ("\x7f", "\x08"):
        event["type"] = "backspace"
    elif key.name == "KEY_UP":
        event["type"] = "arrow_up"
    elif key.name == "KEY_DOWN":
        event["type"] = "arrow_down"
    elif key.name == "KEY_LEFT":
        event["type"] = "arrow_left"
    elif key.name == "KEY_RIGHT":
        event["type"] = "arrow_right"
    elif key.name == "KEY_PGUP":  # Page Up (blessed uses PGUP not PPAGE)
        event["type"] = "page_up"
    elif key.name == "KEY_PGDOWN":  # Page Down (blessed uses PGDOWN not NPAGE)
        event["type"] = "page_down"
    elif key.name == "KEY_HOME":
        event["type"] = "home"
    elif key.name == "KEY_END":
        event["type"] = "end"
    elif key == "\x05":  # Ctrl+E (scroll down one line - vim style)
        event["type"] = "scroll_down"
    elif key == "\x19":  # Ctrl+Y (scroll up one line - vim style)
        event["type"] = "scroll_up"
    elif key == "\x15":  # Ctrl+U
        event["type"] = "page_up"
    elif key == "\x04":  # Ctrl+D
        event["type"] = "page_down"
    elif key == "\x0c":  # Ctrl+L
        event["type"] = "ctrl_l"
    elif key and key.isprintable():
        event["type"] = "char"

    return event
