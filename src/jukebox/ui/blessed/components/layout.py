"""Layout calculation functions."""

from blessed import Terminal

HEADER_HEIGHT = 2  # Title + separator
FOOTER_HEIGHT = 2  # Status line + progress/help/search line


def calculate_layout(term: Terminal) -> dict[str, int]:
    """
    Pure function: calculate y-positions for all regions.

    Args:
        term: blessed Terminal instance

    Returns:
        Dictionary with region positions and heights
    """
    term_height = term.height or 24

    list_rows = max(1, term_height - HEADER_HEIGHT - FOOTER_HEIGHT)
    return {
        "header_y": 0,
        "list_y": HEADER_HEIGHT,
        "list_rows": list_rows,
        "status_y": max(HEADER_HEIGHT, term_height - 2),
        "bottom_y": max(HEADER_HEIGHT + 1, term_height - 1),
    }
