"""Formatting helper functions."""


def format_time(seconds: float) -> str:
    """
    Format seconds as M:SS.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted time string
    """
    seconds = max(0.0, seconds)
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def format_progress_bar(position: float, duration: float, width: int) -> str:
    """
    Build a `===>---` bar of exactly width characters.

    Args:
        position: Elapsed seconds
        duration: Track length in seconds (0 when unknown)
        width: Bar width in characters (at least 4)

    Returns:
        The bar without surrounding brackets
    """
    width = max(4, width)
    filled = 0
    if duration > 0:
        filled = int(position / duration * width)
    filled = max(0, min(filled, width))

    if filled >= width:
        return "=" * width
    return "=" * filled + ">" + "-" * (width - filled - 1)
