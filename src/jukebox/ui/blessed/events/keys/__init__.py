"""Keyboard event handlers organized by mode."""

from .utils import parse_key
from .normal import handle_normal_mode_key
from .search import handle_search_key

__all__ = [
    "parse_key",
    "handle_normal_mode_key",
    "handle_search_key",
]
