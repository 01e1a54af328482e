"""Rendering functions for blessed UI."""

from .layout import calculate_layout
from .track_list import render_header, render_track_list
from .status import render_status, render_bottom_line

__all__ = [
    "calculate_layout",
    "render_header",
    "render_track_list",
    "render_status",
    "render_bottom_line",
]
