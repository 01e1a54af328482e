"""Jukebox - terminal front-end for an external playback engine."""

__version__ = "0.1.0"
