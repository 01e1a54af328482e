"""Blessed UI helper functions."""

from .terminal import truncate, write_at

__all__ = ["truncate", "write_at"]
