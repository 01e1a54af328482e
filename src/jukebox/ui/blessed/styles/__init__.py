"""Styling helpers for the blessed UI."""
