"""Keyboard handling and command execution for the blessed UI."""
