"""Command execution for the blessed UI."""

from .executor import execute_command

__all__ = ["execute_command"]
