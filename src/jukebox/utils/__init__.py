"""Utility functions for Jukebox."""
