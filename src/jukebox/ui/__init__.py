"""User interfaces for Jukebox."""
