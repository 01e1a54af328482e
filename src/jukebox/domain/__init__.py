"""Domain logic: catalog, playback control and session persistence."""
