"""Library domain - the track catalog and playlist definitions."""

from .catalog import (
    Catalog,
    Playlist,
    scan_songs,
    load_catalog,
    list_playlists,
    parse_playlist,
    load_playlist,
)

__all__ = [
    "Catalog",
    "Playlist",
    "scan_songs",
    "load_catalog",
    "list_playlists",
    "parse_playlist",
    "load_playlist",
]
