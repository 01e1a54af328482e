"""
Track catalog and playlist definitions.

The catalog is the sorted list of regular files in the songs directory. It is
fixed after the initial scan; everything else refers to tracks by their index
into it.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger


@dataclass(frozen=True)
class Playlist:
    """Named ordered subset of catalog indices."""

    name: str
    members: tuple[int, ...] = ()


@dataclass(frozen=True)
class Catalog:
    """Immutable list of playable track names plus where they live."""

    tracks: tuple[str, ...] = ()
    songs_dir: Path = Path(".")
    playlists_dir: Optional[Path] = None

    def __len__(self) -> int:
        return len(self.tracks)

    def name(self, index: int) -> str:
        return self.tracks[index]

    def path(self, index: int) -> Path:
        """Full path handed to the engine for a catalog index."""
        return self.songs_dir / self.tracks[index]

    def index_of(self, name: str) -> Optional[int]:
        """Catalog index for an exact track name, or None."""
        try:
            return self.tracks.index(name)
        except ValueError:
            return None


def scan_songs(songs_dir: Path) -> list[str]:
    """List regular, non-hidden files in songs_dir sorted by name.

    Raises:
        FileNotFoundError: If songs_dir does not exist
        NotADirectoryError: If songs_dir is not a directory
    """
    return sorted(
        entry.name
        for entry in songs_dir.iterdir()
        if not entry.name.startswith(".") and entry.is_file()
    )


def load_catalog(songs_dir: Path, playlists_dir: Optional[Path] = None) -> Catalog:
    """Scan songs_dir and build the catalog."""
    tracks = tuple(scan_songs(songs_dir))
    logger.info(f"Scanned {len(tracks)} tracks from {songs_dir}")
    return Catalog(tracks=tracks, songs_dir=songs_dir, playlists_dir=playlists_dir)


def list_playlists(catalog: Catalog) -> list[str]:
    """Names of the playlist definitions available (file stems, sorted)."""
    if catalog.playlists_dir is None or not catalog.playlists_dir.is_dir():
        return []
    return sorted(
        {
            entry.stem
            for entry in catalog.playlists_dir.iterdir()
            if not entry.name.startswith(".") and entry.is_file()
        }
    )


def _playlist_file(catalog: Catalog, name: str) -> Optional[Path]:
    if catalog.playlists_dir is None or not catalog.playlists_dir.is_dir():
        return None
    for entry in sorted(catalog.playlists_dir.iterdir()):
        if entry.stem == name and entry.is_file():
            return entry
    return None


def parse_playlist(catalog: Catalog, name: str, text: str) -> Playlist:
    """Resolve playlist lines against the catalog by exact name.

    Unmatched lines are skipped silently. A track listed twice appears once, at
    its first position.
    """
    members: list[int] = []
    seen: set[int] = set()
    for line in text.splitlines():
        track_name = line.strip()
        if not track_name:
            continue
        index = catalog.index_of(track_name)
        if index is None or index in seen:
            continue
        seen.add(index)
        members.append(index)
    return Playlist(name=name, members=tuple(members))


def load_playlist(catalog: Catalog, name: str) -> Optional[Playlist]:
    """Load a playlist definition by name.

    Returns:
        Playlist, or None when no definition by that name exists. A definition
        that cannot be read is treated as an empty playlist.
    """
    path = _playlist_file(catalog, name)
    if path is None:
        return None

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning(f"Could not read playlist {path}: {e}")
        return Playlist(name=name)

    playlist = parse_playlist(catalog, name, text)
    logger.debug(f"Loaded playlist '{name}' with {len(playlist.members)} tracks")
    return playlist
