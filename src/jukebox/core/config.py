"""
Configuration management for Jukebox
"""

import os
import tempfile
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "jukebox"
    return Path.home() / ".config" / "jukebox"


def get_data_dir() -> Path:
    """Get the data directory path.

    JUKEBOX_HOME wins over XDG_DATA_HOME so a whole session (state, playlists,
    logs) can be relocated with one variable.
    """
    jukebox_home = os.environ.get("JUKEBOX_HOME")
    if jukebox_home:
        return Path(jukebox_home).expanduser()
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "jukebox"
    return Path.home() / ".local" / "share" / "jukebox"


@dataclass
class MusicConfig:
    """Configuration for the songs directory and playlist definitions."""

    songs_dir: str = "songs"
    playlists_dir: str = field(default_factory=lambda: str(get_data_dir() / "playlists"))


@dataclass
class PlayerConfig:
    """Configuration for the playback engine and its control socket."""

    engine: str = "mpv"
    socket_path: str = field(
        default_factory=lambda: str(Path(tempfile.gettempdir()) / "jukebox-mpv.sock")
    )
    volume: int = 100
    volume_step: int = 5
    seek_seconds: int = 5
    poll_interval: float = 0.05  # Seconds per readability wait in query_pair
    poll_attempts: int = 20
    restore_settle: float = 1.0  # Max wait for a resumed track to load before seeking


@dataclass
class UIConfig:
    """Configuration for the terminal interface."""

    tick_interval: float = 0.25
    alternate_screen: bool = True
    use_colors: bool = True


@dataclass
class SessionConfig:
    """Configuration for session persistence."""

    enabled: bool = True
    path: str = field(default_factory=lambda: str(get_data_dir() / "session"))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = None  # Default: <data dir>/jukebox.log


@dataclass
class Config:
    """Main configuration object."""

    music: MusicConfig = field(default_factory=MusicConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/jukebox (or ~/.config/jukebox)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Jukebox Configuration

[music]
# Directory whose regular files make up the catalog
songs_dir = "songs"

# Directory holding playlist definitions (one track name per line)
# playlists_dir = "~/.local/share/jukebox/playlists"

[player]
# Playback engine executable (must speak the mpv JSON IPC protocol)
engine = "mpv"

# Control socket path handed to the engine
# socket_path = "/tmp/jukebox-mpv.sock"

# Starting volume (0-100) and step for +/- keys
volume = 100
volume_step = 5

# Seconds to seek with h/l
seek_seconds = 5

[ui]
# Main loop tick in seconds
tick_interval = 0.25

# Use the alternate screen buffer (disable inside tmux popups)
alternate_screen = true

use_colors = true

[session]
# Save and restore volume, track, position, cursor, playlist and modes
enabled = true

# path = "~/.local/share/jukebox/session"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# log_file = "/path/to/jukebox.log"
""".strip()


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides on top of file values."""
    songs_dir = os.environ.get("SONGS_DIR")
    if songs_dir:
        config.music.songs_dir = songs_dir
    return config


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, falling back to defaults per key."""
    config = Config()

    if "music" in toml_data:
        music_data = toml_data["music"]
        config.music = MusicConfig(
            songs_dir=str(
                Path(music_data.get("songs_dir", config.music.songs_dir)).expanduser()
            ),
            playlists_dir=str(
                Path(
                    music_data.get("playlists_dir", config.music.playlists_dir)
                ).expanduser()
            ),
        )

    if "player" in toml_data:
        player_data = toml_data["player"]
        config.player = PlayerConfig(
            engine=player_data.get("engine", config.player.engine),
            socket_path=player_data.get("socket_path", config.player.socket_path),
            volume=max(0, min(100, int(player_data.get("volume", config.player.volume)))),
            volume_step=player_data.get("volume_step", config.player.volume_step),
            seek_seconds=player_data.get("seek_seconds", config.player.seek_seconds),
            poll_interval=player_data.get(
                "poll_interval", config.player.poll_interval
            ),
            poll_attempts=player_data.get(
                "poll_attempts", config.player.poll_attempts
            ),
            restore_settle=player_data.get(
                "restore_settle", config.player.restore_settle
            ),
        )

    if "ui" in toml_data:
        ui_data = toml_data["ui"]
        config.ui = UIConfig(
            tick_interval=ui_data.get("tick_interval", config.ui.tick_interval),
            alternate_screen=ui_data.get(
                "alternate_screen", config.ui.alternate_screen
            ),
            use_colors=ui_data.get("use_colors", config.ui.use_colors),
        )

    if "session" in toml_data:
        session_data = toml_data["session"]
        config.session = SessionConfig(
            enabled=session_data.get("enabled", config.session.enabled),
            path=str(
                Path(session_data.get("path", config.session.path)).expanduser()
            ),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level),
            log_file=logging_data.get("log_file"),
        )

    return config


def load_config() -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - SONGS_DIR
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = get_config_path()

    if not config_path.exists():
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(create_default_config())
        except OSError:
            # Read-only home is fine, defaults still apply
            pass
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        print(f"Warning: Could not read {config_path}: {e}")
        print("Using default configuration.")
        return _apply_env_overrides(Config())

    return _apply_env_overrides(parse_config(toml_data))
