"""Shared fixtures: a small catalog on disk and fakes for the engine process and socket."""

import random
from pathlib import Path

import pytest

from jukebox.context import AppContext
from jukebox.core.config import Config, MusicConfig, PlayerConfig, SessionConfig
from jukebox.domain.library.catalog import Catalog, load_catalog
from jukebox.domain.playback.supervisor import EngineSupervisor


class FakeProcess:
    """Stands in for subprocess.Popen: exits when told to."""

    _next_pid = 1000

    def __init__(self, cmd):
        FakeProcess._next_pid += 1
        self.pid = FakeProcess._next_pid
        self.cmd = cmd
        self.returncode = None
        self.terminated = False
        self.killed = False

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def kill(self):
        self.killed = True
        self.returncode = -9

    def wait(self, timeout=None):
        return self.returncode

    def finish(self, returncode: int = 0):
        """Simulate the track ending."""
        self.returncode = returncode


class FakePopen:
    """Records every launch; raises FileNotFoundError when fail is set."""

    def __init__(self):
        self.processes: list[FakeProcess] = []
        self.fail = False

    def __call__(self, cmd, **kwargs):
        if self.fail:
            raise FileNotFoundError(cmd[0])
        process = FakeProcess(cmd)
        process.kwargs = kwargs
        self.processes.append(process)
        return process

    @property
    def last(self) -> FakeProcess:
        return self.processes[-1]

    def launched_tracks(self) -> list[str]:
        return [Path(p.cmd[-1]).name for p in self.processes]


class RecordingChannel:
    """ControlChannel stand-in that records commands and answers queries from a script."""

    def __init__(self):
        self.sent: list[list] = []
        self.disconnects = 0
        self.queries = 0
        self.answers: tuple = (None, None)
        self.script: list[tuple] = []  # Consumed one per query before falling back to answers
        self.ready = True
        self.events: list[str] = []

    def send(self, command):
        self.sent.append(command)
        self.events.append(f"send:{command[0]}")
        return True

    def query_pair(self, name_a, name_b):
        self.queries += 1
        self.events.append("query_pair")
        if self.script:
            return self.script.pop(0)
        return self.answers

    def disconnect(self):
        self.disconnects += 1

    def wait_until_ready(self, timeout, interval=0.05, sleep=None, clock=None):
        self.events.append("wait_until_ready")
        return self.ready


@pytest.fixture
def songs_dir(tmp_path: Path) -> Path:
    """Songs directory holding a.mp3, b.mp3 and c.mp3."""
    directory = tmp_path / "songs"
    directory.mkdir()
    for name in ("a.mp3", "b.mp3", "c.mp3"):
        (directory / name).write_bytes(b"")
    return directory


@pytest.fixture
def playlists_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "playlists"
    directory.mkdir()
    return directory


@pytest.fixture
def catalog(songs_dir: Path, playlists_dir: Path) -> Catalog:
    return load_catalog(songs_dir, playlists_dir)


@pytest.fixture
def config(tmp_path: Path, songs_dir: Path, playlists_dir: Path) -> Config:
    return Config(
        music=MusicConfig(songs_dir=str(songs_dir), playlists_dir=str(playlists_dir)),
        player=PlayerConfig(socket_path=str(tmp_path / "engine.sock"), volume=80),
        session=SessionConfig(path=str(tmp_path / "session")),
    )


@pytest.fixture
def popen() -> FakePopen:
    return FakePopen()


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def ctx(config: Config, catalog: Catalog, popen: FakePopen, channel: RecordingChannel) -> AppContext:
    """Context over the three-track catalog with a fake engine and socket."""
    supervisor = EngineSupervisor(
        socket_path=config.player.socket_path, engine="mpv", popen=popen
    )
    return AppContext.create(
        config,
        catalog,
        supervisor=supervisor,
        channel=channel,
        rng=random.Random(1234),
        list_rows=10,
    )
