"""
Supervisor for the playback engine subprocess.

At most one engine process exists at a time. Exits of any kind (normal end of
track, crash, signal, failed spawn) are reported the same way, once, through
poll_exit().
"""

import os
import subprocess
from enum import Enum
from typing import Callable, Optional

from loguru import logger

STOP_TIMEOUT = 2.0


class EngineStatus(Enum):
    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    EXITED = "exited"
    STOPPED = "stopped"


def check_engine_available(engine: str = "mpv") -> bool:
    """Check if the engine executable is available on the system."""
    try:
        result = subprocess.run(
            [engine, "--version"], capture_output=True, text=True, timeout=5
        )
        return result.returncode == 0
    except (subprocess.SubprocessError, FileNotFoundError, OSError):
        return False


def build_engine_command(
    engine: str, socket_path: str, track_path: str, volume: int
) -> list[str]:
    """Arguments for a headless engine run controlled through socket_path."""
    return [
        engine,
        "--no-video",
        "--no-terminal",
        f"--input-ipc-server={socket_path}",
        f"--volume={volume}",
        track_path,
    ]


class EngineSupervisor:
    """Owns the engine child process handle.

    Lifecycle: IDLE -> STARTING -> RUNNING -> (EXITED | STOPPED) -> IDLE.
    EXITED and STOPPED are transient: poll_exit() and stop() leave the
    supervisor IDLE again before returning.
    """

    def __init__(
        self,
        socket_path: str,
        engine: str = "mpv",
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
    ):
        self.socket_path = socket_path
        self.engine = engine
        self._popen = popen
        self._process: Optional[subprocess.Popen] = None
        self._spawn_failed = False
        self.status = EngineStatus.IDLE

    @property
    def running(self) -> bool:
        """True while a child is tracked (or a failed spawn awaits poll_exit)."""
        return self._process is not None or self._spawn_failed

    @property
    def pid(self) -> Optional[int]:
        return self._process.pid if self._process is not None else None

    def start(self, track_path: str, volume: int) -> None:
        """Stop any current engine, then launch a new one for track_path.

        A spawn failure is not raised; it is reported by the next poll_exit()
        as an immediate exit.
        """
        self.stop()

        self.status = EngineStatus.STARTING
        cmd = build_engine_command(self.engine, self.socket_path, track_path, volume)
        try:
            self._process = self._popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"Failed to start {self.engine}: {e}")
            self._process = None
            self._spawn_failed = True
            self.status = EngineStatus.RUNNING
            return

        self.status = EngineStatus.RUNNING
        logger.info(f"Started {self.engine} (pid={self._process.pid}): {track_path}")

    def stop(self) -> None:
        """Terminate the engine, wait for it and remove the stale socket file.

        Idempotent: safe to call when nothing is running.
        """
        self._spawn_failed = False
        process = self._process
        if process is not None:
            self.status = EngineStatus.STOPPED
            try:
                process.terminate()
                process.wait(timeout=STOP_TIMEOUT)
            except subprocess.TimeoutExpired:
                logger.warning(f"Engine pid={process.pid} ignored SIGTERM, killing")
                process.kill()
                process.wait()
            except OSError as e:
                logger.warning(f"Engine termination error: {e}")
            finally:
                self._process = None
            logger.info(f"Stopped engine pid={process.pid}")

        self._remove_socket()
        self.status = EngineStatus.IDLE

    def poll_exit(self) -> bool:
        """Non-blocking check whether the engine has exited.

        Returns:
            True exactly once per observed exit; the handle is cleared so the
            same exit is never reported twice.
        """
        if self._spawn_failed:
            self._spawn_failed = False
            self.status = EngineStatus.IDLE
            return True

        if self._process is None:
            return False

        returncode = self._process.poll()
        if returncode is None:
            return False

        logger.info(f"Engine pid={self._process.pid} exited with status {returncode}")
        self.status = EngineStatus.EXITED
        self._process = None
        self._remove_socket()
        self.status = EngineStatus.IDLE
        return True

    def _remove_socket(self) -> None:
        try:
            os.unlink(self.socket_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove socket {self.socket_path}: {e}")

