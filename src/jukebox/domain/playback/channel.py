"""
Control channel to the playback engine's IPC socket.

One persistent connection, opened lazily and dropped on any failure. Nothing
here retries: the next call simply reconnects.
"""

import itertools
import select
import socket
import time
from typing import Any, Callable, Optional

from loguru import logger

from .protocol import decode_lines, encode, extract_number, get_property

RECV_SIZE = 4096


class ControlChannelError(Exception):
    """Base error for control channel failures."""


class ConnectFailed(ControlChannelError):
    """The control socket is missing or refused the connection."""


class WriteFailed(ControlChannelError):
    """Writing to the control socket failed; the channel is now disconnected."""


def connect_unix(path: str) -> socket.socket:
    """Open a stream connection to a Unix socket path."""
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.connect(path)
    except OSError:
        sock.close()
        raise
    return sock


class ControlChannel:
    """Reconnectable connection to the engine's control socket.

    Request ids come from a per-channel counter starting at 1, so a late reply
    to an abandoned query can never be mistaken for the answer to a newer one.
    """

    def __init__(
        self,
        socket_path: str,
        poll_interval: float = 0.05,
        poll_attempts: int = 20,
        connector: Callable[[str], socket.socket] = connect_unix,
    ):
        self.socket_path = socket_path
        self.poll_interval = poll_interval
        self.poll_attempts = poll_attempts
        self._connector = connector
        self._sock: Optional[socket.socket] = None
        self._request_ids = itertools.count(1)

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> None:
        """Connect if not already connected.

        Raises:
            ConnectFailed: If the socket cannot be reached
        """
        if self._sock is not None:
            return
        try:
            self._sock = self._connector(self.socket_path)
        except OSError as e:
            raise ConnectFailed(f"Cannot connect to {self.socket_path}: {e}") from e
        logger.debug(f"Connected to control socket {self.socket_path}")

    def disconnect(self) -> None:
        if self._sock is None:
            return
        try:
            self._sock.close()
        except OSError:
            pass
        finally:
            self._sock = None

    def _write(self, data: bytes) -> None:
        try:
            self._sock.sendall(data)
        except OSError as e:
            self.disconnect()
            raise WriteFailed(f"Write to {self.socket_path} failed: {e}") from e

    def _readable(self, timeout: float) -> bool:
        ready, _, _ = select.select([self._sock], [], [], timeout)
        return bool(ready)

    def send(self, command: list[Any]) -> bool:
        """Fire-and-forget a command.

        Returns:
            False if the command was dropped (no connection or write failure)
        """
        try:
            self.connect()
            self._write(encode(command))
        except ControlChannelError as e:
            logger.debug(f"Dropped command {command}: {e}")
            return False
        return True

    def query_pair(
        self, name_a: str, name_b: str
    ) -> tuple[Optional[float], Optional[float]]:
        """Query two numeric properties in one round trip.

        Both requests go out in a single write. Replies are collected through a
        reassembly buffer for at most poll_attempts waits of poll_interval
        seconds each, and matched by request id regardless of order. A reply
        still missing when the attempts run out drops the connection, so the
        next call starts on a fresh one.

        Returns:
            Tuple of values; None for any value not resolved in time
        """
        try:
            self.connect()
        except ConnectFailed as e:
            logger.debug(str(e))
            return None, None

        id_a = next(self._request_ids)
        id_b = next(self._request_ids)
        batch = encode(get_property(name_a), id_a) + encode(get_property(name_b), id_b)
        try:
            self._write(batch)
        except WriteFailed as e:
            logger.debug(str(e))
            return None, None

        values: dict[int, Optional[float]] = {}
        buffer = b""
        for _ in range(self.poll_attempts):
            if id_a in values and id_b in values:
                break
            try:
                if not self._readable(self.poll_interval):
                    continue
                chunk = self._sock.recv(RECV_SIZE)
            except OSError as e:
                logger.debug(f"Read from {self.socket_path} failed: {e}")
                self.disconnect()
                break
            if not chunk:
                logger.debug("Control socket closed by engine")
                self.disconnect()
                break

            records, buffer = decode_lines(buffer + chunk)
            for record in records:
                request_id = record.get("request_id")
                if request_id in (id_a, id_b) and request_id not in values:
                    values[request_id] = extract_number(record)

        if self._sock is not None and not (id_a in values and id_b in values):
            logger.debug(f"No reply from {self.socket_path} in time - disconnecting")
            self.disconnect()

        return values.get(id_a), values.get(id_b)

    def wait_until_ready(
        self,
        timeout: float,
        interval: float = 0.05,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> bool:
        """Retry connect until it succeeds or timeout seconds have passed."""
        deadline = clock() + timeout
        while True:
            try:
                self.connect()
                return True
            except ConnectFailed:
                if clock() >= deadline:
                    logger.warning(
                        f"Control socket not ready after {timeout}s: {self.socket_path}"
                    )
                    return False
                sleep(interval)
