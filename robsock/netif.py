"""UDP port used to talk to the simulator."""

from __future__ import annotations

import re
import socket

__all__ = ["NetworkError", "Port", "parse_host", "DEFAULT_PORT"]

DEFAULT_PORT = 6000
_MAX_HOST_LEN = 255
_HOST_PORT = re.compile(r"([^:]{1,2047}):\s*([+-]?\d+)")

Address = tuple[str, int]


class NetworkError(OSError):
    """Raised when the port cannot be opened, or sending or receiving fails."""


def parse_host(remote_host: str, default_port: int) -> tuple[str, int]:
    """Split ``host:port``; without a port part the default port is used."""
    match = _HOST_PORT.match(remote_host)
    if match:
        return match.group(1)[:_MAX_HOST_LEN], int(match.group(2))
    return remote_host[:_MAX_HOST_LEN], default_port


class Port:
    """A UDP socket bound locally, with a remote address to send to."""

    def __init__(self, port: int = DEFAULT_PORT, remote_host: str = "", local_port: int = 0) -> None:
        self.host, self.port = parse_host(remote_host, port)
        self.local_port = local_port
        self.remote: Address | None = None
        self.last_sender: Address | None = None
        self._sock: socket.socket | None = None

    def open(self, blocking: bool = True) -> "Port":
        """Create and bind the socket and resolve the remote host, if any."""
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            raise NetworkError(f"cannot open socket: {exc}") from exc
        try:
            sock.bind(("", self.local_port))
            if self.host:
                try:
                    address = socket.gethostbyname(self.host)
                except OSError as exc:
                    raise NetworkError(f"cannot resolve host {self.host!r}: {exc}") from exc
                self.host = address
                self.remote = (address, self.port)
            if not blocking:
                sock.setblocking(False)
        except NetworkError:
            sock.close()
            raise
        except OSError as exc:
            sock.close()
            raise NetworkError(f"cannot bind local port {self.local_port}: {exc}") from exc
        self._sock = sock
        return self

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise NetworkError("port is not open")
        return self._sock

    def set_receive_timeout(self, seconds: float) -> None:
        """Limit how long a receive waits for a datagram."""
        try:
            self._socket().settimeout(seconds)
        except OSError as exc:
            raise NetworkError(f"cannot set receive timeout: {exc}") from exc

    def send(self, data: bytes) -> None:
        """Send one datagram to the remote address."""
        sock = self._socket()
        if self.remote is None:
            raise NetworkError("no remote address to send to")
        try:
            sent = sock.sendto(data, self.remote)
        except OSError as exc:
            raise NetworkError(f"send failed: {exc}") from exc
        if sent != len(data):
            raise NetworkError(f"sent {sent} of {len(data)} bytes")

    def receive(self, bufsize: int = 4096) -> bytes:
        """Receive one datagram and remember who sent it."""
        sock = self._socket()
        try:
            data, sender = sock.recvfrom(bufsize)
        except OSError as exc:
            raise NetworkError(f"receive failed: {exc}") from exc
        self.last_sender = sender
        return data

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "Port":
        if self._sock is None:
            self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()