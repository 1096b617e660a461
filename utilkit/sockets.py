"""A small TCP socket wrapper for IPv4 servers and clients."""

from __future__ import annotations

import socket
from typing import Any

from utilkit.text import Text

_read_max_buffer = 1024


def set_read_max_buffer_size(size: int) -> None:
    """Set how many bytes a single :meth:`Socket.read` may return."""
    global _read_max_buffer
    if size < 1:
        raise ValueError("buffer size must be positive")
    _read_max_buffer = size


class Socket:
    """An IPv4 TCP socket with address reuse enabled.

    Without a host it binds to every interface.
    """

    def __init__(self, host: str | Text | None = None, port: int = 0) -> None:
        self.ip: str | None = str(host) if host is not None else None
        self.port = int(port)
        self._sock: socket.socket | None = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

    @classmethod
    def _from_connection(cls, conn: socket.socket, address: tuple[str, int]) -> Socket:
        sock = cls.__new__(cls)
        sock._sock = conn
        sock.ip, sock.port = address[0], address[1]
        return sock

    def __repr__(self) -> str:
        return f"Socket(ip={self.ip!r}, port={self.port})"

    def __enter__(self) -> Socket:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle(self) -> socket.socket:
        if self._sock is None:
            raise ValueError("socket is closed")
        return self._sock

    @property
    def _address(self) -> tuple[str, int]:
        return (self.ip or "0.0.0.0", self.port)

    def bind(self) -> Socket:
        """Bind to the socket's address and record the number the system assigned."""
        sock = self._handle()
        sock.bind(self._address)
        self.port = sock.getsockname()[1]
        return self

    def connect(self) -> Socket:
        """Connect to the socket's address."""
        self._handle().connect(self._address)
        return self

    def listen(self, backlog: int) -> Socket:
        """Start listening with room for ``backlog`` pending connections."""
        self._handle().listen(backlog)
        return self

    def accept(self) -> Socket:
        """Wait for a connection and return a socket for that client."""
        conn, address = self._handle().accept()
        return Socket._from_connection(conn, address)

    def set_timeout(self, seconds: float) -> None:
        """Make reads give up after ``seconds``."""
        self._handle().settimeout(seconds)

    def read(self) -> Text | None:
        """Read what is available, or None when the peer closed or the read failed."""
        sock = self._handle()
        try:
            data = sock.recv(_read_max_buffer)
        except OSError:
            return None
        if not data:
            return None
        return Text(data.decode("utf-8", errors="replace"))

    def write(self, data: str | Text | bytes) -> bool:
        """Send all of ``data``; return False if the peer has gone away."""
        payload = data if isinstance(data, bytes) else str(data).encode("utf-8")
        try:
            self._handle().sendall(payload)
        except (BrokenPipeError, ConnectionResetError):
            return False
        return True

    def client_address(self) -> tuple[str, int]:
        """Look up the peer's address, remember it on the socket and return it."""
        ip, port = self._handle().getpeername()[:2]
        self.ip, self.port = ip, port
        return ip, port

    def close(self) -> None:
        """Close the socket; closing twice is harmless."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None