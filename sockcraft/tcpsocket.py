"""A TCP socket wrapper with the create/bind/listen/accept steps as methods."""

from __future__ import annotations

import socket

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger

BUFFER_SIZE = 1024
BACKLOG = 16


class TcpSocket:
    """Wraps one stream socket: a listener or a connected endpoint."""

    def __init__(self, sock: socket.socket | None = None) -> None:
        self._sock = sock

    def _require(self) -> socket.socket:
        if self._sock is None:
            raise RuntimeError("socket is not created")
        return self._sock

    @property
    def sock(self) -> socket.socket:
        """The underlying socket object."""
        return self._require()

    @property
    def address(self) -> InetAddr:
        """The local address the socket is bound to."""
        return InetAddr.from_sockaddr(self._require().getsockname())

    def create(self) -> None:
        """Create the stream socket; raise NetworkError on failure."""
        try:
            self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "create error")
            raise NetworkError(ExitCode.SOCK_ERROR, "create error") from exc
        logger.log(LogLevel.DEBUG, "create success")

    def bind(self, port: int) -> None:
        """Bind to all interfaces on ``port``."""
        local = InetAddr.any(port)
        try:
            self._require().bind(local.sockaddr())
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "bind error")
            raise NetworkError(ExitCode.BIND_ERROR, "bind error") from exc
        logger.log(LogLevel.DEBUG, "bind success")

    def listen(self, backlog: int = BACKLOG) -> None:
        try:
            self._require().listen(backlog)
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "listen error")
            raise NetworkError(ExitCode.LISTEN_ERROR, "listen error") from exc
        logger.log(LogLevel.DEBUG, "listen success")

    def init_server(self, port: int, backlog: int = BACKLOG) -> None:
        """Create, bind and listen in one step."""
        self.create()
        try:
            self.bind(port)
            self.listen(backlog)
        except NetworkError:
            self.close()
            raise

    def accept(self) -> tuple[TcpSocket, InetAddr]:
        """Wait for a client; return the connected socket and the client's address.

        A timeout set on the listener surfaces as TimeoutError.
        """
        try:
            conn, peer = self._require().accept()
        except TimeoutError:
            raise
        except OSError as exc:
            logger.log(LogLevel.DEBUG, "accept error")
            raise NetworkError(ExitCode.ACCEPT_ERROR, "accept error") from exc
        conn.settimeout(None)
        return TcpSocket(conn), InetAddr.from_sockaddr(peer)

    def recv(self) -> str:
        """Read what is available; an empty string means the peer closed."""
        try:
            data = self._require().recv(BUFFER_SIZE - 1)
        except OSError as exc:
            raise NetworkError(ExitCode.RECV_ERROR, "recv error") from exc
        return data.decode("utf-8", errors="replace")

    def send(self, data: str) -> int:
        """Send all of ``data``; return the number of bytes sent."""
        payload = data.encode("utf-8")
        try:
            self._require().sendall(payload)
        except OSError as exc:
            raise NetworkError(ExitCode.SOCK_ERROR, "send error") from exc
        return len(payload)

    def connect(self, ip: str, port: int) -> None:
        server = InetAddr(ip, port)
        try:
            self._require().connect(server.sockaddr())
        except OSError as exc:
            raise NetworkError(ExitCode.CON_ERROR, "connect error") from exc

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> TcpSocket:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()