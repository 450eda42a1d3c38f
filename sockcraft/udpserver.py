"""A UDP server that hands every datagram to a callback; its command runs a chat room."""

from __future__ import annotations

import socket
import sys
from typing import Callable, Sequence

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger
from sockcraft.route import Route
from sockcraft.threadpool import ThreadPool

BUFFER_SIZE = 1024
POLL_INTERVAL = 0.2

Handler = Callable[[socket.socket, str, InetAddr], object]


class UdpServer:
    """Binds to all interfaces on ``port`` and passes each message to ``handler``."""

    def __init__(self, port: int, handler: Handler) -> None:
        self.port = port
        self._handler = handler
        self._sock: socket.socket | None = None
        self._running = False

    @property
    def address(self) -> InetAddr:
        return InetAddr.from_sockaddr(self._socket().getsockname())

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise RuntimeError("server is not initialised")
        return self._sock

    def init(self) -> None:
        """Create and bind the socket; raise NetworkError on failure."""
        local = InetAddr.any(self.port)
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as exc:
            logger.log(LogLevel.FATAL, "socket error!")
            raise NetworkError(ExitCode.SOCK_ERROR, "socket error") from exc
        try:
            sock.bind(local.sockaddr())
        except OSError as exc:
            sock.close()
            logger.log(LogLevel.FATAL, "bind error")
            raise NetworkError(ExitCode.BIND_ERROR, "bind error") from exc
        self._sock = sock

    def serve_once(self) -> bool:
        """Receive one datagram and dispatch it; return False if it was empty."""
        sock = self._socket()
        data, peer = sock.recvfrom(BUFFER_SIZE - 1)
        if not data:
            return False
        client = InetAddr.from_sockaddr(peer)
        self._handler(sock, data.decode("utf-8", errors="replace"), client)
        return True

    def start(self) -> None:
        """Serve until ``stop`` is called, then close the socket."""
        sock = self._socket()
        sock.settimeout(POLL_INTERVAL)
        self._running = True
        try:
            while self._running:
                try:
                    self.serve_once()
                except TimeoutError:
                    continue
        finally:
            sock.close()
            self._sock = None

    def stop(self) -> None:
        self._running = False


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chat-room server: ``udpserver PORT``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        logger.log(LogLevel.ERROR, "usage: udpserver PORT")
        return ExitCode.USE_ERROR
    try:
        port = int(args[0])
        InetAddr.any(port)
    except ValueError:
        logger.log(LogLevel.ERROR, "invalid port: ", args[0])
        return ExitCode.USE_ERROR

    route = Route()
    pool = ThreadPool.instance()

    def handler(sock: socket.socket, message: str, client: InetAddr) -> None:
        pool.enqueue(lambda: route.message_route(sock, message, client))

    server = UdpServer(port, handler)
    try:
        server.init()
        server.start()
    except NetworkError as exc:
        return exc.code
    except KeyboardInterrupt:
        server.stop()
    return ExitCode.OK