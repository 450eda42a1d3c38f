"""A TCP server serving each client on its own thread; its command runs shell commands."""

from __future__ import annotations

import socket
import sys
import threading
from typing import Callable, Sequence

from sockcraft.command import CommandExecutor
from sockcraft.errors import ExitCode, NetworkError
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger

BUFFER_SIZE = 1024
BACKLOG = 8
POLL_INTERVAL = 0.2

Handler = Callable[[str, InetAddr], str]


class ThreadedTcpServer:
    """Answers each received message with ``handler(message, addr)``."""

    def __init__(self, port: int, handler: Handler) -> None:
        self.port = port
        self._handler = handler
        self._sock: socket.socket | None = None
        self._running = False

    @property
    def address(self) -> InetAddr:
        return InetAddr.from_sockaddr(self._listener().getsockname())

    def _listener(self) -> socket.socket:
        if self._sock is None:
            raise RuntimeError("server is not initialised")
        return self._sock

    def init(self) -> None:
        """Create, bind and listen; raise NetworkError on failure."""
        local = InetAddr.any(self.port)
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            logger.log(LogLevel.FATAL, "create fail")
            raise NetworkError(ExitCode.SOCK_ERROR, "create fail") from exc
        logger.log(LogLevel.DEBUG, "create success")
        try:
            sock.bind(local.sockaddr())
        except OSError as exc:
            sock.close()
            logger.log(LogLevel.DEBUG, "bind fail")
            raise NetworkError(ExitCode.BIND_ERROR, "bind fail") from exc
        logger.log(LogLevel.DEBUG, "bind success")
        try:
            sock.listen(BACKLOG)
        except OSError as exc:
            sock.close()
            logger.log(LogLevel.DEBUG, "listen fail")
            raise NetworkError(ExitCode.LISTEN_ERROR, "listen fail") from exc
        logger.log(LogLevel.DEBUG, "listen success")
        self._sock = sock

    def serve_client(self, conn: socket.socket, addr: InetAddr) -> None:
        """Read, answer and repeat until the client disconnects; closes ``conn``."""
        with conn:
            while True:
                try:
                    data = conn.recv(BUFFER_SIZE - 1)
                except OSError:
                    logger.log(LogLevel.DEBUG, "read fail")
                    return
                if not data:
                    logger.log(LogLevel.DEBUG, "disconnect")
                    return
                message = data.decode("utf-8", errors="replace")
                logger.log(LogLevel.DEBUG, "read success")
                print(message, flush=True)
                reply = self._handler(message, addr)
                try:
                    conn.sendall(reply.encode("utf-8"))
                except OSError:
                    logger.log(LogLevel.DEBUG, "write fail")
                    return

    def start(self) -> None:
        """Accept clients until ``stop`` is called, then close the listener."""
        listener = self._listener()
        listener.settimeout(POLL_INTERVAL)
        self._running = True
        try:
            while self._running:
                try:
                    conn, peer = listener.accept()
                except TimeoutError:
                    continue
                except OSError as exc:
                    logger.log(LogLevel.DEBUG, "accept fail")
                    raise NetworkError(ExitCode.ACCEPT_ERROR, "accept fail") from exc
                logger.log(LogLevel.DEBUG, "accept success")
                conn.settimeout(None)
                addr = InetAddr.from_sockaddr(peer)
                threading.Thread(
                    target=self.serve_client, args=(conn, addr), daemon=True
                ).start()
        finally:
            listener.close()
            self._sock = None

    def stop(self) -> None:
        self._running = False


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command server: ``tcpserver PORT``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        logger.log(LogLevel.ERROR, "cin error")
        return ExitCode.CIN_ERROR
    try:
        port = int(args[0])
        InetAddr.any(port)
    except ValueError:
        logger.log(LogLevel.ERROR, "invalid port: ", args[0])
        return ExitCode.CIN_ERROR

    executor = CommandExecutor()
    server = ThreadedTcpServer(port, lambda message, addr: executor.execute(message, addr))
    try:
        server.init()
        server.start()
    except NetworkError as exc:
        return exc.code
    except KeyboardInterrupt:
        server.stop()
    return ExitCode.OK