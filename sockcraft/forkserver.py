"""A TCP server that hands each connection to a detached grandchild process."""

from __future__ import annotations

import os
from typing import Callable

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger
from sockcraft.tcpsocket import TcpSocket

POLL_INTERVAL = 0.2

Handler = Callable[[TcpSocket, InetAddr], object]


class ForkingTcpServer:
    """Listens on ``port`` from construction; each client runs in its own process (POSIX)."""

    def __init__(self, port: int) -> None:
        self.port = port
        self._listener = TcpSocket()
        self._listener.init_server(port)
        self._running = False

    @property
    def address(self) -> InetAddr:
        return self._listener.address

    def serve_forever(self, handler: Handler) -> None:
        """Accept clients until ``stop`` is called.

        The handler runs in a grandchild, so the server never waits on it and
        no zombie is left; an integer it returns becomes the exit status.
        """
        self._listener.sock.settimeout(POLL_INTERVAL)
        self._running = True
        while self._running:
            try:
                conn, addr = self._listener.accept()
            except TimeoutError:
                continue
            self._dispatch(conn, addr, handler)

    def _dispatch(self, conn: TcpSocket, addr: InetAddr, handler: Handler) -> None:
        try:
            pid = os.fork()
        except OSError:
            logger.log(LogLevel.DEBUG, "fork error")
            conn.close()
            return
        if pid == 0:
            status = int(ExitCode.OK)
            try:
                self._listener.close()
                if os.fork() > 0:
                    os._exit(ExitCode.OK)
                result = handler(conn, addr)
                if isinstance(result, int):
                    status = int(result)
            except NetworkError as exc:
                status = int(exc.code)
            except BaseException:
                status = int(ExitCode.FORK_ERROR)
            finally:
                conn.close()
                os._exit(status)
        conn.close()
        os.waitpid(pid, 0)

    def stop(self) -> None:
        self._running = False

    def close(self) -> None:
        self._listener.close()

    def __enter__(self) -> ForkingTcpServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
        self.close()