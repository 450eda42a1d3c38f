"""The calculator server command."""

from __future__ import annotations

import sys
from typing import Callable, Sequence

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.forkserver import ForkingTcpServer
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger
from sockcraft.netcal import Calculator
from sockcraft.protocol import Protocol
from sockcraft.tcpsocket import TcpSocket


def make_handler(calculator: Calculator) -> Callable[[TcpSocket, InetAddr], ExitCode]:
    """A connection handler answering framed requests with ``calculator``."""
    protocol = Protocol(calculator.solve)

    def handler(sock: TcpSocket, addr: InetAddr) -> ExitCode:
        return protocol.handle_requests(sock, addr)

    return handler


def main(argv: Sequence[str] | None = None) -> int:
    """Run the calculator server: ``calcserver PORT``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        logger.log(LogLevel.DEBUG, "cin error")
        return ExitCode.CIN_ERROR
    try:
        port = int(args[0])
        InetAddr.any(port)
    except ValueError:
        logger.log(LogLevel.DEBUG, "invalid port: ", args[0])
        return ExitCode.CIN_ERROR

    try:
        server = ForkingTcpServer(port)
    except NetworkError as exc:
        return exc.code
    with server:
        try:
            server.serve_forever(make_handler(Calculator()))
        except NetworkError as exc:
            return exc.code
        except KeyboardInterrupt:
            pass
    return ExitCode.OK