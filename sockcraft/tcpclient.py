"""Interactive TCP client: sends each typed line and prints the reply."""

from __future__ import annotations

import socket
import sys
from typing import Iterable, Sequence, TextIO

from sockcraft.errors import ExitCode
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger

BUFFER_SIZE = 1024
PROMPT = "please enter"


def interact(sock: socket.socket, lines: Iterable[str], out: TextIO) -> int:
    """Prompt, send a line, print the reply; stop when input or the connection ends.

    Returns the number of replies printed.
    """
    replies = 0
    source = iter(lines)
    while True:
        out.write(PROMPT + "\n")
        out.flush()
        line = next(source, None)
        if line is None:
            return replies
        try:
            sock.sendall(line.rstrip("\n").encode("utf-8"))
            data = sock.recv(BUFFER_SIZE - 1)
        except OSError:
            return replies
        if not data:
            return replies
        out.write(data.decode("utf-8", errors="replace") + "\n")
        out.flush()
        replies += 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the client: ``tcpclient SERVER_IP PORT``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        logger.log(LogLevel.ERROR, "use error")
        return ExitCode.USE_ERROR
    try:
        peer = InetAddr(args[0], int(args[1]))
    except ValueError:
        logger.log(LogLevel.ERROR, "use error")
        return ExitCode.USE_ERROR

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError:
        logger.log(LogLevel.ERROR, "socket error")
        return ExitCode.SOCK_ERROR
    with sock:
        try:
            sock.connect(peer.sockaddr())
        except OSError:
            logger.log(LogLevel.WARNING, "connect error")
            return ExitCode.CON_ERROR
        logger.log(LogLevel.DEBUG, "connect success")
        interact(sock, sys.stdin, sys.stdout)
    return ExitCode.OK