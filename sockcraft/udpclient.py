"""Chat client: one thread sends typed lines, another prints what arrives."""

from __future__ import annotations

import socket
import sys
from typing import Iterable, Sequence, TextIO

from sockcraft.errors import ExitCode
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger
from sockcraft.threadpool import Thread

BUFFER_SIZE = 1024


def send_loop(sock: socket.socket, server: InetAddr, lines: Iterable[str]) -> int:
    """Send each line (without its newline) to ``server``; return how many were sent."""
    target = server.sockaddr()
    count = 0
    for line in lines:
        sock.sendto(line.rstrip("\n").encode("utf-8"), target)
        count += 1
    return count


def recv_loop(sock: socket.socket, out: TextIO) -> int:
    """Print incoming datagrams until the socket fails or times out; return the count."""
    count = 0
    while True:
        try:
            data, _ = sock.recvfrom(BUFFER_SIZE)
        except OSError:
            return count
        if data:
            out.write(data.decode("utf-8", errors="replace") + "\n")
            out.flush()
            count += 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chat client: ``udpclient SERVER_IP PORT``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        logger.log(LogLevel.DEBUG, "usage: udpclient SERVER_IP PORT")
        return ExitCode.USE_ERROR
    try:
        server = InetAddr(args[0], int(args[1]))
    except ValueError:
        logger.log(LogLevel.DEBUG, "invalid server address")
        return ExitCode.USE_ERROR

    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        print("please enter", flush=True)
        sender = Thread(lambda: send_loop(sock, server, sys.stdin))
        receiver = Thread(lambda: recv_loop(sock, sys.stdout))
        receiver.detach()
        sender.start()
        receiver.start()
        sender.join()
        receiver.join()
    return ExitCode.OK