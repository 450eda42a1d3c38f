"""The calculator client command."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, Sequence, TextIO

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger
from sockcraft.protocol import Protocol
from sockcraft.tcpsocket import TcpSocket


def _read_tokens(stream: Iterable[str]) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _ask(tokens: Iterator[str], out: TextIO, prompt: str) -> str:
    out.write(prompt + "\n")
    out.flush()
    try:
        return next(tokens)
    except StopIteration:
        raise EOFError("input ended") from None


def prompt_request(inp: Iterator[str], out: TextIO) -> tuple[int, int, str]:
    """Prompt for x, y and the operator, reading whitespace-separated tokens from ``inp``.

    Raises EOFError when input runs out and ValueError for a non-integer operand.
    """
    x = int(_ask(inp, out, "enter x"))
    y = int(_ask(inp, out, "enter y"))
    oper = _ask(inp, out, "enter oper")[0]
    return x, y, oper


def main(argv: Sequence[str] | None = None) -> int:
    """Run the client: ``calcclient SERVER_IP PORT``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        logger.log(LogLevel.DEBUG, "enter error")
        return ExitCode.USE_ERROR
    try:
        server = InetAddr(args[0], int(args[1]))
    except ValueError:
        logger.log(LogLevel.DEBUG, "enter error")
        return ExitCode.USE_ERROR

    client = TcpSocket()
    try:
        client.create()
        client.connect(server.ip, server.port)
    except NetworkError as exc:
        client.close()
        logger.log(LogLevel.DEBUG, "connect error")
        return exc.code
    logger.log(LogLevel.DEBUG, "connect success")

    protocol = Protocol()
    tokens = _read_tokens(sys.stdin)
    with client:
        while True:
            try:
                x, y, oper = prompt_request(tokens, sys.stdout)
            except EOFError:
                break
            except ValueError:
                logger.log(LogLevel.DEBUG, "invalid operand")
                return ExitCode.USE_ERROR
            client.send(protocol.build_request(x, y, oper))
            response = protocol.get_response(client)
            if response is None:
                break
            print(response.result, flush=True)
    return ExitCode.OK