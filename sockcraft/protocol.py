"""Calculator requests and responses as JSON, framed as ``LEN\\r\\nBODY\\r\\n``."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable

from sockcraft.errors import ExitCode
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger
from sockcraft.tcpsocket import TcpSocket

SEPARATOR = "\r\n"


def _dump(fields: dict) -> str:
    return json.dumps(fields, sort_keys=True, separators=(",", ":")) + "\n"


def _load(text: str) -> dict:
    try:
        root = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"malformed message: {text!r}") from exc
    if not isinstance(root, dict):
        raise ValueError(f"message is not an object: {text!r}")
    return root


@dataclass(frozen=True)
class Request:
    """An arithmetic request: ``x oper y``."""

    x: int = 0
    y: int = 0
    oper: str = "\0"

    def __post_init__(self) -> None:
        if len(self.oper) != 1:
            raise ValueError("operator must be a single character")

    def serialize(self) -> str:
        """JSON text with the operator as its character code."""
        return _dump({"x": self.x, "y": self.y, "oper": ord(self.oper)})

    @classmethod
    def deserialize(cls, text: str) -> Request:
        root = _load(text)
        return cls(int(root.get("x", 0)), int(root.get("y", 0)), chr(int(root.get("oper", 0))))


@dataclass(frozen=True)
class Response:
    """A result and an error code (0 means success)."""

    result: int = 0
    code: int = 0

    def serialize(self) -> str:
        return _dump({"result": self.result, "code": self.code})

    @classmethod
    def deserialize(cls, text: str) -> Response:
        root = _load(text)
        return cls(int(root.get("result", 0)), int(root.get("code", 0)))


def encode(payload: str) -> str:
    """Prefix ``payload`` with its length and terminate both with CRLF."""
    return f"{len(payload)}{SEPARATOR}{payload}{SEPARATOR}"


def decode(buffer: str) -> tuple[str | None, str]:
    """Take one complete package off the front of ``buffer``.

    Returns ``(package, rest)``, or ``(None, buffer)`` when no complete
    package is there yet. A non-numeric length raises ValueError.
    """
    pos = buffer.find(SEPARATOR)
    if pos == -1:
        return None, buffer
    header = buffer[:pos]
    length = int(header)
    total = len(header) + length + 2 * len(SEPARATOR)
    if len(buffer) < total:
        return None, buffer
    start = pos + len(SEPARATOR)
    return buffer[start : start + length], buffer[total:]


class Protocol:
    """Frames requests and responses over a TcpSocket."""

    def __init__(self, handler: Callable[[Request], Response] | None = None) -> None:
        self._handler = handler
        self._pending = ""

    def build_request(self, x: int, y: int, oper: str) -> str:
        """The framed wire text for one request."""
        return encode(Request(x, y, oper).serialize())

    def handle_requests(self, sock: TcpSocket, addr: InetAddr) -> ExitCode:
        """Answer requests until the peer disconnects; return ExitCode.QUIT then."""
        if self._handler is None:
            raise RuntimeError("no request handler")
        pending = ""
        while True:
            data = sock.recv()
            if not data:
                logger.log(LogLevel.DEBUG, "quit ", addr.ip, ":", addr.port)
                return ExitCode.QUIT
            pending += data
            while True:
                package, pending = decode(pending)
                if package is None:
                    break
                try:
                    request = Request.deserialize(package)
                except ValueError:
                    logger.log(LogLevel.WARNING, "bad request: ", package)
                    continue
                response = self._handler(request)
                sock.send(encode(response.serialize()))

    def get_response(self, sock: TcpSocket) -> Response | None:
        """Read until one full response arrives; None if the peer closed first."""
        while True:
            package, self._pending = decode(self._pending)
            if package is not None:
                logger.log(LogLevel.DEBUG, package)
                return Response.deserialize(package)
            data = sock.recv()
            if not data:
                logger.log(LogLevel.DEBUG, "quit")
                return None
            self._pending += data