"""A minimal static-file HTTP/1.0 server built on the forking TCP server."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Sequence

from sockcraft.errors import ExitCode, NetworkError
from sockcraft.forkserver import ForkingTcpServer
from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger
from sockcraft.tcpsocket import TcpSocket
from sockcraft.tools import CRLF, read_line, read_target_file

DEFAULT_ROOT = "./myhtml"
INDEX_PAGE = "text.html"
PAGE_404 = "error.html"
FAVICON = "/favicon.ico"
HTTP_VERSION = "HTTP/1.0"
HEADER_SEPARATOR = ": "
HTML_TYPE = "text/html"
JPEG_TYPE = "image/jpeg"
REASONS = {200: "OK", 302: "Found", 404: "Not Found"}


@dataclass
class HttpRequest:
    """The request line of an HTTP request, with the URI mapped under ``root``."""

    root: str = DEFAULT_ROOT
    method: str = ""
    uri: str = ""
    version: str = ""

    def parse_request_line(self, line: str) -> None:
        """Take method, URI and version from whitespace-separated fields."""
        fields = line.split() + ["", "", ""]
        self.method, self.uri, self.version = fields[:3]

    def deserialize(self, text: str) -> bool:
        """Parse a request; return False for a favicon request, which is not served."""
        line, _ = read_line(text, CRLF)
        if line is None:
            return True
        self.parse_request_line(line)
        if self.uri == FAVICON:
            return False
        logger.log(LogLevel.DEBUG, "method : ", self.method)
        logger.log(LogLevel.DEBUG, "uri : ", self.uri)
        logger.log(LogLevel.DEBUG, "version : ", self.version)
        if self.uri == "/":
            self.uri = self.root + "/" + INDEX_PAGE
        else:
            self.uri = self.root + self.uri
        return True


@dataclass
class HttpResponse:
    """A response built from a file under ``root``; missing files give the 404 page."""

    root: str = DEFAULT_ROOT
    version: str = HTTP_VERSION
    code: int = 0
    reason: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    text: str = ""
    target: str = ""

    def set_target_file(self, uri: str) -> None:
        self.target = uri

    def set_code(self, code: int) -> None:
        self.code = code
        self.reason = REASONS.get(code, "")

    def set_header(self, key: str, value: str) -> None:
        self.headers[key] = value

    def uri_to_suffix(self, target: str) -> str:
        """The content type for a path; no extension means HTML, unknown ones give ''."""
        suffix = PurePosixPath(target).suffix
        if suffix in ("", ".html"):
            return HTML_TYPE
        if suffix == ".jpg":
            return JPEG_TYPE
        return ""

    def make_response(self) -> None:
        """Load the target file (or the 404 page) and set status and headers."""
        if self.target == self.root + FAVICON:
            return
        logger.log(LogLevel.DEBUG, self.target)
        text = read_target_file(self.target)
        if text is None:
            self.set_code(404)
            logger.log(LogLevel.DEBUG, "requested file not found")
            self.target = self.root + "/" + PAGE_404
            text = read_target_file(self.target) or ""
        else:
            self.set_code(200)
        self.text = text
        content_type = self.uri_to_suffix(self.target)
        if content_type:
            self.set_header("Content-Type", content_type)
        self.set_header("Content-Length", str(len(text.encode("utf-8"))))

    def serialize(self) -> str:
        status = f"{self.version} {self.code} {self.reason}{CRLF}"
        header_lines = "".join(
            f"{key}{HEADER_SEPARATOR}{value}{CRLF}" for key, value in self.headers.items()
        )
        return status + header_lines + CRLF + self.text


class HttpServer:
    """Serves files under ``root`` (default ``./myhtml``), one request per connection."""

    def __init__(self, port: int) -> None:
        self.port = port
        self.root = DEFAULT_ROOT
        self._server = ForkingTcpServer(port)

    @property
    def address(self) -> InetAddr:
        return self._server.address

    def handle(self, sock: TcpSocket, addr: InetAddr) -> None:
        """Read one request from ``sock`` and send back the response."""
        data = sock.recv()
        if not data:
            return
        request = HttpRequest(root=self.root)
        if not request.deserialize(data):
            return
        response = HttpResponse(root=self.root)
        response.set_target_file(request.uri)
        response.make_response()
        payload = response.serialize()
        logger.log(LogLevel.DEBUG, "response to ", addr.ip, ":", addr.port, " ", response.code)
        sock.send(payload)

    def start(self) -> None:
        self._server.serve_forever(self.handle)

    def stop(self) -> None:
        self._server.stop()

    def close(self) -> None:
        self._server.close()

    def __enter__(self) -> HttpServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
        self.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the HTTP server: ``httpserver PORT``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        logger.log(LogLevel.DEBUG, "user error")
        return ExitCode.USE_ERROR
    try:
        port = int(args[0])
        InetAddr.any(port)
    except ValueError:
        logger.log(LogLevel.DEBUG, "invalid port: ", args[0])
        return ExitCode.USE_ERROR
    try:
        server = HttpServer(port)
    except NetworkError as exc:
        return exc.code
    with server:
        try:
            server.start()
        except NetworkError as exc:
            return exc.code
        except KeyboardInterrupt:
            pass
    return ExitCode.OK