"""Exit codes and the exception raised for network failures."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes used by the servers and clients."""

    OK = 0
    SOCK_ERROR = 1
    BIND_ERROR = 2
    LISTEN_ERROR = 3
    ACCEPT_ERROR = 4
    FORK_ERROR = 5
    CIN_ERROR = 6
    USE_ERROR = 7
    CON_ERROR = 8
    RECV_ERROR = 9
    QUIT = 10


class NetworkError(Exception):
    """A socket operation failed; ``code`` says which step."""

    def __init__(self, code: ExitCode | int, message: str) -> None:
        self.code = ExitCode(code)
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message