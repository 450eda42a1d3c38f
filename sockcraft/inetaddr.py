"""IPv4 endpoint value used by the servers and clients."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass

ANY_ADDRESS = "0.0.0.0"


@dataclass(frozen=True)
class InetAddr:
    """An IPv4 address and port; equal when both match."""

    ip: str
    port: int

    def __post_init__(self) -> None:
        if not 0 <= int(self.port) <= 0xFFFF:
            raise ValueError(f"port out of range: {self.port}")
        ipaddress.IPv4Address(self.ip)
        object.__setattr__(self, "port", int(self.port))

    @classmethod
    def from_sockaddr(cls, sockaddr: tuple) -> InetAddr:
        """Build from the ``(host, port)`` pair the socket module returns."""
        host, port = sockaddr[0], sockaddr[1]
        return cls(host, port)

    @classmethod
    def any(cls, port: int) -> InetAddr:
        """The wildcard address on the given port, as used for binding."""
        return cls(ANY_ADDRESS, port)

    def sockaddr(self) -> tuple[str, int]:
        return (self.ip, self.port)

    def __str__(self) -> str:
        return self.ip