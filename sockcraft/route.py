"""Chat-room routing: every message goes to every known peer."""

from __future__ import annotations

import threading
from typing import Protocol

from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger

QUIT_MESSAGE = "QUIT"


class _DatagramSender(Protocol):
    def sendto(self, data: bytes, address: tuple[str, int]) -> int: ...


class Route:
    """Keeps the set of peers that have spoken and relays messages to all of them."""

    def __init__(self) -> None:
        self._users: list[InetAddr] = []
        self._lock = threading.Lock()

    def users(self) -> list[InetAddr]:
        """The peers currently in the room, in the order they joined."""
        with self._lock:
            return list(self._users)

    def _add_user(self, peer: InetAddr) -> None:
        logger.log(LogLevel.DEBUG, "new user ", peer.ip, ":", peer.port)
        self._users.append(peer)

    def _remove_user(self, peer: InetAddr) -> None:
        if peer in self._users:
            logger.log(LogLevel.DEBUG, "user left ", peer.ip, ":", peer.port)
            self._users.remove(peer)

    def message_route(self, sock: _DatagramSender, message: str, peer: InetAddr) -> None:
        """Register ``peer`` if new, send ``message`` to everyone, drop ``peer`` on QUIT."""
        data = message.encode("utf-8")
        with self._lock:
            if peer not in self._users:
                self._add_user(peer)
            for user in self._users:
                try:
                    sock.sendto(data, user.sockaddr())
                except OSError as exc:
                    logger.log(LogLevel.WARNING, "send to ", user.ip, " failed: ", exc)
            if message == QUIT_MESSAGE:
                self._remove_user(peer)