"""A word dictionary loaded from ``key:value`` lines."""

from __future__ import annotations

from pathlib import Path

from sockcraft.inetaddr import InetAddr
from sockcraft.log import LogLevel, logger

DEFAULT_PATH = "./dictionary.txt"
SEPARATOR = ":"
UNKNOWN = "unknown"


class Dictionary:
    """Maps words to translations read from a file."""

    def __init__(self, path: str | Path = DEFAULT_PATH) -> None:
        self.path = Path(path)
        self.entries: dict[str, str] = {}

    def load(self) -> bool:
        """Read the file; lines without a separator are skipped. False if unreadable."""
        try:
            handle = open(self.path, encoding="utf-8")
        except OSError:
            return False
        with handle:
            for raw in handle:
                line = raw.rstrip("\n")
                if not line:
                    continue
                word, sep, translation = line.partition(SEPARATOR)
                if not sep:
                    continue
                self.entries.setdefault(word, translation)
        return True

    def translate(self, word: str, client: InetAddr) -> str:
        """Return the translation of ``word``, or ``unknown``."""
        translation = self.entries.get(word)
        if translation is None:
            return UNKNOWN
        logger.log(LogLevel.DEBUG, "translating for ", client.port, ":", client.ip)
        return translation