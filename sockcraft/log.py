"""A small logger writing formatted lines to the console or to a file."""

from __future__ import annotations

import inspect
import os
import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from pathlib import Path

SEPARATOR = "\r\n"
DEFAULT_LOG_DIR = "./Log"
DEFAULT_LOG_FILE = "my.log"


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    ERROR = "ERROR"
    WARNING = "WARNING"
    FATAL = "FATAL"


def level_name(level: object) -> str:
    """Return the printable name of a level, or ``UNKNOWN``."""
    if isinstance(level, LogLevel):
        return level.value
    return "UNKNOWN"


def timestamp(now: datetime | None = None) -> str:
    """Format a moment as ``YYYY-MM-DD-hh-mm-ss`` (local time by default)."""
    now = now or datetime.now()
    return "%4d-%02d-%02d-%02d-%02d-%02d" % (
        now.year,
        now.month,
        now.day,
        now.hour,
        now.minute,
        now.second,
    )


class LogStrategy(ABC):
    """Where finished log lines go."""

    @abstractmethod
    def write(self, message: str) -> None:
        """Emit one finished log line."""


class ConsoleStrategy(LogStrategy):
    """Print log lines to standard output."""

    _lock = threading.Lock()

    def write(self, message: str) -> None:
        with self._lock:
            sys.stdout.write(message + SEPARATOR + "\n")
            sys.stdout.flush()


class FileStrategy(LogStrategy):
    """Append log lines to a file, creating its directory if needed."""

    def __init__(self, path: str = DEFAULT_LOG_DIR, filename: str = DEFAULT_LOG_FILE) -> None:
        self.path = Path(path)
        self.filename = filename
        self._lock = threading.Lock()
        with self._lock:
            if not self.path.exists():
                try:
                    self.path.mkdir(parents=True, exist_ok=True)
                except OSError as exc:
                    print(f"{exc}\n")

    @property
    def target(self) -> Path:
        return self.path / self.filename

    def write(self, message: str) -> None:
        with self._lock:
            try:
                with open(self.target, "a", encoding="utf-8", newline="") as out:
                    out.write(message + SEPARATOR)
            except OSError:
                return


class Logger:
    """Builds ``[time][LEVEL][source][pid][line]text`` lines and hands them to a strategy."""

    def __init__(self, strategy: LogStrategy | None = None) -> None:
        self.strategy: LogStrategy = strategy if strategy is not None else ConsoleStrategy()

    def enable_console(self) -> None:
        self.strategy = ConsoleStrategy()

    def enable_file(self, path: str = DEFAULT_LOG_DIR, filename: str = DEFAULT_LOG_FILE) -> None:
        self.strategy = FileStrategy(path, filename)

    def format(self, level: LogLevel, source: str, line: int, *args: object) -> str:
        header = (
            f"[{timestamp()}][{level_name(level)}][{source}]"
            f"[{os.getpid()}][{line}]"
        )
        return header + "".join(str(arg) for arg in args)

    def log(self, level: LogLevel, *args: object) -> str:
        """Log the arguments, tagged with the caller's file and line; return the line."""
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is not None:
            source, line = caller.f_code.co_filename, caller.f_lineno
        else:
            source, line = "<unknown>", 0
        del frame, caller
        message = self.format(level, source, line, *args)
        self.strategy.write(message)
        return message


logger = Logger()