"""Helpers for the HTTP server: line splitting and reading served files."""

from __future__ import annotations

from pathlib import Path

CRLF = "\r\n"


def read_line(buffer: str, divider: str = CRLF) -> tuple[str | None, str]:
    """Split the first ``divider``-terminated line off ``buffer``.

    Returns ``(line, rest)``, or ``(None, buffer)`` if no divider is present.
    """
    line, sep, rest = buffer.partition(divider)
    if not sep:
        return None, buffer
    return line, rest


def read_target_file(filename: str | Path) -> str | None:
    """Return the file's text with its line breaks removed, or None if unreadable."""
    try:
        with open(filename, encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
    except OSError:
        return None
    return content.replace("\n", "")


def file_size(path: str | Path) -> int:
    """Return the size of the file in bytes, or -1 if it cannot be read."""
    try:
        return Path(path).stat().st_size if Path(path).is_file() else -1
    except OSError:
        return -1