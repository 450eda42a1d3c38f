"""Runs whitelisted shell commands on behalf of remote clients."""

from __future__ import annotations

import subprocess
from typing import Iterable

from sockcraft.inetaddr import InetAddr

DEFAULT_WHITELIST = ("ls", "pwd", "ll")
REJECTED = "huai ren"
NOT_RUNNABLE = "no command"


class CommandExecutor:
    """Executes only commands on its whitelist and returns their output."""

    def __init__(self, whitelist: Iterable[str] = DEFAULT_WHITELIST) -> None:
        self.whitelist = tuple(whitelist)

    def check(self, command: str) -> bool:
        return command in self.whitelist

    def execute(self, command: str, addr: InetAddr) -> str:
        """Run ``command`` through the shell; prefix the output with the client's IP."""
        if not self.check(command):
            return REJECTED
        try:
            result = subprocess.run(
                command, shell=True, capture_output=True, text=True, errors="replace"
            )
        except OSError:
            return NOT_RUNNABLE
        return str(addr) + result.stdout