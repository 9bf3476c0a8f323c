"""Prefix the command with ``sudo`` when it failed for lack of privileges."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from theshit.domain.command import Command

PATTERNS = (
    "permission denied",
    "eacces",
    "operation not permitted",
    "are you root?",
    "must be root",
    "must be run as root",
    "must run as root",
    "must be superuser",
    "need to be root",
    "only root can",
    "root privilege",
    "requires root",
    "requires superuser privilege",
    "insufficient privileges",
    "you don't have write permissions",
    "use `sudo`",
)


def is_match(command: Command) -> bool:
    parts = command.parts
    if not parts or parts[0] == "sudo":
        return False
    output = command.output.lower()
    return any(pattern in output for pattern in PATTERNS)


def fix(command: Command) -> str:
    if "&&" in command.command or "||" in command.command:
        escaped = command.command.replace('"', '\\"')
        return f'sudo sh -c "{escaped}"'
    return f"sudo {command.command}"
