"""Drop a leading ``sudo`` from programs that refuse to run as root."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from theshit.domain.command import Command

PATTERNS = (
    "you cannot perform this operation as root",
    "should not be run as root",
    "do not run as root",
    "don't run this as root",
    "running as root is not",
    "cannot be run as root",
)


def is_match(command: Command) -> bool:
    parts = command.parts
    if len(parts) < 2 or parts[0] != "sudo":
        return False
    output = command.output.lower()
    return any(pattern in output for pattern in PATTERNS)


def fix(command: Command) -> str:
    return command.command.strip()[len("sudo") :].lstrip()
