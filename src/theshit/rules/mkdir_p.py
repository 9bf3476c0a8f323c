"""Add ``-p`` to a ``mkdir`` whose parent directory does not exist."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from theshit.errors import RuleError

if TYPE_CHECKING:
    from theshit.domain.command import Command

_MKDIR = re.compile(r"\bmkdir\s+")


def is_match(command: Command) -> bool:
    parts = command.parts
    return (
        "mkdir" in parts
        and "-p" not in parts
        and "no such file or directory" in command.output.lower()
    )


def fix(command: Command) -> str:
    fixed, count = _MKDIR.subn("mkdir -p ", command.command, count=1)
    if count == 0:
        msg = f"no mkdir invocation found in '{command.command}'"
        raise RuleError(msg)
    return fixed
