"""Turn ``cd`` typos and bare directory names into ``cd`` calls.

Handled forms:

- ``cd..`` / ``cd~`` / ``cd/tmp``: the argument glued to ``cd``;
- ``cs /some/dir`` / ``dc ..``: a one-keystroke typo of ``cd`` that the shell
  could not run;
- ``./src`` reported as "Is a directory".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from theshit.domain.command import Command

_GLUED_PREFIXES = (".", "/", "~", "-")
_NOT_FOUND_HINTS = ("command not found", "not found", "unknown command")


def _glued_target(command: Command) -> str | None:
    """Return the argument of ``cd..``/``cd~``/``cd/tmp``, if that is the command."""
    parts = command.parts
    if len(parts) != 1:
        return None
    head = parts[0]
    if len(head) > 2 and head.startswith("cd") and head[2] in _GLUED_PREFIXES:
        return head[2:]
    return None


def _is_cd_typo(token: str) -> bool:
    """Two letters, one substitution or the transposition away from ``cd``."""
    if len(token) != 2 or token == "cd":
        return False
    return token == "dc" or token[0] == "c" or token[1] == "d"


def _typo_target(command: Command) -> str | None:
    """Return the argument of ``cs /some/dir`` when the shell could not run it."""
    parts = command.parts
    if len(parts) != 2 or not _is_cd_typo(parts[0]):
        return None
    output = command.output.strip().lower()
    if output and not any(hint in output for hint in _NOT_FOUND_HINTS):
        return None
    return parts[1]


def is_match(command: Command) -> bool:
    if _glued_target(command) is not None or _typo_target(command) is not None:
        return True
    return len(command.parts) == 1 and "is a directory" in command.output.lower()


def fix(command: Command) -> str:
    target = _glued_target(command) or _typo_target(command)
    if target is None:
        target = command.parts[0]
    return f"cd {target}"
