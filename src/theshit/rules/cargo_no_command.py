"""Replace a mistyped cargo subcommand with cargo's own suggestion."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from theshit.errors import RuleError

if TYPE_CHECKING:
    from theshit.domain.command import Command

_BROKEN = re.compile(r"no such (?:sub)?command:? [`']([^`']+)[`']")
_SUGGESTION = re.compile(r"(?:Did you mean|a command with a similar name exists:) [`']([^`']+)[`']")


def is_match(command: Command) -> bool:
    parts = command.parts
    return bool(parts) and parts[0] == "cargo" and "no such command" in command.output


def fix(command: Command) -> str:
    broken = _BROKEN.search(command.output)
    suggestion = _SUGGESTION.search(command.output)
    if broken is None or suggestion is None:
        msg = "cargo did not suggest a replacement command"
        raise RuleError(msg)

    parts = command.parts
    try:
        index = parts.index(broken.group(1), 1)
    except ValueError as exc:
        msg = f"'{broken.group(1)}' does not appear in '{command.command}'"
        raise RuleError(msg) from exc
    parts[index] = suggestion.group(1)
    return " ".join(parts)
