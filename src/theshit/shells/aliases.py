"""Alias dump parsing helpers and leading-alias expansion."""

from __future__ import annotations

import logging
import os
import re

logger = logging.getLogger(__name__)

ALIASES_ENV_VAR = "SH_SHELL_ALIASES"

_LEADING_TOKEN = re.compile(r"(\S+)(.*)", re.DOTALL)


def raw_aliases_from_env() -> str:
    """Return the alias dump exported by the shell function, or ``""``."""
    return os.environ.get(ALIASES_ENV_VAR, "")


def strip_quotes(value: str) -> str:
    """Remove one matching pair of enclosing single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_assignments(raw: str, *, prefix: str = "") -> dict[str, str]:
    """Parse ``name=value`` lines (optionally preceded by *prefix*).

    Lines without ``=`` are ignored. Later definitions win.
    """
    aliases: dict[str, str] = {}
    for line in raw.splitlines():
        line = line.strip()
        if prefix and line.startswith(prefix):
            line = line[len(prefix) :].lstrip()
        if "=" not in line:
            continue
        name, value = line.split("=", 1)
        name = name.strip()
        if not name:
            continue
        aliases[name] = strip_quotes(value)
    return aliases


def expand_aliases(command: str, aliases: dict[str, str]) -> str:
    """Replace the leading token of *command* when it names an alias.

    Only the first token is considered and it is substituted once.
    """
    stripped = command.strip()
    match = _LEADING_TOKEN.match(stripped)
    if match is None:
        return stripped
    token, rest = match.groups()
    expansion = aliases.get(token)
    if expansion is None:
        return stripped
    logger.debug("Expanded alias %s -> %s", token, expansion)
    return f"{expansion}{rest}"
