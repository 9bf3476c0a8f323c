"""Closed enumerations: supported shells and compiled-in rule names."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from theshit.errors import ConfigurationError


class ShellKind(StrEnum):
    """Interactive shells theshit knows how to hook into."""

    BASH = "bash"
    ZSH = "zsh"
    FISH = "fish"

    @classmethod
    def parse(cls, value: str | None) -> ShellKind | None:
        """Return the shell named exactly *value*, or None."""
        if not value:
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


class NativeRuleName(StrEnum):
    """Rules compiled into theshit, in default evaluation order."""

    SUDO = "sudo"
    TO_CD = "to_cd"
    UNSUDO = "unsudo"
    MKDIR_P = "mkdir_p"
    CARGO_NO_COMMAND = "cargo_no_command"


def parse_rule_names(names: Iterable[str] | str) -> list[NativeRuleName]:
    """Validate configured rule names.

    Accepts either an iterable of names or a single comma-separated string.
    Raises :class:`ConfigurationError` on the first unknown name.
    """
    if isinstance(names, str):
        names = [part for part in names.split(",")]
    parsed: list[NativeRuleName] = []
    for raw in names:
        name = raw.strip()
        if not name:
            continue
        try:
            parsed.append(NativeRuleName(name))
        except ValueError:
            known = ", ".join(n.value for n in NativeRuleName)
            msg = f"Unknown native rule '{name}' (known rules: {known})"
            raise ConfigurationError(msg) from None
    return parsed
