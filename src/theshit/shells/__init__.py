"""Shell integration — detection, alias tables, and hook installation."""

from __future__ import annotations

from pathlib import Path

from theshit.domain.types import ShellKind
from theshit.shells.base import Shell
from theshit.shells.bash import Bash
from theshit.shells.detect import get_current_shell
from theshit.shells.fish import Fish
from theshit.shells.zsh import Zsh

SHELLS: dict[ShellKind, type[Shell]] = {
    ShellKind.BASH: Bash,
    ShellKind.ZSH: Zsh,
    ShellKind.FISH: Fish,
}


def get_shell(kind: ShellKind, *, home: Path | None = None) -> Shell:
    """Return the adapter for *kind*."""
    return SHELLS[kind](home=home)


__all__ = ["SHELLS", "Shell", "get_current_shell", "get_shell"]
