"""zsh adapter."""

from __future__ import annotations

from pathlib import Path

from theshit.domain.types import ShellKind
from theshit.shells.aliases import parse_assignments
from theshit.shells.base import Shell


class Zsh(Shell):
    kind = ShellKind.ZSH
    rc_relative_path = ".zshrc"

    def parse_aliases(self, raw: str) -> dict[str, str]:
        # `alias` prints: ll='ls -l'
        return parse_assignments(raw)

    def shell_function(self, name: str, program: Path) -> str:
        return f"""\
{name}() {{
    export SH_SHELL=zsh;
    SH_PREV_CMD="$(fc -ln -1)";
    export SH_PREV_CMD;
    SH_SHELL_ALIASES=$(alias);
    export SH_SHELL_ALIASES;

    SH_CMD=$(
      {program} fix $@
    ) && eval "$SH_CMD";

    unset SH_SHELL_ALIASES;
    unset SH_PREV_CMD;
    unset SH_SHELL;
}}"""
