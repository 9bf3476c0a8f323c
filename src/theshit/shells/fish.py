"""fish adapter."""

from __future__ import annotations

from pathlib import Path

from theshit.domain.types import ShellKind
from theshit.shells.aliases import strip_quotes
from theshit.shells.base import Shell


class Fish(Shell):
    kind = ShellKind.FISH
    rc_relative_path = ".config/fish/config.fish"

    def parse_aliases(self, raw: str) -> dict[str, str]:
        """Parse ``alias ll 'ls -l'`` lines (``alias ll='ls -l'`` also accepted)."""
        aliases: dict[str, str] = {}
        for line in raw.splitlines():
            line = line.strip()
            if line.startswith("alias "):
                line = line[len("alias ") :].lstrip()
            name, sep, value = _split_definition(line)
            if not sep or not name:
                continue
            aliases[name] = strip_quotes(value.strip())
        return aliases

    def shell_function(self, name: str, program: Path) -> str:
        return f"""\
function {name} -d "Fix the previous command"
    set -lx SH_SHELL fish
    set -lx SH_PREV_CMD $history[1]
    set -lx SH_SHELL_ALIASES (alias | string collect)
    set -l SH_CMD ({program} fix $argv | string collect)
    and eval $SH_CMD
end"""

    def hook_line(self, name: str, program: Path) -> str:
        return f"{program} alias {name} | source"


def _split_definition(line: str) -> tuple[str, str, str]:
    """Split on ``=`` or the first space, whichever comes first."""
    eq = line.find("=")
    space = line.find(" ")
    if eq == -1 and space == -1:
        return line, "", ""
    if eq == -1 or (space != -1 and space < eq):
        return line.partition(" ")
    return line.partition("=")
