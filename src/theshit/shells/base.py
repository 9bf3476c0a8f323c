"""Shell adapter base class.

An adapter knows how its shell prints aliases, which function to install so
that ``theshit fix`` receives the previous command, and which rc file to
edit during setup.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from theshit.domain.types import ShellKind
from theshit.shells.aliases import raw_aliases_from_env

logger = logging.getLogger(__name__)


class Shell:
    """Common behaviour for supported shells."""

    kind: ClassVar[ShellKind]
    rc_relative_path: ClassVar[str]

    def __init__(self, home: Path | None = None) -> None:
        self._home = home

    @property
    def home(self) -> Path:
        return self._home if self._home is not None else Path.home()

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # --- Aliases -------------------------------------------------------

    def parse_aliases(self, raw: str) -> dict[str, str]:
        raise NotImplementedError

    def get_aliases(self) -> dict[str, str]:
        """Aliases exported by the shell function for this invocation."""
        return self.parse_aliases(raw_aliases_from_env())

    # --- Hook ----------------------------------------------------------

    def shell_function(self, name: str, program: Path) -> str:
        raise NotImplementedError

    def hook_line(self, name: str, program: Path) -> str:
        """The rc file line that defines the shell function at startup."""
        return f'eval "$({program} alias {name})"'

    def rc_path(self) -> Path:
        return self.home / self.rc_relative_path

    def setup_alias(self, name: str, program: Path) -> Path:
        """Append the hook line to the rc file.

        Raises:
            FileExistsError: the hook line is already present.
        """
        return append_line(self.rc_path(), self.hook_line(name, program))


def append_line(config_path: Path, line: str) -> Path:
    """Append *line* to *config_path*, creating the file if needed.

    Raises:
        FileExistsError: *config_path* already contains *line*.
    """
    existing = ""
    if config_path.is_file():
        existing = config_path.read_text(encoding="utf-8")
        if line in existing.splitlines():
            msg = f"{config_path} already contains the hook"
            raise FileExistsError(msg)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    separator = "" if not existing or existing.endswith("\n") else "\n"
    with config_path.open("a", encoding="utf-8") as fh:
        fh.write(f"{separator}{line}\n")
    logger.debug("Appended hook to %s", config_path)
    return config_path
