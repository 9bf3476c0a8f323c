"""HookService — shell function rendering and one-time setup.

``alias`` prints the shell function that feeds ``theshit fix``; ``setup``
wires it into the rc file and seeds the script rule directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from theshit.services.base import BaseService
from theshit.services.result import ServiceResult
from theshit.shells import get_shell

logger = logging.getLogger(__name__)

DEFAULT_ALIAS = "shit"
EXAMPLE_RULE_NAME = "git_set_upstream.py"
EXAMPLE_RULE_MODE = 0o600

EXAMPLE_RULE = '''\
"""Example script rule: push a new branch with --set-upstream.

Script rules expose two functions taking the command text, its stdout and
its stderr. `match` returns a bool; `fix` returns the replacement command.
The file must belong to you and must not be writable by group or others.
"""


def match(command, stdout, stderr):
    return command.startswith("git push") and "--set-upstream" in stderr


def fix(command, stdout, stderr):
    for line in stderr.splitlines():
        line = line.strip()
        if line.startswith("git push --set-upstream"):
            return line
    return command + " --set-upstream origin HEAD"
'''


class HookService(BaseService):
    """Manages the shell-side integration."""

    def alias(self, name: str, program: Path) -> ServiceResult:
        """Render the shell function named *name* that calls *program*."""
        op = "alias"
        shell_kind = self._resolve_shell()
        if shell_kind is None:
            return ServiceResult.failure(op, "NO_SHELL", "Could not determine the current shell")
        function = get_shell(shell_kind).shell_function(name, program)
        return ServiceResult(
            ok=True,
            op=op,
            data={"function": function, "shell": shell_kind.value},
        )

    def setup(self, name: str, program: Path, *, home: Path | None = None) -> ServiceResult:
        """Install the hook in the rc file and create the default rule directory.

        Either part already being in place is reported as a warning, not a
        failure.
        """
        op = "setup"
        shell_kind = self._resolve_shell()
        if shell_kind is None:
            return ServiceResult.failure(op, "NO_SHELL", "Could not determine the current shell")

        shell = get_shell(shell_kind, home=home)
        warnings: list[str] = []
        data: dict[str, str] = {"shell": shell_kind.value, "name": name}

        try:
            rc_path = shell.setup_alias(name, program)
            data["rc_path"] = str(rc_path)
            data["alias"] = "installed"
        except FileExistsError:
            data["rc_path"] = str(shell.rc_path())
            data["alias"] = "skipped"
            warnings.append("Alias already exists, skipping alias setup.")
        except OSError as exc:
            return ServiceResult.failure(op, "SETUP_FAILED", f"Failed to set up alias: {exc}")

        rules_dir = self._settings.rules_dir
        data["rules_dir"] = str(rules_dir)
        try:
            create_default_rules(rules_dir)
            data["rules"] = "created"
        except FileExistsError:
            data["rules"] = "skipped"
            warnings.append("Default rules already exist, skipping rules setup.")
        except OSError as exc:
            return ServiceResult.failure(
                op, "SETUP_FAILED", f"Failed to set up default rules: {exc}"
            )

        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)


def create_default_rules(rules_dir: Path) -> Path:
    """Create *rules_dir* with an example rule that passes the security gate.

    Raises:
        FileExistsError: *rules_dir* already exists.
    """
    rules_dir.mkdir(parents=True, exist_ok=False, mode=0o700)
    rule_path = rules_dir / EXAMPLE_RULE_NAME
    fd = os.open(rule_path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, EXAMPLE_RULE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(EXAMPLE_RULE)
    # os.open applies the umask.
    os.chmod(rule_path, EXAMPLE_RULE_MODE)
    logger.debug("Created example rule %s", rule_path)
    return rule_path
