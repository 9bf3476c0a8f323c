"""Command: print the corrected version of the previous command."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import click

from theshit.commands._base import ShitCommand

if TYPE_CHECKING:
    from theshit.commands._context import AppContext

PREV_CMD_ENV_VAR = "SH_PREV_CMD"


@click.command(
    cls=ShitCommand,
    examples="""\
  SH_PREV_CMD='apt install vim' theshit fix
  theshit --shell zsh fix --command 'cd..'
  theshit --json fix --command 'mkdir a/b/c'""",
)
@click.option(
    "--command",
    "command_text",
    default=None,
    help=f"Command to fix (default: ${PREV_CMD_ENV_VAR}).",
)
@click.argument("args", nargs=-1)
@click.pass_obj
def fix(app: AppContext, command_text: str | None, args: tuple[str, ...]) -> None:
    """Fix the previous command and print the replacement.

    ARGS are whatever the user typed after the alias; they are accepted so
    the shell function can forward them, and otherwise ignored.
    """
    from theshit.services.fix import FixService
    from theshit.services.result import ServiceResult

    if command_text is None:
        command_text = os.environ.get(PREV_CMD_ENV_VAR)
    if command_text is None:
        app.emit(
            ServiceResult.failure(
                "fix", "NO_COMMAND", f"{PREV_CMD_ENV_VAR} environment variable is not set."
            )
        )
        return

    app.emit(FixService(app.settings).fix(command_text))
