"""Command: install the shell hook and the default rule directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from theshit.commands._base import ShitCommand
from theshit.services.hook import DEFAULT_ALIAS

if TYPE_CHECKING:
    from theshit.commands._context import AppContext


@click.command(
    cls=ShitCommand,
    examples="""\
  theshit setup
  theshit setup fuck
  theshit --shell zsh setup""",
)
@click.argument("name", default=DEFAULT_ALIAS)
@click.pass_obj
def setup(app: AppContext, name: str) -> None:
    """Add the NAME hook to your shell rc file and create the rules directory."""
    from theshit.services.hook import HookService

    app.emit(HookService(app.settings).setup(name, app.program))
