"""Command: print the shell function that invokes ``theshit fix``."""

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
  eval "$(theshit alias)"
  eval "$(theshit alias fuck)"
  theshit --shell fish alias | source""",
)
@click.argument("name", default=DEFAULT_ALIAS)
@click.pass_obj
def alias(app: AppContext, name: str) -> None:
    """Print the shell function NAME (default: shit)."""
    from theshit.services.hook import HookService

    app.emit(HookService(app.settings).alias(name, app.program))
