"""Subcommand modules for theshit.

Provides register_commands() which uses deferred imports to keep
``theshit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from theshit.commands.alias import alias
    from theshit.commands.fix import fix
    from theshit.commands.setup import setup

    cli.add_command(fix)
    cli.add_command(alias)
    cli.add_command(setup)
