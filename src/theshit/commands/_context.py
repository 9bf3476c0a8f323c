"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from theshit.output.formatters import format_result

if TYPE_CHECKING:
    from theshit.config.settings import ShitSettings
    from theshit.services.result import ServiceResult

PROGRAM_NAME = "theshit"


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ShitSettings) -> None:
        self.settings = settings

        from theshit.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def program(self) -> Path:
        """Executable embedded in shell hooks.

        The installed console script when it is on PATH; under
        ``python -m theshit`` argv[0] is only the package's ``__main__.py``.
        """
        found = shutil.which(PROGRAM_NAME)
        if found:
            return Path(found)
        return Path(sys.argv[0]).resolve()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they never reach ``eval``.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            no_color=not sys.stdout.isatty(),
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.secho(f"WARNING: {warning}", fg="yellow", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
