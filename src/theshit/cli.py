"""Root CLI group for theshit with global flags and command registration."""

from __future__ import annotations

import click

from theshit import __version__
from theshit.commands import register_commands
from theshit.commands._base import ShitGroup
from theshit.commands._context import AppContext
from theshit.config.settings import ShitSettings


@click.group(cls=ShitGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="theshit")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--shell",
    default=None,
    type=click.Choice(["bash", "zsh", "fish"]),
    help="Shell to use instead of detecting it.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    shell: str | None,
) -> None:
    """theshit — fix the shell command that just failed."""
    settings = ShitSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
        shell=shell,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
