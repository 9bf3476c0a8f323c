from theshit.cli import cli

cli()
