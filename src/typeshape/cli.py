"""Root CLI group for typeshape with global flags and command registration."""

from __future__ import annotations

import click

from typeshape import __version__
from typeshape.commands import register_commands
from typeshape.commands._context import AppContext
from typeshape.config.settings import TypeshapeSettings


@click.group(name="typeshape", invoke_without_command=True)
@click.version_option(version=__version__, prog_name="typeshape")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
) -> None:
    """typeshape: check data against schemas written as Python values."""
    settings = TypeshapeSettings.from_cli(
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
