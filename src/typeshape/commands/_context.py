"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from typeshape.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from typeshape.config.settings import TypeshapeSettings
    from typeshape.services.result import OperationResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: TypeshapeSettings) -> None:
        self.settings = settings

        from typeshape.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: OperationResult) -> None:
        """Format and output an OperationResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Rejected document: writes to stderr, exits with code 1.
        * Broken schema, reference or input: writes to stderr, exits with code 2.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return

        click.echo(output, err=True)
        raise SystemExit(result.exit_code)
