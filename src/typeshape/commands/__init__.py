"""Subcommand modules for typeshape.

Provides register_commands() which uses deferred imports to keep
``typeshape --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from typeshape.commands.check import check
    from typeshape.commands.describe import describe

    cli.add_command(check)
    cli.add_command(describe)
