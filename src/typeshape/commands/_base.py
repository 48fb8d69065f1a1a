"""Shared Click pieces for typeshape commands.

``TypeshapeCommand`` takes ``examples`` as ``(caption, arguments)`` pairs
and prints them on ``--examples``, prefixed with the program name, so
``--help`` stays short. ``schema_ref_argument`` is the ``module:attribute``
argument every command starts with.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

Example = tuple[str, str]

schema_ref_argument = click.argument("schema_ref", metavar="MODULE:ATTR")


def format_examples(prog: str, examples: Sequence[Example]) -> str:
    """Render examples as commented shell lines."""
    lines: list[str] = []
    for caption, arguments in examples:
        lines.append(f"  # {caption}")
        lines.append(f"  {prog} {arguments}")
    return "\n".join(lines)


class TypeshapeCommand(click.Command):
    """Click Command with an eager ``--examples`` flag."""

    def __init__(self, *args: Any, examples: Sequence[Example] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(ctx.find_root().info_name or "typeshape", self.examples))
        ctx.exit(0)
