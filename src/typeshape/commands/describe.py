"""Command: print the shape of a schema or factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from typeshape.commands._base import TypeshapeCommand, schema_ref_argument

if TYPE_CHECKING:
    from typeshape.commands._context import AppContext


@click.command(
    cls=TypeshapeCommand,
    examples=[
        ("show a factory's name and shape", "describe myapp.schemas:User"),
        ("machine-readable result", "--json describe myapp.schemas:USER_SCHEMA"),
    ],
)
@schema_ref_argument
@click.pass_obj
def describe(app: AppContext, schema_ref: str) -> None:
    """Show the schema found at MODULE:ATTR."""
    from typeshape.services.schemas import SchemaService

    app.emit(SchemaService().describe(schema_ref))
