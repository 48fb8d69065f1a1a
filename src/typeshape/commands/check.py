"""Command: check a JSON document against a schema or factory."""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

import click

from typeshape.commands._base import TypeshapeCommand, schema_ref_argument

if TYPE_CHECKING:
    from typeshape.commands._context import AppContext


@click.command(
    cls=TypeshapeCommand,
    examples=[
        ("check a file against a factory", "check myapp.schemas:User user.json"),
        ("read the document from stdin", "check myapp.schemas:User - < user.json"),
        ("machine-readable result", "--json check myapp.schemas:USER_SCHEMA user.json"),
    ],
)
@schema_ref_argument
@click.argument("data", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_obj
def check(app: AppContext, schema_ref: str, data: IO[str]) -> None:
    """Validate DATA (JSON, default stdin) against the schema at MODULE:ATTR."""
    from typeshape.services.schemas import SchemaService

    app.emit(SchemaService().check(schema_ref, data.read()))
