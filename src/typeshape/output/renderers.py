"""Operation-specific Rich renderers for OperationResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from typeshape.output.console import create_console, get_output, schema_text

if TYPE_CHECKING:
    from rich.console import Console

    from typeshape.services.result import OperationResult


def render_result(result: OperationResult, *, verbose: bool = False) -> str:
    """Render an OperationResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: OperationResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"
    return f"OK: {result.op}"


def _status_line(console: Console, result: OperationResult) -> None:
    label = Text("OK", style="ts.ok")
    op = Text(f"  {result.op}", style="ts.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    k = Text(f"  {key}: ", style="ts.key")
    text = value if isinstance(value, Text) else Text(str(value), style=style)
    console.print(k, text, end="")
    console.print()


def _render_error(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ts.error")
    op = Text(f"  {result.op}", style="ts.op")
    console.print(Text.assemble(label, op, ": ", msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _render_check(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "ref", result.data.get("ref", ""), style="ts.ref")
    value = json.dumps(result.data.get("value"), indent=2 if verbose else None)
    _field(console, "value", value)


def _render_describe(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "ref", result.data.get("ref", ""), style="ts.ref")
    if "name" in result.data:
        _field(console, "name", result.data["name"])
    _field(console, "schema", schema_text(result.data.get("schema", "")))
    if verbose and "constrained" in result.data:
        _field(console, "constrained", result.data["constrained"])


def _render_generic(result: OperationResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "check": _render_check,
    "describe": _render_describe,
}
