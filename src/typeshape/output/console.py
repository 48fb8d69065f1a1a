"""Rich Console factory, theme and schema highlighting for typeshape output.

Consoles render into a StringIO buffer so ``format_result()`` can return a
plain string; Rich drops colour codes when no terminal is attached.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.text import Text
from rich.theme import Theme

TYPESHAPE_THEME = Theme(
    {
        "ts.ok": "bold green",
        "ts.error": "bold red",
        "ts.op": "bold cyan",
        "ts.key": "dim",
        "ts.ref": "bold blue",
        "ts.schema.field": "bold",
        "ts.schema.kind": "magenta",
        "ts.schema.custom": "yellow",
        "ts.schema.punct": "dim",
    }
)


class SchemaHighlighter(RegexHighlighter):
    """Colour ``describe()`` output such as ``{joined: fromisoformat, tags: [str]}``."""

    base_style = "ts.schema."
    highlights = [
        r"(?P<punct>[{}\[\],:])",
        r"(?P<field>[^\s{},:\[\]]+)(?=:)",
        r"(?<![\w.])(?P<kind>str|number|null|absent)(?![\w.])",
        r"(?<=: )(?P<custom>(?!str\b|number\b|null\b|absent\b)[A-Za-z_][\w.]*)",
    ]


_SCHEMA_HIGHLIGHTER = SchemaHighlighter()


def schema_text(rendered: str) -> Text:
    """Highlighted :class:`Text` for a rendered schema; never parsed as markup."""
    return _SCHEMA_HIGHLIGHTER(Text(rendered))


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a buffer-backed Console.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override the default width of 120 columns.
    """
    return Console(
        file=StringIO(),
        theme=TYPESHAPE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
