"""Rich/JSON output helpers.

The CLI renders OperationResult for humans (Rich output) or machines
(--json). The formatter layer adapts OperationResult to the requested
output mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from typeshape.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from typeshape.services.result import OperationResult


class OutputSettings(BaseModel):
    """Output switches derived from the global CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: OperationResult, *, settings: OutputSettings | None = None) -> str:
    """Format an OperationResult for display.

    JSON wins over quiet, quiet wins over the rich renderers.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
