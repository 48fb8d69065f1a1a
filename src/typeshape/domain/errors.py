"""Error taxonomy for schema interpretation.

Two kinds of failure, never mixed:

- :class:`InvalidSchema`: the schema definition itself is broken. This is a
  programming error in the calling code and should propagate.
- :class:`InvalidInstance`: the supplied value does not conform, a constrain
  predicate rejected it, or a custom-type coercion failed. Recoverable.
"""

from __future__ import annotations

import json
from typing import Any


class TypeshapeError(Exception):
    """Base class for all typeshape errors."""


class InvalidSchema(TypeshapeError):
    """Raised when a schema is not one of the recognized shapes."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid schema: {reason}")


class InvalidInstance(TypeshapeError):
    """Raised when a value cannot be turned into an instance of a schema.

    Attributes:
        reason: Short human-readable cause (e.g. ``"Expected a number"``).
        value: The offending value, kept as-is for callers that want it.
    """

    def __init__(self, reason: str, value: Any) -> None:
        self.reason = reason
        self.value = value
        super().__init__(f"Failed to construct instance: {reason}, given '{render_value(value)}'")


def render_value(value: Any) -> str:
    """Render *value* for diagnostics: JSON when possible, ``repr`` otherwise."""
    from typeshape.domain.schema import ABSENT

    if value is ABSENT:
        return "undefined"
    try:
        return json.dumps(value, default=repr, ensure_ascii=False)
    except (TypeError, ValueError):
        # Circular containers and non-string keys land here.
        return repr(value)
