"""Recursive schema interpreter.

``interpret(schema, value)`` either returns the validated value or raises.
Primitive schemas return the value itself; object and array schemas always
build fresh containers, so the result never aliases the input container.

Custom types are resolved by :func:`resolve_custom`, a small state machine:

    value already an instance          -> ALREADY_CONFORMING
    conversion function returned one   -> CONVERTED_VIA_CALL
    target constructed from the value  -> CONVERTED_VIA_CONSTRUCTION
    none of the above                  -> UNRECOGNIZED

Conversion-function failures are swallowed (best effort); construction
failures and the unrecognized outcome surface as :class:`InvalidInstance`.
"""

from __future__ import annotations

import logging
import numbers
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from typeshape.domain.errors import InvalidInstance, InvalidSchema
from typeshape.domain.schema import (
    ABSENT,
    Absent,
    ArrayOf,
    CustomType,
    Null,
    NumberKind,
    ObjectShape,
    Schema,
    StringKind,
    compile_schema,
    describe,
    is_mapping,
    is_sequence,
)

logger = logging.getLogger(__name__)


class Resolution(StrEnum):
    """Outcome of resolving a value against a :class:`CustomType`."""

    ALREADY_CONFORMING = "already_conforming"
    CONVERTED_VIA_CALL = "converted_via_call"
    CONVERTED_VIA_CONSTRUCTION = "converted_via_construction"
    UNRECOGNIZED = "unrecognized"


def interpret(schema: Any, value: Any) -> Any:
    """Validate *value* against *schema* and return the validated value.

    *schema* may be a raw schema or an already compiled one.

    Raises:
        InvalidSchema: If the schema is not a recognized shape.
        InvalidInstance: If the value does not conform.
    """
    return _interpret(compile_schema(schema), value)


def _interpret(node: Schema, value: Any) -> Any:
    if isinstance(node, Absent):
        if value is not ABSENT:
            raise InvalidInstance("Expected lack of argument", value)
        return value

    if isinstance(node, Null):
        if value is not None:
            raise InvalidInstance("Expected null", value)
        return value

    if isinstance(node, StringKind):
        if not isinstance(value, str):
            raise InvalidInstance("Expected a string", value)
        return value

    if isinstance(node, NumberKind):
        if isinstance(value, bool) or not isinstance(value, numbers.Number):
            raise InvalidInstance("Expected a number", value)
        return value

    if isinstance(node, ObjectShape):
        return _interpret_object(node, value)

    if isinstance(node, ArrayOf):
        if not is_sequence(value):
            raise InvalidInstance("Expected array", value)
        return [_interpret(node.element, element) for element in value]

    if isinstance(node, CustomType):
        _, result = resolve_custom(node, value)
        return result

    raise InvalidSchema("Invalid schema")


def _interpret_object(node: ObjectShape, value: Any) -> dict[Any, Any]:
    if not is_mapping(value):
        raise InvalidInstance("Expected object", value)

    missing = [key for key in node.keys() if key not in value]
    if missing:
        names = ", ".join(f"'{key}'" for key in missing)
        raise InvalidInstance(f"Missing properties: {names}", value)

    # Undeclared input keys are dropped.
    return {key: _interpret(sub, value[key]) for key, sub in node.fields}


def resolve_custom(node: CustomType, value: Any) -> tuple[Resolution, Any]:
    """Resolve *value* against a custom type.

    Returns:
        A ``(resolution, result)`` tuple; *resolution* is never
        ``UNRECOGNIZED`` since that outcome raises.

    Raises:
        InvalidInstance: If construction fails or nothing produced a match.
    """
    if isinstance(value, node.target):
        return Resolution.ALREADY_CONFORMING, value

    if node.convert is not None:
        converted = _try_convert(node.convert, value)
        if isinstance(converted, node.target):
            return Resolution.CONVERTED_VIA_CALL, converted

    if node.construct:
        try:
            constructed = node.target(value)
        except InvalidSchema:
            raise
        except InvalidInstance as exc:
            # Nested factories already produce the right error kind.
            raise InvalidInstance(exc.reason, value) from exc
        except Exception as exc:
            raise InvalidInstance(str(exc) or type(exc).__name__, value) from exc
        return Resolution.CONVERTED_VIA_CONSTRUCTION, constructed

    logger.debug(
        "No coercion path matched",
        extra={"schema": describe(node), "resolution": str(Resolution.UNRECOGNIZED)},
    )
    raise InvalidInstance("Unrecognized value", value)


def _try_convert(convert: Callable[[Any], Any], value: Any) -> Any:
    try:
        return convert(value)
    except InvalidSchema:
        raise
    except Exception:
        name = getattr(convert, "__name__", repr(convert))
        logger.debug("Conversion function failed", extra={"schema": name}, exc_info=True)
        return None
