"""Schema variants and compilation of raw schemas.

Users write schemas as ordinary Python values::

    {"name": str, "scores": [numbers.Number], "joined": date.fromisoformat}

:func:`compile_schema` turns such a value into the closed variant below.
The interpreter only ever dispatches on these seven classes, so anything
that does not compile is rejected as :class:`InvalidSchema` in one place.

INVARIANT: compiled schemas are frozen and hold only compiled children.
"""

from __future__ import annotations

import numbers
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Final

from typeshape.domain.errors import InvalidSchema


class _AbsentType:
    """Type of :data:`ABSENT`, the "no argument" marker."""

    _instance: _AbsentType | None = None

    def __new__(cls) -> _AbsentType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = _AbsentType()


# ---------------------------------------------------------------------------
# Compiled variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Absent:
    """Matches only :data:`ABSENT`."""


@dataclass(frozen=True)
class Null:
    """Matches only ``None``."""


@dataclass(frozen=True)
class StringKind:
    """Matches any ``str``."""


@dataclass(frozen=True)
class NumberKind:
    """Matches any :class:`numbers.Number` except ``bool``."""


@dataclass(frozen=True)
class ObjectShape:
    """Matches mappings holding every declared field."""

    fields: tuple[tuple[Any, Schema], ...]

    def keys(self) -> list[Any]:
        return [key for key, _ in self.fields]


@dataclass(frozen=True)
class ArrayOf:
    """Matches lists and tuples whose elements all match ``element``."""

    element: Schema


@dataclass(frozen=True)
class CustomType:
    """Matches instances of ``target``, or values coercible into one.

    ``target`` is anything usable with :func:`isinstance`: a class or a
    factory. ``convert`` is an optional conversion function tried before
    construction; its result only counts when it is an instance of
    ``target``. With ``construct`` false the target is never called and only
    serves to recognise values that already conform.
    """

    target: Any = None
    convert: Callable[[Any], Any] | None = None
    construct: bool = True

    def __post_init__(self) -> None:
        if self.target is None:
            raise InvalidSchema("Custom type needs a target type")
        if self.construct and not is_constructible(self.target):
            raise InvalidSchema(f"Custom type target {self.target!r} is not constructible")
        try:
            isinstance(None, self.target)
        except TypeError as exc:
            msg = f"Custom type target {self.target!r} cannot check instances: {exc}"
            raise InvalidSchema(msg) from exc
        if self.convert is not None and not callable(self.convert):
            raise InvalidSchema(f"Conversion function {self.convert!r} is not callable")


Schema = Absent | Null | StringKind | NumberKind | ObjectShape | ArrayOf | CustomType

_VARIANTS: tuple[type, ...] = (
    Absent,
    Null,
    StringKind,
    NumberKind,
    ObjectShape,
    ArrayOf,
    CustomType,
)


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------


def is_constructible(obj: Any) -> bool:
    """True if *obj* supports ``isinstance`` checks and can be called."""
    if isinstance(obj, type):
        return True
    return callable(obj) and any("__instancecheck__" in vars(klass) for klass in type(obj).__mro__)


def compile_schema(raw: Any) -> Schema:
    """Compile a raw schema value into its tagged variant.

    Raises:
        InvalidSchema: If *raw* (or any nested part) is not a recognized shape.
    """
    if isinstance(raw, _VARIANTS):
        return raw
    if raw is ABSENT:
        return Absent()
    if raw is None:
        return Null()
    if raw is str:
        return StringKind()
    if raw is numbers.Number:
        return NumberKind()
    if type(raw) is dict:
        return ObjectShape(fields=tuple((key, compile_schema(sub)) for key, sub in raw.items()))
    if type(raw) is list and len(raw) == 1:
        return ArrayOf(element=compile_schema(raw[0]))
    if is_constructible(raw):
        return CustomType(target=raw)
    if callable(raw):
        return CustomType(target=conversion_target(raw), convert=raw, construct=False)
    raise InvalidSchema("Invalid schema")


def conversion_target(fn: Callable[..., Any]) -> type:
    """Find the type a bare conversion function produces.

    The return annotation wins when it names a class; otherwise an
    alternate constructor bound to a class (``date.fromisoformat``) yields
    that class.

    Raises:
        InvalidSchema: If neither gives a class.
    """
    try:
        returned = typing.get_type_hints(fn).get("return")
    except (AttributeError, NameError, TypeError):
        returned = None
    if isinstance(returned, type):
        return returned
    owner = getattr(fn, "__self__", None)
    if isinstance(owner, type):
        return owner
    msg = (
        f"Conversion function {_callable_name(fn)} has no target type; "
        "annotate its return type or use CustomType(target, convert)"
    )
    raise InvalidSchema(msg)


def describe(raw: Any) -> str:
    """Render a schema compactly, e.g. ``{x: str, tags: [str]}``."""
    node = compile_schema(raw)
    if isinstance(node, Absent):
        return "absent"
    if isinstance(node, Null):
        return "null"
    if isinstance(node, StringKind):
        return "str"
    if isinstance(node, NumberKind):
        return "number"
    if isinstance(node, ObjectShape):
        inner = ", ".join(f"{key}: {describe(sub)}" for key, sub in node.fields)
        return "{" + inner + "}"
    if isinstance(node, ArrayOf):
        return f"[{describe(node.element)}]"
    if node.convert is not None and not node.construct:
        return _callable_name(node.convert)
    return _callable_name(node.target)


def _callable_name(obj: Any) -> str:
    name = getattr(obj, "__name__", None) or getattr(obj, "name", None)
    return str(name) if name else repr(obj)


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))
