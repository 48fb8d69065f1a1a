"""Instance factories: a schema bound to construction behaviour.

::

    Point = factory({"x": numbers.Number, "y": numbers.Number}, name="Point")
    Point.constrain(lambda v: v["x"] >= 0 or fail("x must be positive"))
    Point.extend({"norm": property(lambda self: math.hypot(*self[VALUE].values()))})

    p = Point({"x": 3, "y": 4, "z": 0})
    p[VALUE]   # {"x": 3, "y": 4}
    p.norm     # 5.0

Each factory owns a dedicated :class:`Instance` subclass. That class is the
member table for everything added by :meth:`Factory.extend`, so extensions
reach existing instances as well as future ones.

Configure a factory (``constrain``/``extend``) before sharing it; calling it
never mutates the factory.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final, Self

from typeshape.domain.errors import InvalidInstance, InvalidSchema
from typeshape.domain.interpreter import interpret
from typeshape.domain.members import merge, own_members
from typeshape.domain.schema import ABSENT, describe

logger = logging.getLogger(__name__)


class _ValueKey:
    """Type of :data:`VALUE`."""

    def __repr__(self) -> str:
        return "VALUE"


VALUE: Final = _ValueKey()
"""Key reading an instance's validated value: ``instance[VALUE]``."""

_SLOT = "_Instance__value"

# Members of Instance that extensions may not replace.
RESERVED_MEMBERS = frozenset(
    {
        "__init__",
        "__new__",
        "__setattr__",
        "__delattr__",
        "__getitem__",
        "__init_subclass__",
        "factory",
    }
)


class Instance:
    """Immutable wrapper around one validated value.

    The value lives in a write-once slot that ``vars()`` does not list and
    that is reachable only through ``instance[VALUE]``.
    """

    __slots__ = ("__value",)

    factory: Factory

    def __init__(self, value: Any) -> None:
        object.__setattr__(self, _SLOT, value)

    def __getitem__(self, key: Any) -> Any:
        if key is VALUE:
            return object.__getattribute__(self, _SLOT)
        raise KeyError(key)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == _SLOT:
            raise AttributeError("Instance value is read-only")
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if name == _SLOT:
            raise AttributeError("Instance value is read-only")
        object.__delattr__(self, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self[VALUE]!r})"


Predicate = Callable[[Any], Any]


@dataclass(frozen=True)
class FactoryConfig:
    """Snapshot of a factory's configuration, replaced as a whole on change."""

    schema: Any = ABSENT
    constrain: Predicate | None = None


class Factory:
    """Callable that validates values and wraps them in instances.

    Use :func:`factory` to build one.
    """

    def __init__(self, schema: Any = ABSENT, *, name: str | None = None) -> None:
        self._config = FactoryConfig(schema=schema)
        self._name = name or "Instance"
        self._instance_cls: type[Instance] = type(self._name, (Instance,), {"factory": self})

    @property
    def schema(self) -> Any:
        """The schema this factory was built from, as given."""
        return self._config.schema

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> FactoryConfig:
        return self._config

    @property
    def instance_class(self) -> type[Instance]:
        return self._instance_cls

    def __call__(self, value: Any = ABSENT) -> Instance:
        """Validate *value* and return a new instance holding the result.

        Raises:
            InvalidSchema: If the bound schema is broken.
            InvalidInstance: If *value* does not conform or the constrain
                predicate rejects it.
        """
        config = self._config
        interpreted = interpret(config.schema, value)
        if config.constrain is not None:
            _check(config.constrain, interpreted)
        return self._instance_cls(interpreted)

    def __instancecheck__(self, obj: Any) -> bool:
        return isinstance(obj, self._instance_cls)

    def constrain(self, predicate: Predicate) -> Self:
        """Register the invariant check run after interpretation.

        Replaces any previous predicate. The predicate rejects a value by
        raising or by returning ``False``; it never transforms it.
        """
        self._config = dataclasses.replace(self._config, constrain=predicate)
        return self

    def extend(self, *sources: Any) -> Self:
        """Merge members onto every instance of this factory, existing or future.

        Properties and other descriptors are copied as-is, so they keep
        computing on access.

        Raises:
            TypeError: If a source tries to replace a reserved member.
        """
        for source in sources:
            clashes = sorted(name for name, _ in own_members(source) if name in RESERVED_MEMBERS)
            if clashes:
                raise TypeError(f"Cannot extend reserved members: {', '.join(clashes)}")
        merge(self._instance_cls, *sources)
        logger.debug("Extended %s", self._name)
        return self

    def __repr__(self) -> str:
        return f"<Factory {self._name} {describe_or_invalid(self._config.schema)}>"


def factory(schema: Any = ABSENT, *, name: str | None = None) -> Factory:
    """Build a :class:`Factory` for *schema*.

    The schema is checked lazily: an unrecognized shape raises
    :class:`InvalidSchema` when the factory is first called.
    """
    return Factory(schema, name=name)


def value_of(instance: Instance) -> Any:
    """Return the validated value held by *instance*."""
    return instance[VALUE]


def fail(message: str) -> bool:
    """Raise ``ValueError(message)``; handy inside constrain lambdas."""
    raise ValueError(message)


def _check(predicate: Predicate, interpreted: Any) -> None:
    try:
        verdict = predicate(interpreted)
    except InvalidSchema:
        raise
    except InvalidInstance as exc:
        raise InvalidInstance(exc.reason, interpreted) from exc
    except Exception as exc:
        raise InvalidInstance(str(exc) or type(exc).__name__, interpreted) from exc
    if verdict is False:
        raise InvalidInstance("Constraint not satisfied", interpreted)


def describe_or_invalid(schema: Any) -> str:
    try:
        return describe(schema)
    except InvalidSchema:
        return "<invalid schema>"
