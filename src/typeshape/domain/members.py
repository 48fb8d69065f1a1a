"""Descriptor-preserving member merge.

``merge(target, *sources)`` copies members onto *target* with ``setattr``
without ever reading them through the descriptor protocol. A ``property``
copied onto a class stays a ``property``: every instance keeps computing it
on access instead of seeing a value frozen at merge time.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, TypeVar

T = TypeVar("T")

# Entries the interpreter manages itself on every class body.
_CLASS_INTERNALS = frozenset(
    {
        "__dict__",
        "__weakref__",
        "__module__",
        "__qualname__",
        "__doc__",
        "__slots__",
        "__annotations__",
        "__annotate__",
        "__annotate_func__",
        "__annotations_cache__",
        "__classcell__",
        "__classdictcell__",
        "__firstlineno__",
        "__static_attributes__",
    }
)


def merge(target: T, *sources: Any) -> T:
    """Copy every own member of each source onto *target*, in order.

    Later sources overwrite earlier ones and existing members of *target*.

    Args:
        target: Object (usually a class) receiving the members.
        *sources: Mappings of name to member, classes (their raw
            ``__dict__`` entries), or plain objects (their ``vars()``).

    Returns:
        *target*, to allow chaining.
    """
    for source in sources:
        for name, member in own_members(source):
            setattr(target, name, member)
    return target


def own_members(source: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(name, raw member)`` pairs defined directly on *source*."""
    if isinstance(source, Mapping):
        yield from source.items()
    elif isinstance(source, type):
        for name, member in vars(source).items():
            if name not in _CLASS_INTERNALS:
                yield name, member
    else:
        yield from vars(source).items()
