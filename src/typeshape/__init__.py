"""typeshape: runtime schemas written as plain Python values.

Public API::

    from typeshape import VALUE, factory

    User = factory({"name": str, "tags": [str]}, name="User")
    User({"name": "ada", "tags": ["admin"], "extra": 1})[VALUE]
    # {"name": "ada", "tags": ["admin"]}
"""

from typeshape.domain.errors import InvalidInstance, InvalidSchema, TypeshapeError
from typeshape.domain.factory import (
    VALUE,
    Factory,
    FactoryConfig,
    Instance,
    factory,
    fail,
    value_of,
)
from typeshape.domain.interpreter import Resolution, interpret, resolve_custom
from typeshape.domain.members import merge
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
)

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "VALUE",
    "Absent",
    "ArrayOf",
    "CustomType",
    "Factory",
    "FactoryConfig",
    "Instance",
    "InvalidInstance",
    "InvalidSchema",
    "Null",
    "NumberKind",
    "ObjectShape",
    "Resolution",
    "Schema",
    "StringKind",
    "TypeshapeError",
    "__version__",
    "compile_schema",
    "describe",
    "factory",
    "fail",
    "interpret",
    "merge",
    "resolve_custom",
    "value_of",
]
