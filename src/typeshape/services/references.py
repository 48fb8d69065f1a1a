"""Resolve ``package.module:attribute`` references to schemas or factories."""

from __future__ import annotations

import importlib
import logging
from typing import Any

logger = logging.getLogger(__name__)


class SchemaReferenceError(LookupError):
    """Raised when a schema reference cannot be resolved."""


def resolve_reference(ref: str) -> Any:
    """Import the object named by *ref*.

    The attribute part may be dotted (``pkg.mod:Outer.inner``).

    Raises:
        SchemaReferenceError: If *ref* is malformed, the module cannot be
            imported or fails while importing, or the attribute does not exist.
    """
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        msg = f"Expected 'module:attribute', got '{ref}'"
        raise SchemaReferenceError(msg)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"Cannot import module '{module_name}': {exc}"
        raise SchemaReferenceError(msg) from exc
    except Exception as exc:
        logger.debug("Schema module failed to import", extra={"ref": ref}, exc_info=True)
        msg = f"Module '{module_name}' failed to import: {type(exc).__name__}: {exc}"
        raise SchemaReferenceError(msg) from exc

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"'{module_name}' has no attribute '{attr_path}'"
            raise SchemaReferenceError(msg) from exc
    return obj
