"""SchemaService: check JSON documents against referenced schemas.

The reference may name a :class:`~typeshape.domain.factory.Factory` (its
constrain predicate then applies too) or a raw schema value.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic_core import to_jsonable_python

from typeshape.domain.errors import InvalidInstance, InvalidSchema
from typeshape.domain.factory import VALUE, Factory
from typeshape.domain.interpreter import interpret
from typeshape.domain.schema import describe
from typeshape.services.references import SchemaReferenceError, resolve_reference
from typeshape.services.result import ErrorCode, OperationResult

logger = logging.getLogger(__name__)


class SchemaService:
    """Operations behind ``typeshape check`` and ``typeshape describe``."""

    def check(self, ref: str, document: str) -> OperationResult:
        """Parse *document* as JSON and interpret it against *ref*."""
        op = "check"
        try:
            target = resolve_reference(ref)
        except SchemaReferenceError as exc:
            return OperationResult.failure(op, ErrorCode.BAD_REFERENCE, str(exc), ref=ref)

        try:
            value = json.loads(document)
        except json.JSONDecodeError as exc:
            return OperationResult.failure(op, ErrorCode.BAD_INPUT, f"Invalid JSON: {exc}", ref=ref)

        try:
            if isinstance(target, Factory):
                validated = target(value)[VALUE]
            else:
                validated = interpret(target, value)
        except InvalidSchema as exc:
            logger.warning("Schema is invalid", extra={"ref": ref, "reason": exc.reason})
            return OperationResult.failure(op, ErrorCode.INVALID_SCHEMA, str(exc), ref=ref)
        except InvalidInstance as exc:
            logger.debug("Rejected document", extra={"ref": ref, "reason": exc.reason})
            return OperationResult.failure(
                op, ErrorCode.INVALID_INSTANCE, str(exc), ref=ref, reason=exc.reason
            )

        # Converted values (dates, Decimals, instances) fall back to repr.
        value = to_jsonable_python(validated, fallback=repr)
        return OperationResult.success(op, ref=ref, value=value)

    def describe(self, ref: str) -> OperationResult:
        """Render the schema named by *ref*."""
        op = "describe"
        try:
            target = resolve_reference(ref)
        except SchemaReferenceError as exc:
            return OperationResult.failure(op, ErrorCode.BAD_REFERENCE, str(exc), ref=ref)

        schema = target.schema if isinstance(target, Factory) else target
        try:
            rendered = describe(schema)
        except InvalidSchema as exc:
            return OperationResult.failure(op, ErrorCode.INVALID_SCHEMA, str(exc), ref=ref)

        data: dict[str, Any] = {"ref": ref, "schema": rendered}
        if isinstance(target, Factory):
            data["name"] = target.name
            data["constrained"] = target.config.constrain is not None
        return OperationResult.success(op, **data)
