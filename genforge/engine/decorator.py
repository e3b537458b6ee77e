"""Operation decoration: merge type-specific defaults into authored operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from genforge.errors import OperationValidationError, UnknownOperationTypeError
from genforge.models import OPERATION_MODELS, BaseOperation, Operation, RegisteredOperation
from genforge.registry import Registry


def decorate(operation: Mapping[str, Any] | BaseOperation, registry: Registry) -> Operation:
    """Return a fully populated operation model for *operation*.

    Explicitly set fields are kept; missing ones get the documented defaults.
    The input is never mutated, and decorating an already decorated
    operation returns it unchanged.

    Raises:
        UnknownOperationTypeError: The type is neither built-in nor registered.
        OperationValidationError: The operation is malformed, e.g. both
            ``skipIfExists`` and ``overwrite`` are set.
    """
    if isinstance(operation, BaseOperation):
        return operation  # type: ignore[return-value]

    if not isinstance(operation, Mapping):
        raise OperationValidationError(type(operation).__name__, "operations must be mappings")

    op_type = operation.get("type")
    if not isinstance(op_type, str) or not op_type:
        raise OperationValidationError(str(op_type), 'a non-empty "type" is required')

    model = OPERATION_MODELS.get(op_type)
    if model is None:
        if registry.get_handler(op_type) is None:
            raise UnknownOperationTypeError(op_type)
        model = RegisteredOperation

    try:
        return model.model_validate(dict(operation))  # type: ignore[return-value]
    except ValidationError as exc:
        raise OperationValidationError(op_type, describe_validation_error(exc)) from exc


def describe_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into ``field: message; ...``."""
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err["loc"])
        message = err["msg"].removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
