# src/store/validation.py - v1
"""Build validated records, mapping pydantic failures to store errors."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from osintgraph.core.errors import ValidationError, describe_pydantic_error

ModelT = TypeVar("ModelT", bound=BaseModel)


def build_record(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate ``data`` into ``model``.

    Raises:
        ValidationError: With a readable summary of every failing field.
    """
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid {model.__name__.lower()}: {describe_pydantic_error(exc)}"
        ) from exc


def supplied(**fields: Any) -> dict[str, Any]:
    """Keep only the fields a caller actually passed (non-None)."""
    return {k: v for k, v in fields.items() if v is not None}
