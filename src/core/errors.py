# src/core/errors.py - v1
"""Error hierarchy for the graph store.

Every failure the store can report is a GraphStoreError subclass carrying a
``kind`` string that the command layer surfaces to callers unchanged.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError


class GraphStoreError(Exception):
    """Base class for all reportable store failures."""

    kind: str = "GraphStoreError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(GraphStoreError):
    """A referenced entity, relationship or attachment does not exist."""

    kind = "NotFound"


class ValidationError(GraphStoreError):
    """Input violates a model invariant (empty label, bad confidence, unknown type)."""

    kind = "ValidationError"


class GraphIOError(GraphStoreError):
    """Reading or writing a file failed."""

    kind = "IOError"


class ParseError(GraphStoreError):
    """A project or import file is malformed."""

    kind = "ParseError"


def describe_pydantic_error(exc: PydanticValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "value"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)
