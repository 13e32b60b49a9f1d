# src/api/models.py - v1
"""Command-level models: request records, AttachmentData, CommandResult.

Requests carry entity and relation types as plain strings, the way a UI
sends them; the store converts them to the closed enums.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from osintgraph.core.errors import GraphStoreError
from osintgraph.core.models import DEFAULT_IMAGE_EXTENSIONS, Attachment


class CreateNodeRequest(BaseModel):
    entity_type: str = Field(validation_alias=AliasChoices("entity_type", "node_type"))
    label: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    confidence: float | None = None
    source: str | None = None
    metadata: dict[str, Any] | None = None


class UpdateNodeRequest(BaseModel):
    id: str
    label: str | None = None
    description: str | None = None
    tags: list[str] | None = None
    confidence: float | None = None
    source: str | None = None
    metadata: dict[str, Any] | None = None


class CreateRelationshipRequest(BaseModel):
    source_id: str
    target_id: str
    relation_type: str
    description: str | None = None
    weight: float | None = None
    confidence: float | None = None
    source: str | None = None
    metadata: dict[str, Any] | None = None


class UpdateRelationshipRequest(BaseModel):
    id: str
    relation_type: str | None = None
    description: str | None = None
    weight: float | None = None
    confidence: float | None = None
    source: str | None = None
    metadata: dict[str, Any] | None = None


class SaveAttachmentRequest(BaseModel):
    node_id: str
    filename: str
    content_base64: str


class AttachmentData(BaseModel):
    """Attachment as handed to a UI: content base64-encoded."""

    id: str
    node_id: str
    filename: str
    file_type: str
    is_image: bool
    size_bytes: int
    created_at: datetime
    content_base64: str

    @classmethod
    def from_attachment(
        cls,
        attachment: Attachment,
        image_extensions: frozenset[str] = DEFAULT_IMAGE_EXTENSIONS,
    ) -> AttachmentData:
        return cls(
            id=attachment.id,
            node_id=attachment.node_id,
            filename=attachment.filename,
            file_type=attachment.file_type,
            is_image=attachment.is_image(image_extensions),
            size_bytes=attachment.size_bytes,
            created_at=attachment.created_at,
            content_base64=attachment.content_base64,
        )


class CommandError(BaseModel):
    kind: str
    message: str


class CommandResult(BaseModel):
    """Outcome of one command: ``data`` on success, ``error`` otherwise."""

    ok: bool
    data: Any = None
    error: CommandError | None = None

    @classmethod
    def success(cls, data: Any = None) -> CommandResult:
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, exc: GraphStoreError) -> CommandResult:
        return cls(ok=False, error=CommandError(kind=exc.kind, message=exc.message))
