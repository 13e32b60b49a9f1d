# src/project/models.py - v1
"""Project file models: ProjectFile, AttachmentRecord, ProjectMetadata.

A project file is the JSON export document plus an ``attachments`` list,
so plain JSON exports load as projects with no attachments.
"""

from __future__ import annotations

import base64
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from osintgraph.core.models import (
    Attachment,
    Entity,
    GraphSnapshot,
    Relationship,
    file_type_for,
    utcnow,
)


class AttachmentRecord(BaseModel):
    """Attachment as persisted: content travels as base64 text."""

    id: str
    node_id: str
    filename: str
    file_type: str | None = None
    created_at: datetime | None = None
    content_base64: str

    @classmethod
    def from_attachment(cls, attachment: Attachment) -> AttachmentRecord:
        return cls(
            id=attachment.id,
            node_id=attachment.node_id,
            filename=attachment.filename,
            file_type=attachment.file_type,
            created_at=attachment.created_at,
            content_base64=attachment.content_base64,
        )

    def to_attachment(self) -> Attachment:
        """Decode into an Attachment.

        Raises:
            ValueError: content_base64 is not valid base64.
        """
        try:
            content = base64.b64decode(self.content_base64, validate=True)
        except ValueError as exc:  # binascii.Error or non-ASCII input
            raise ValueError(f"attachment {self.id}: invalid base64 content") from exc
        return Attachment(
            id=self.id,
            node_id=self.node_id,
            filename=self.filename,
            file_type=(
                self.file_type if self.file_type is not None
                else file_type_for(self.filename)
            ),
            content=content,
            created_at=self.created_at or utcnow(),
        )


class ProjectFile(BaseModel):
    """On-disk project document."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    project_name: str = "Untitled"
    saved_at: datetime | None = None
    format_version: str = "1.0.0"
    nodes: list[Entity] = Field(
        default_factory=list,
        validation_alias=AliasChoices("nodes", "entities"),
    )
    relationships: list[Relationship] = Field(default_factory=list)
    attachments: list[AttachmentRecord] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_layout(cls, data: Any) -> Any:
        """Read files written by the desktop application.

        Those carry ``metadata: {name, updated_at, version}`` instead of the
        top-level fields and name the entity type ``node_type``.
        """
        if not isinstance(data, dict):
            return data
        data = dict(data)
        meta = data.get("metadata")
        if isinstance(meta, dict):
            data.setdefault("project_name", meta.get("name") or "Untitled")
            if meta.get("updated_at"):
                data.setdefault("saved_at", meta["updated_at"])
            if meta.get("version"):
                data.setdefault("format_version", meta["version"])
        nodes = data.get("nodes")
        if isinstance(nodes, list):
            data["nodes"] = [
                _rename(n, "node_type", "entity_type") for n in nodes
            ]
        return data

    def to_snapshot(self) -> GraphSnapshot:
        """Convert to a GraphSnapshot (attachments decoded).

        Raises:
            ValueError: An attachment carries invalid base64.
        """
        return GraphSnapshot(
            entities=list(self.nodes),
            relationships=list(self.relationships),
            attachments=[a.to_attachment() for a in self.attachments],
        )


class ProjectMetadata(BaseModel):
    """Summary returned by project save/load."""

    project_name: str
    entity_count: int = 0
    relationship_count: int = 0
    attachment_count: int = 0
    saved_at: datetime | None = None
    format_version: str = "1.0.0"


def _rename(node: Any, old: str, new: str) -> Any:
    if isinstance(node, dict) and old in node and new not in node:
        node = dict(node)
        node[new] = node.pop(old)
    return node
