# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
Entity and relationship types are closed enums: free strings coming from a
UI are converted with parse_entity_type() / parse_relation_type().
"""

from __future__ import annotations

import base64
from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel, Field, field_validator

from osintgraph.core.errors import ValidationError

DEFAULT_IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {"jpg", "jpeg", "png", "gif", "bmp", "webp"}
)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


# === CLOSED TYPES ===


class EntityType(str, Enum):
    """Kinds of real-world objects an investigation tracks."""

    PERSON = "Person"
    ORGANIZATION = "Organization"
    CRYPTO_WALLET = "CryptoWallet"
    SOCIAL_ACCOUNT = "SocialAccount"
    DOMAIN = "Domain"
    IP_ADDRESS = "IpAddress"
    EMAIL = "Email"
    PHONE = "Phone"
    DOCUMENT = "Document"
    EVENT = "Event"


class RelationType(str, Enum):
    """Directed relationship kinds between two entities."""

    OWNS = "Owns"
    CONTROLS = "Controls"
    TRANSACTS_WITH = "TransactsWith"
    MEMBER_OF = "MemberOf"
    CONNECTED_TO = "ConnectedTo"
    SAME_AS = "SameAs"
    RELATED_TO = "RelatedTo"
    PARENT_OF = "ParentOf"
    CHILD_OF = "ChildOf"


def parse_entity_type(value: EntityType | str) -> EntityType:
    """Convert a boundary string to EntityType.

    Raises:
        ValidationError: If the value is not one of the closed set.
    """
    if isinstance(value, EntityType):
        return value
    try:
        return EntityType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in EntityType)
        raise ValidationError(
            f"Invalid entity type {value!r}; expected one of: {allowed}"
        ) from None


def parse_relation_type(value: RelationType | str) -> RelationType:
    """Convert a boundary string to RelationType.

    Raises:
        ValidationError: If the value is not one of the closed set.
    """
    if isinstance(value, RelationType):
        return value
    try:
        return RelationType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in RelationType)
        raise ValidationError(
            f"Invalid relation type {value!r}; expected one of: {allowed}"
        ) from None


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    return v if v.strip() else None


# === GRAPH RECORDS ===


class Entity(BaseModel):
    """A node in the investigation graph."""

    id: str
    entity_type: EntityType
    label: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    source: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("label")
    @classmethod
    def _label_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("label must not be empty")
        return v

    @field_validator("description", "source")
    @classmethod
    def _optional_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("tags")
    @classmethod
    def _collapse_tags(cls, v: list[str]) -> list[str]:
        """Drop blank tags and duplicates, keeping first-seen order."""
        seen: dict[str, None] = {}
        for tag in v:
            tag = tag.strip()
            if tag:
                seen.setdefault(tag, None)
        return list(seen)


class Relationship(BaseModel):
    """A directed, typed edge between two entities."""

    id: str
    source_id: str
    target_id: str
    relation_type: RelationType
    description: str | None = None
    weight: float = Field(default=1.0, allow_inf_nan=False)
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    source: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("description", "source")
    @classmethod
    def _optional_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    def touches(self, node_id: str) -> bool:
        """True if node_id is either endpoint."""
        return self.source_id == node_id or self.target_id == node_id


def file_type_for(filename: str) -> str:
    """Lower-cased extension without the dot; empty when there is none."""
    return PurePath(filename).suffix.lstrip(".").lower()


class Attachment(BaseModel):
    """Binary evidence file owned by one entity."""

    id: str
    node_id: str
    filename: str
    file_type: str = ""
    content: bytes = b""
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("filename")
    @classmethod
    def _filename_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("filename must not be empty")
        return v

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def content_base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")

    def is_image(self, image_extensions: frozenset[str] = DEFAULT_IMAGE_EXTENSIONS) -> bool:
        return self.file_type in image_extensions


# === AGGREGATES ===


class GraphSnapshot(BaseModel):
    """Consistent point-in-time copy of the whole store."""

    entities: list[Entity] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    taken_at: datetime = Field(default_factory=utcnow)


class CascadeResult(BaseModel):
    """What a cascading entity delete removed."""

    entity_id: str
    relationships_deleted: int = 0
    attachments_deleted: int = 0


class StoreCounts(BaseModel):
    """Record totals per collection."""

    entities: int = 0
    relationships: int = 0
    attachments: int = 0
