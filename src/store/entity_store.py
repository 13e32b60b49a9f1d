# src/store/entity_store.py - v1
"""Entity collection: create, read, update, delete, list and search.

Not thread-safe on its own; GraphStore serializes access. Deleting an
entity here does not cascade, GraphStore owns that invariant.
"""

from __future__ import annotations

import logging
from typing import Any

from osintgraph.core.errors import NotFoundError, ValidationError
from osintgraph.core.ids import IdentityAllocator
from osintgraph.core.models import Entity, EntityType, parse_entity_type, utcnow
from osintgraph.store.validation import build_record, supplied

logger = logging.getLogger(__name__)


class EntityStore:
    """Insertion-ordered map of entity id to Entity."""

    def __init__(
        self,
        allocator: IdentityAllocator | None = None,
        default_confidence: float = 1.0,
    ) -> None:
        self._allocator = allocator or IdentityAllocator()
        self._default_confidence = default_confidence
        self._entities: dict[str, Entity] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def contains(self, entity_id: str) -> bool:
        return entity_id in self._entities

    def create(
        self,
        entity_type: EntityType | str,
        label: str,
        description: str | None = None,
        tags: list[str] | None = None,
        confidence: float | None = None,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        """Create an entity and return its id.

        Raises:
            ValidationError: Unknown type, empty label or confidence outside [0, 1].
        """
        etype = parse_entity_type(entity_type)
        now = utcnow()
        entity = build_record(
            Entity,
            {
                "id": self._allocator.allocate(self.contains),
                "entity_type": etype,
                "label": label,
                "description": description,
                "tags": tags or [],
                "confidence": (
                    self._default_confidence if confidence is None else confidence
                ),
                "source": source,
                "metadata": metadata or {},
                "created_at": now,
                "updated_at": now,
            },
        )
        self._entities[entity.id] = entity
        logger.debug("Created entity %s (%s)", entity.id, etype.value)
        return entity.id

    def insert(self, entity: Entity) -> None:
        """Insert a fully formed entity, keeping its id and timestamps."""
        if entity.id in self._entities:
            raise ValidationError(f"Duplicate entity id: {entity.id}")
        self._entities[entity.id] = entity.model_copy(deep=True)

    def get(self, entity_id: str) -> Entity | None:
        entity = self._entities.get(entity_id)
        return entity.model_copy(deep=True) if entity is not None else None

    def update(
        self,
        entity_id: str,
        label: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
        confidence: float | None = None,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Entity:
        """Replace only the supplied fields and refresh ``updated_at``.

        An empty description or source clears it.

        Raises:
            NotFoundError: Unknown id.
            ValidationError: Invalid new value; the entity is left unchanged.
        """
        current = self._require(entity_id)
        changes = supplied(
            label=label,
            description=description,
            tags=tags,
            confidence=confidence,
            source=source,
            metadata=metadata,
        )
        changes["updated_at"] = utcnow()
        updated = build_record(Entity, {**current.model_dump(), **changes})
        self._entities[entity_id] = updated
        logger.debug("Updated entity %s fields=%s", entity_id, sorted(changes))
        return updated.model_copy(deep=True)

    def delete(self, entity_id: str) -> None:
        """Remove one entity.

        Raises:
            NotFoundError: Unknown id.
        """
        self._require(entity_id)
        del self._entities[entity_id]
        logger.debug("Deleted entity %s", entity_id)

    def list_all(self) -> list[Entity]:
        return [e.model_copy(deep=True) for e in self._entities.values()]

    def search(self, query: str) -> list[Entity]:
        """Case-insensitive substring match over label, description and tags."""
        needle = query.strip().lower()
        if not needle:
            return self.list_all()
        return [
            e.model_copy(deep=True)
            for e in self._entities.values()
            if _matches(e, needle)
        ]

    def clear(self) -> None:
        self._entities.clear()

    def _require(self, entity_id: str) -> Entity:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise NotFoundError(f"Entity not found: {entity_id}")
        return entity


def _matches(entity: Entity, needle: str) -> bool:
    if needle in entity.label.lower():
        return True
    if entity.description and needle in entity.description.lower():
        return True
    return any(needle in tag.lower() for tag in entity.tags)
