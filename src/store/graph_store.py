# src/store/graph_store.py - v1
"""GraphStore facade: one lock boundary over the entity, relationship and
attachment stores.

Mutations take the write side of a ReadWriteLock, reads take the read side,
so no reader ever sees a relationship pointing at a just-deleted entity.
Instances are passed explicitly to whoever needs them; there is no
module-level store.
"""

from __future__ import annotations

import logging
from typing import Any

from osintgraph.config.settings import Settings
from osintgraph.core.errors import GraphStoreError, NotFoundError, ValidationError
from osintgraph.core.ids import IdentityAllocator
from osintgraph.core.models import (
    Attachment,
    CascadeResult,
    Entity,
    EntityType,
    GraphSnapshot,
    Relationship,
    RelationType,
    StoreCounts,
)
from osintgraph.core.rwlock import ReadWriteLock
from osintgraph.store.attachment_store import AttachmentStore
from osintgraph.store.entity_store import EntityStore
from osintgraph.store.relationship_store import RelationshipStore

logger = logging.getLogger(__name__)


class GraphStore:
    """Authoritative in-memory investigation graph."""

    def __init__(
        self,
        settings: Settings | None = None,
        allocator: IdentityAllocator | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._allocator = allocator or IdentityAllocator()
        self._lock = ReadWriteLock()
        self._entities, self._relationships, self._attachments = self._new_stores()

    @property
    def settings(self) -> Settings:
        return self._settings

    # --- Entities ---

    def create_entity(
        self,
        entity_type: EntityType | str,
        label: str,
        description: str | None = None,
        tags: list[str] | None = None,
        confidence: float | None = None,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        with self._lock.write():
            return self._entities.create(
                entity_type, label,
                description=description, tags=tags, confidence=confidence,
                source=source, metadata=metadata,
            )

    def get_entity(self, entity_id: str) -> Entity | None:
        with self._lock.read():
            return self._entities.get(entity_id)

    def update_entity(
        self,
        entity_id: str,
        label: str | None = None,
        description: str | None = None,
        tags: list[str] | None = None,
        confidence: float | None = None,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Entity:
        with self._lock.write():
            return self._entities.update(
                entity_id,
                label=label, description=description, tags=tags,
                confidence=confidence, source=source, metadata=metadata,
            )

    def delete_entity(self, entity_id: str) -> CascadeResult:
        """Delete an entity with its relationships and attachments.

        All three removals happen inside one write-locked section. Once the
        existence check passes nothing below can fail.

        Raises:
            NotFoundError: Unknown id; nothing is removed.
        """
        with self._lock.write():
            if not self._entities.contains(entity_id):
                raise NotFoundError(f"Entity not found: {entity_id}")
            rels = self._relationships.delete_for_node(entity_id)
            atts = self._attachments.delete_for_node(entity_id)
            self._entities.delete(entity_id)
        logger.info(
            "Deleted entity %s (cascade: %d relationships, %d attachments)",
            entity_id, rels, atts,
        )
        return CascadeResult(
            entity_id=entity_id,
            relationships_deleted=rels,
            attachments_deleted=atts,
        )

    def all_entities(self) -> list[Entity]:
        with self._lock.read():
            return self._entities.list_all()

    def search_entities(self, query: str) -> list[Entity]:
        with self._lock.read():
            return self._entities.search(query)

    # --- Relationships ---

    def create_relationship(
        self,
        source_id: str,
        target_id: str,
        relation_type: RelationType | str,
        description: str | None = None,
        weight: float | None = None,
        confidence: float | None = None,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> str:
        with self._lock.write():
            return self._relationships.create(
                source_id, target_id, relation_type,
                description=description, weight=weight, confidence=confidence,
                source=source, metadata=metadata,
            )

    def get_relationship(self, relationship_id: str) -> Relationship | None:
        with self._lock.read():
            return self._relationships.get(relationship_id)

    def update_relationship(
        self,
        relationship_id: str,
        relation_type: RelationType | str | None = None,
        description: str | None = None,
        weight: float | None = None,
        confidence: float | None = None,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Relationship:
        with self._lock.write():
            return self._relationships.update(
                relationship_id,
                relation_type=relation_type, description=description,
                weight=weight, confidence=confidence, source=source,
                metadata=metadata,
            )

    def delete_relationship(self, relationship_id: str) -> None:
        with self._lock.write():
            self._relationships.delete(relationship_id)

    def all_relationships(self) -> list[Relationship]:
        """Every relationship whose endpoints both exist."""
        with self._lock.read():
            return self._live_relationships()

    def relationships_for_node(self, node_id: str) -> list[Relationship]:
        with self._lock.read():
            return self._relationships.list_for_node(node_id)

    # --- Attachments ---

    def save_attachment(self, node_id: str, filename: str, content: bytes) -> str:
        with self._lock.write():
            return self._attachments.save(node_id, filename, content)

    def get_attachment(self, attachment_id: str) -> Attachment | None:
        with self._lock.read():
            return self._attachments.get(attachment_id)

    def list_attachments(self, node_id: str) -> list[Attachment]:
        with self._lock.read():
            return self._attachments.list_for_node(node_id)

    def delete_attachment(self, attachment_id: str, node_id: str) -> None:
        with self._lock.write():
            self._attachments.delete(attachment_id, node_id)

    # --- Whole-store operations ---

    def clear_all(self) -> None:
        with self._lock.write():
            self._entities.clear()
            self._relationships.clear()
            self._attachments.clear()
        logger.info("Cleared all graph data")

    def counts(self) -> StoreCounts:
        with self._lock.read():
            return StoreCounts(
                entities=len(self._entities),
                relationships=len(self._relationships),
                attachments=len(self._attachments),
            )

    def snapshot(self) -> GraphSnapshot:
        """Consistent copy of all three collections taken under one read lock."""
        with self._lock.read():
            return GraphSnapshot(
                entities=self._entities.list_all(),
                relationships=self._live_relationships(),
                attachments=self._attachments.list_all(),
            )

    def replace_all(self, snapshot: GraphSnapshot) -> StoreCounts:
        """Swap the store contents for ``snapshot``.

        The snapshot is loaded into fresh stores first; the live store is
        only touched once that succeeded.

        Raises:
            ValidationError: Duplicate ids, dangling endpoints or owners.
        """
        entities, relationships, attachments = self._new_stores()
        try:
            for entity in snapshot.entities:
                entities.insert(entity)
            for rel in snapshot.relationships:
                relationships.insert(rel)
            for att in snapshot.attachments:
                attachments.insert(att)
        except GraphStoreError as exc:
            raise ValidationError(f"Snapshot rejected: {exc.message}") from exc

        with self._lock.write():
            self._entities = entities
            self._relationships = relationships
            self._attachments = attachments
        counts = StoreCounts(
            entities=len(entities),
            relationships=len(relationships),
            attachments=len(attachments),
        )
        logger.info(
            "Replaced graph contents: %d entities, %d relationships, %d attachments",
            counts.entities, counts.relationships, counts.attachments,
        )
        return counts

    # --- Internals ---

    def _new_stores(self) -> tuple[EntityStore, RelationshipStore, AttachmentStore]:
        s = self._settings
        entities = EntityStore(
            self._allocator, default_confidence=s.default_entity_confidence
        )
        relationships = RelationshipStore(
            entities,
            self._allocator,
            default_confidence=s.default_relationship_confidence,
            default_weight=s.default_relationship_weight,
            allow_self_relationships=s.allow_self_relationships,
            allow_duplicate_relationships=s.allow_duplicate_relationships,
        )
        attachments = AttachmentStore(entities, self._allocator)
        return entities, relationships, attachments

    def _live_relationships(self) -> list[Relationship]:
        return [
            r for r in self._relationships.list_all()
            if self._entities.contains(r.source_id)
            and self._entities.contains(r.target_id)
        ]
