# src/store/relationship_store.py - v1
"""Relationship collection with endpoint validation against EntityStore.

Endpoints are resolved at call time, so an orphaned edge is never stored.
Self-loops and duplicate (source, target, relation_type) edges are allowed
unless the policy flags say otherwise.
"""

from __future__ import annotations

import logging
from typing import Any

from osintgraph.core.errors import NotFoundError, ValidationError
from osintgraph.core.ids import IdentityAllocator
from osintgraph.core.models import (
    Relationship,
    RelationType,
    parse_relation_type,
    utcnow,
)
from osintgraph.store.entity_store import EntityStore
from osintgraph.store.validation import build_record, supplied

logger = logging.getLogger(__name__)


class RelationshipStore:
    """Insertion-ordered map of relationship id to Relationship."""

    def __init__(
        self,
        entities: EntityStore,
        allocator: IdentityAllocator | None = None,
        default_confidence: float = 0.5,
        default_weight: float = 1.0,
        allow_self_relationships: bool = True,
        allow_duplicate_relationships: bool = True,
    ) -> None:
        self._entities = entities
        self._allocator = allocator or IdentityAllocator()
        self._default_confidence = default_confidence
        self._default_weight = default_weight
        self._allow_self = allow_self_relationships
        self._allow_duplicates = allow_duplicate_relationships
        self._relationships: dict[str, Relationship] = {}

    def __len__(self) -> int:
        return len(self._relationships)

    def contains(self, relationship_id: str) -> bool:
        return relationship_id in self._relationships

    def create(
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
        """Create a relationship between two existing entities.

        Raises:
            ValidationError: Unknown type, confidence outside [0, 1],
                non-finite weight, or an edge rejected by policy.
            NotFoundError: Either endpoint is not a current entity.
        """
        rtype = parse_relation_type(relation_type)
        self._require_endpoints(source_id, target_id)
        self._check_policy(source_id, target_id, rtype)
        now = utcnow()
        rel = build_record(
            Relationship,
            {
                "id": self._allocator.allocate(self.contains),
                "source_id": source_id,
                "target_id": target_id,
                "relation_type": rtype,
                "description": description,
                "weight": self._default_weight if weight is None else weight,
                "confidence": (
                    self._default_confidence if confidence is None else confidence
                ),
                "source": source,
                "metadata": metadata or {},
                "created_at": now,
                "updated_at": now,
            },
        )
        self._relationships[rel.id] = rel
        logger.debug(
            "Created relationship %s: %s -[%s]-> %s",
            rel.id, source_id, rtype.value, target_id,
        )
        return rel.id

    def insert(self, relationship: Relationship) -> None:
        """Insert a fully formed relationship, keeping id and timestamps.

        The self-loop and duplicate policy applies as it does for create.
        """
        if relationship.id in self._relationships:
            raise ValidationError(f"Duplicate relationship id: {relationship.id}")
        self._require_endpoints(relationship.source_id, relationship.target_id)
        self._check_policy(
            relationship.source_id, relationship.target_id, relationship.relation_type,
        )
        self._relationships[relationship.id] = relationship.model_copy(deep=True)

    def get(self, relationship_id: str) -> Relationship | None:
        rel = self._relationships.get(relationship_id)
        return rel.model_copy(deep=True) if rel is not None else None

    def update(
        self,
        relationship_id: str,
        relation_type: RelationType | str | None = None,
        description: str | None = None,
        weight: float | None = None,
        confidence: float | None = None,
        source: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> Relationship:
        """Replace only the supplied fields and refresh ``updated_at``.

        Raises:
            NotFoundError: Unknown id.
            ValidationError: Invalid new value; the relationship is unchanged.
        """
        current = self._require(relationship_id)
        changes = supplied(
            description=description,
            weight=weight,
            confidence=confidence,
            source=source,
            metadata=metadata,
        )
        if relation_type is not None:
            rtype = parse_relation_type(relation_type)
            if rtype != current.relation_type:
                self._check_policy(
                    current.source_id, current.target_id, rtype,
                    exclude_id=relationship_id,
                )
            changes["relation_type"] = rtype
        changes["updated_at"] = utcnow()
        updated = build_record(Relationship, {**current.model_dump(), **changes})
        self._relationships[relationship_id] = updated
        logger.debug("Updated relationship %s fields=%s", relationship_id, sorted(changes))
        return updated.model_copy(deep=True)

    def delete(self, relationship_id: str) -> None:
        """Remove one relationship.

        Raises:
            NotFoundError: Unknown id.
        """
        self._require(relationship_id)
        del self._relationships[relationship_id]
        logger.debug("Deleted relationship %s", relationship_id)

    def list_all(self) -> list[Relationship]:
        return [r.model_copy(deep=True) for r in self._relationships.values()]

    def list_for_node(self, node_id: str) -> list[Relationship]:
        """Relationships where node_id is the source or the target.

        Callers tell outgoing from incoming by comparing ``source_id``.
        """
        return [
            r.model_copy(deep=True)
            for r in self._relationships.values()
            if r.touches(node_id)
        ]

    def delete_for_node(self, node_id: str) -> int:
        """Delete every relationship touching node_id, return how many."""
        doomed = [rid for rid, r in self._relationships.items() if r.touches(node_id)]
        for rid in doomed:
            del self._relationships[rid]
        return len(doomed)

    def clear(self) -> None:
        self._relationships.clear()

    def _require(self, relationship_id: str) -> Relationship:
        rel = self._relationships.get(relationship_id)
        if rel is None:
            raise NotFoundError(f"Relationship not found: {relationship_id}")
        return rel

    def _require_endpoints(self, source_id: str, target_id: str) -> None:
        if not self._entities.contains(source_id):
            raise NotFoundError(f"Source entity not found: {source_id}")
        if not self._entities.contains(target_id):
            raise NotFoundError(f"Target entity not found: {target_id}")

    def _check_policy(
        self,
        source_id: str,
        target_id: str,
        relation_type: RelationType,
        exclude_id: str | None = None,
    ) -> None:
        if not self._allow_self and source_id == target_id:
            raise ValidationError(
                f"Self relationships are disabled (entity {source_id})"
            )
        if self._allow_duplicates:
            return
        for rid, r in self._relationships.items():
            if rid == exclude_id:
                continue
            if (
                r.source_id == source_id
                and r.target_id == target_id
                and r.relation_type == relation_type
            ):
                raise ValidationError(
                    f"Duplicate {relation_type.value} relationship "
                    f"{source_id} -> {target_id} (existing {rid})"
                )
