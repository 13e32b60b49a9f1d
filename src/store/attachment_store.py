# src/store/attachment_store.py - v1
"""Binary attachments keyed by owning entity."""

from __future__ import annotations

import logging

from osintgraph.core.errors import NotFoundError, ValidationError
from osintgraph.core.ids import IdentityAllocator
from osintgraph.core.models import Attachment, file_type_for, utcnow
from osintgraph.store.entity_store import EntityStore
from osintgraph.store.validation import build_record

logger = logging.getLogger(__name__)


class AttachmentStore:
    """Attachment records; each one references exactly one entity."""

    def __init__(
        self,
        entities: EntityStore,
        allocator: IdentityAllocator | None = None,
    ) -> None:
        self._entities = entities
        self._allocator = allocator or IdentityAllocator()
        self._attachments: dict[str, Attachment] = {}

    def __len__(self) -> int:
        return len(self._attachments)

    def contains(self, attachment_id: str) -> bool:
        return attachment_id in self._attachments

    def save(self, node_id: str, filename: str, content: bytes) -> str:
        """Store ``content`` for entity ``node_id`` and return the attachment id.

        ``file_type`` is the lower-cased filename extension, empty if absent.

        Raises:
            NotFoundError: The owning entity does not exist.
            ValidationError: Empty filename or non-bytes content.
        """
        if not self._entities.contains(node_id):
            raise NotFoundError(f"Entity not found: {node_id}")
        if not isinstance(content, (bytes, bytearray)):
            raise ValidationError("Attachment content must be bytes")
        attachment = build_record(
            Attachment,
            {
                "id": self._allocator.allocate(self.contains),
                "node_id": node_id,
                "filename": filename,
                "file_type": file_type_for(filename),
                "content": bytes(content),
                "created_at": utcnow(),
            },
        )
        self._attachments[attachment.id] = attachment
        logger.debug(
            "Saved attachment %s for %s (%s, %d bytes)",
            attachment.id, node_id, attachment.file_type or "no extension",
            attachment.size_bytes,
        )
        return attachment.id

    def insert(self, attachment: Attachment) -> None:
        """Insert a fully formed attachment, keeping its id."""
        if attachment.id in self._attachments:
            raise ValidationError(f"Duplicate attachment id: {attachment.id}")
        if not self._entities.contains(attachment.node_id):
            raise NotFoundError(f"Entity not found: {attachment.node_id}")
        self._attachments[attachment.id] = attachment.model_copy(deep=True)

    def get(self, attachment_id: str) -> Attachment | None:
        att = self._attachments.get(attachment_id)
        return att.model_copy(deep=True) if att is not None else None

    def list_for_node(self, node_id: str) -> list[Attachment]:
        return [
            a.model_copy(deep=True)
            for a in self._attachments.values()
            if a.node_id == node_id
        ]

    def list_all(self) -> list[Attachment]:
        return [a.model_copy(deep=True) for a in self._attachments.values()]

    def delete(self, attachment_id: str, node_id: str) -> None:
        """Delete an attachment owned by ``node_id``.

        Raises:
            NotFoundError: No such attachment, or it belongs to another entity.
        """
        att = self._attachments.get(attachment_id)
        if att is None or att.node_id != node_id:
            raise NotFoundError(
                f"Attachment not found: {attachment_id} (entity {node_id})"
            )
        del self._attachments[attachment_id]
        logger.debug("Deleted attachment %s from %s", attachment_id, node_id)

    def delete_for_node(self, node_id: str) -> int:
        doomed = [aid for aid, a in self._attachments.items() if a.node_id == node_id]
        for aid in doomed:
            del self._attachments[aid]
        return len(doomed)

    def clear(self) -> None:
        self._attachments.clear()
