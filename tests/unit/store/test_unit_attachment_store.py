# tests/unit/store/test_unit_attachment_store.py - v1
"""Tests for store/attachment_store.py."""

from __future__ import annotations

import pytest

from osintgraph.core.errors import NotFoundError, ValidationError
from osintgraph.store.attachment_store import AttachmentStore
from osintgraph.store.entity_store import EntityStore


@pytest.fixture
def entities() -> EntityStore:
    return EntityStore()


@pytest.fixture
def attachments(entities) -> AttachmentStore:
    return AttachmentStore(entities)


class TestAttachmentStore:
    def test_save_and_get(self, entities, attachments):
        eid = entities.create("Person", "Alice")
        aid = attachments.save(eid, "Photo.PNG", b"\x89PNG")
        att = attachments.get(aid)
        assert att.node_id == eid
        assert att.file_type == "png"
        assert att.content == b"\x89PNG"
        assert att.size_bytes == 4

    def test_empty_content_allowed(self, entities, attachments):
        eid = entities.create("Person", "Alice")
        aid = attachments.save(eid, "empty.txt", b"")
        assert attachments.get(aid).size_bytes == 0

    def test_unknown_owner(self, attachments):
        with pytest.raises(NotFoundError, match="Entity not found"):
            attachments.save("ghost", "x.txt", b"x")

    def test_empty_filename(self, entities, attachments):
        eid = entities.create("Person", "Alice")
        with pytest.raises(ValidationError, match="filename"):
            attachments.save(eid, "  ", b"x")

    def test_content_must_be_bytes(self, entities, attachments):
        eid = entities.create("Person", "Alice")
        with pytest.raises(ValidationError, match="bytes"):
            attachments.save(eid, "x.txt", "text")

    def test_list_for_node(self, entities, attachments):
        a = entities.create("Person", "A")
        b = entities.create("Person", "B")
        first = attachments.save(a, "1.txt", b"1")
        attachments.save(b, "2.txt", b"2")
        second = attachments.save(a, "3.txt", b"3")
        assert [x.id for x in attachments.list_for_node(a)] == [first, second]
        assert attachments.list_for_node("ghost") == []

    def test_delete_requires_owner(self, entities, attachments):
        a = entities.create("Person", "A")
        b = entities.create("Person", "B")
        aid = attachments.save(a, "x.txt", b"x")
        with pytest.raises(NotFoundError):
            attachments.delete(aid, b)
        assert attachments.get(aid) is not None
        attachments.delete(aid, a)
        assert attachments.get(aid) is None

    def test_delete_missing(self, entities, attachments):
        a = entities.create("Person", "A")
        with pytest.raises(NotFoundError, match="Attachment not found"):
            attachments.delete("ghost", a)

    def test_delete_for_node(self, entities, attachments):
        a = entities.create("Person", "A")
        attachments.save(a, "1.txt", b"1")
        attachments.save(a, "2.txt", b"2")
        assert attachments.delete_for_node(a) == 2
        assert len(attachments) == 0
