# tests/integration/test_int_investigation_flow.py - v1
"""End-to-end investigation flow through the command surface.

Builds a small case, exports it in every format, saves and reloads the
project, and hammers one store from several threads.
"""

from __future__ import annotations

import csv
import io
import json
import threading

import pytest

from osintgraph.api.commands import GraphCommands
from osintgraph.core.errors import NotFoundError
from osintgraph.store.graph_store import GraphStore


class TestInvestigationFlow:
    def test_controls_then_delete_source(self, settings, tmp_path):
        commands = GraphCommands(GraphStore(settings))

        a = commands.invoke("create_node", {"entityType": "Person", "label": "A"}).data
        b = commands.invoke("create_node", {"entityType": "CryptoWallet", "label": "B"}).data
        rel = commands.invoke("create_relationship", {
            "sourceId": a, "targetId": b, "relationType": "Controls", "confidence": 0.9,
        })
        assert rel.ok

        node_rels = commands.invoke("get_node_relationships", {"nodeId": b}).data
        assert [(r.source_id, r.target_id, r.confidence) for r in node_rels] == [(a, b, 0.9)]

        deleted = commands.invoke("delete_node", {"id": a})
        assert deleted.data.relationships_deleted == 1
        assert commands.invoke("get_relationships").data == []
        assert [e.id for e in commands.invoke("get_all_nodes").data] == [b]

    def test_export_save_reload(self, store, sample_graph, settings, tmp_path):
        commands = GraphCommands(store)
        out = tmp_path / "exports"

        for fmt in ("json", "csv", "graphml"):
            result = commands.invoke(f"export_{fmt}", {"filePath": str(out / f"case.{fmt}")})
            assert result.ok, result.error

        doc = json.loads((out / "case.json").read_text(encoding="utf-8"))
        assert {n["id"] for n in doc["nodes"]} == {
            sample_graph.alice, sample_graph.wallet, sample_graph.acme, sample_graph.domain,
        }
        entity_section = (out / "case.csv").read_text(encoding="utf-8").split("\n\n")[0]
        rows = list(csv.DictReader(io.StringIO(entity_section)))
        assert len(rows) == 4
        assert "<key " in (out / "case.graphml").read_text(encoding="utf-8")

        project = tmp_path / "case.project.json"
        assert commands.invoke("save_project", {
            "filePath": str(project), "projectName": "Case 42",
        }).ok

        commands.invoke("clear_all_data")
        assert commands.invoke("get_all_nodes").data == []

        loaded = commands.invoke("load_project", {"filePath": str(project)})
        assert loaded.data.project_name == "Case 42"
        photo = commands.invoke("list_attachments", {"nodeId": sample_graph.alice}).data
        assert photo[0].filename == "photo.JPG"
        assert photo[0].is_image


class TestConcurrency:
    def test_parallel_writers_and_cascade(self, settings):
        store = GraphStore(settings)
        hub = store.create_entity("Organization", "Hub")
        errors: list[Exception] = []

        def worker(n: int) -> None:
            try:
                for i in range(25):
                    eid = store.create_entity("Person", f"w{n}-{i}")
                    store.create_relationship(eid, hub, "MemberOf")
                    store.save_attachment(eid, f"{i}.txt", b"x")
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert errors == []
        counts = store.counts()
        assert (counts.entities, counts.relationships, counts.attachments) == (151, 150, 150)

        result = store.delete_entity(hub)
        assert result.relationships_deleted == 150
        assert store.all_relationships() == []

    def test_readers_never_see_partial_cascade(self, settings):
        store = GraphStore(settings)
        ids = [store.create_entity("Person", f"p{i}") for i in range(40)]
        for src, dst in zip(ids, ids[1:]):
            store.create_relationship(src, dst, "ConnectedTo")
        for eid in ids:
            store.save_attachment(eid, "note.txt", b"x")

        stop = threading.Event()
        violations: list[str] = []

        def reader() -> None:
            while not stop.is_set():
                live, relationships, owners = _unfiltered_view(store)
                for rel in relationships:
                    if rel.source_id not in live or rel.target_id not in live:
                        violations.append(f"dangling {rel.id}")
                if owners != live:
                    violations.append(f"attachments {sorted(owners ^ live)}")

        readers = [threading.Thread(target=reader) for _ in range(3)]
        for t in readers:
            t.start()
        try:
            for eid in ids[::2]:
                store.delete_entity(eid)
        finally:
            stop.set()
            for t in readers:
                t.join(timeout=10)

        assert violations == []
        with pytest.raises(NotFoundError):
            store.delete_entity(ids[0])


def _unfiltered_view(store: GraphStore):
    """Raw collections under one read lock, without the live-endpoint filter."""
    with store._lock.read():
        live = {e.id for e in store._entities.list_all()}
        relationships = store._relationships.list_all()
        owners = {a.node_id for a in store._attachments.list_all()}
    return live, relationships, owners
