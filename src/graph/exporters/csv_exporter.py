# src/graph/exporters/csv_exporter.py - v1
"""CSV graph exporter.

One file, two sections separated by a blank line: entities first, then
relationships, each with its own header row. Quoting follows the csv module
(minimal quoting, embedded quotes doubled).
"""

from __future__ import annotations

import csv
import io

from osintgraph.core.models import Entity, GraphSnapshot, Relationship
from osintgraph.graph.base_graph_exporter import BaseGraphExporter

ENTITY_COLUMNS = [
    "id", "type", "label", "description", "tags",
    "confidence", "created_at", "updated_at",
]
RELATIONSHIP_COLUMNS = [
    "id", "source_id", "target_id", "relation_type", "description",
    "weight", "confidence", "source", "created_at",
]


def entity_row(entity: Entity, tag_separator: str = ";") -> list[str]:
    return [
        entity.id,
        entity.entity_type.value,
        entity.label,
        entity.description or "",
        tag_separator.join(entity.tags),
        str(entity.confidence),
        entity.created_at.isoformat(),
        entity.updated_at.isoformat(),
    ]


def relationship_row(rel: Relationship) -> list[str]:
    return [
        rel.id,
        rel.source_id,
        rel.target_id,
        rel.relation_type.value,
        rel.description or "",
        str(rel.weight),
        str(rel.confidence),
        rel.source or "",
        rel.created_at.isoformat(),
    ]


def render_entities_csv(snapshot: GraphSnapshot, tag_separator: str = ";") -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(ENTITY_COLUMNS)
    for entity in snapshot.entities:
        writer.writerow(entity_row(entity, tag_separator))
    return buf.getvalue()


def render_relationships_csv(snapshot: GraphSnapshot) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(RELATIONSHIP_COLUMNS)
    for rel in snapshot.relationships:
        writer.writerow(relationship_row(rel))
    return buf.getvalue()


def render_csv(snapshot: GraphSnapshot, tag_separator: str = ";") -> str:
    """Both sections in one document."""
    return (
        render_entities_csv(snapshot, tag_separator)
        + "\n"
        + render_relationships_csv(snapshot)
    )


class CsvExporter(BaseGraphExporter):
    """Export graph as a two-section CSV file."""

    def __init__(self, tag_separator: str = ";") -> None:
        self._tag_separator = tag_separator

    @property
    def format_name(self) -> str:
        return "csv"

    @property
    def file_extension(self) -> str:
        return ".csv"

    def render(self, snapshot: GraphSnapshot) -> str:
        return render_csv(snapshot, self._tag_separator)
