# src/graph/exporters/json_exporter.py - v1
"""JSON graph exporter.

Output is the project-file shape without attachments, so a JSON export can
be loaded back as a project.
"""

from __future__ import annotations

import json
from typing import Any

from osintgraph.core.models import GraphSnapshot
from osintgraph.graph.base_graph_exporter import BaseGraphExporter

FORMAT_VERSION = "1.0.0"


def graph_document(
    snapshot: GraphSnapshot,
    project_name: str = "Exported Data",
    format_version: str = FORMAT_VERSION,
) -> dict[str, Any]:
    """Build the ``{metadata..., nodes, relationships}`` document."""
    return {
        "project_name": project_name,
        "saved_at": snapshot.taken_at.isoformat(),
        "format_version": format_version,
        "nodes": [e.model_dump(mode="json") for e in snapshot.entities],
        "relationships": [r.model_dump(mode="json") for r in snapshot.relationships],
    }


def render_json(
    snapshot: GraphSnapshot,
    project_name: str = "Exported Data",
    format_version: str = FORMAT_VERSION,
) -> str:
    doc = graph_document(snapshot, project_name, format_version)
    return json.dumps(doc, ensure_ascii=False, indent=2)


class JsonExporter(BaseGraphExporter):
    """Export graph to the JSON nodes/relationships document."""

    def __init__(
        self,
        project_name: str = "Exported Data",
        format_version: str = FORMAT_VERSION,
    ) -> None:
        self._project_name = project_name
        self._format_version = format_version

    @property
    def format_name(self) -> str:
        return "json"

    @property
    def file_extension(self) -> str:
        return ".json"

    def render(self, snapshot: GraphSnapshot) -> str:
        return render_json(snapshot, self._project_name, self._format_version)
