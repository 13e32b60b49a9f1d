# src/graph/exporters/graphml_exporter.py - v1
"""GraphML graph exporter for standard interchange.

networkx declares every ``<key>`` (scoped to node or edge) ahead of the
graph element, as GraphML requires.
"""

from __future__ import annotations

import io

import networkx as nx

from osintgraph.core.models import GraphSnapshot
from osintgraph.graph.base_graph_exporter import BaseGraphExporter
from osintgraph.graph.builder import build_investigation_graph


def render_graphml(snapshot: GraphSnapshot, tag_separator: str = ";") -> str:
    graph = build_investigation_graph(snapshot, tag_separator)
    buf = io.BytesIO()
    nx.write_graphml(graph, buf, encoding="utf-8", prettyprint=True)
    return buf.getvalue().decode("utf-8")


class GraphMLExporter(BaseGraphExporter):
    """Export graph to GraphML format."""

    def __init__(self, tag_separator: str = ";") -> None:
        self._tag_separator = tag_separator

    @property
    def format_name(self) -> str:
        return "graphml"

    @property
    def file_extension(self) -> str:
        return ".graphml"

    def render(self, snapshot: GraphSnapshot) -> str:
        return render_graphml(snapshot, self._tag_separator)
