# src/graph/builder.py - v1
"""Graph builder: turns a GraphSnapshot into a NetworkX MultiDiGraph.

A multigraph is required because parallel relationships between the same
ordered pair are legal. Edge keys are relationship ids, which the GraphML
writer emits as ``<edge id>``.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import networkx as nx

from osintgraph.core.models import Entity, GraphSnapshot, Relationship

logger = logging.getLogger(__name__)

_NODE_STRUCTURAL = {"id"}
_EDGE_STRUCTURAL = {"id", "source_id", "target_id"}

# Characters outside the XML 1.0 Char production.
_XML_INVALID = re.compile(
    r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def build_investigation_graph(
    snapshot: GraphSnapshot,
    tag_separator: str = ";",
) -> nx.MultiDiGraph:
    """Build a directed multigraph from a snapshot.

    Node and edge attributes are flattened to GraphML-compatible scalars:
    tags joined with ``tag_separator``, metadata as a JSON string, absent
    optional values dropped.

    Args:
        snapshot: Store snapshot to convert.
        tag_separator: Join character for entity tags.

    Returns:
        MultiDiGraph keyed by entity id, edge keys = relationship ids.
    """
    graph = nx.MultiDiGraph()
    for entity in snapshot.entities:
        graph.add_node(xml_safe(entity.id), **entity_attributes(entity, tag_separator))

    skipped = 0
    for rel in snapshot.relationships:
        source, target = xml_safe(rel.source_id), xml_safe(rel.target_id)
        if source not in graph or target not in graph:
            skipped += 1
            continue
        graph.add_edge(
            source, target, key=xml_safe(rel.id),
            **relationship_attributes(rel),
        )
    if skipped:
        logger.warning("Skipped %d relationships with missing endpoints", skipped)

    logger.debug(
        "Built investigation graph: %d nodes, %d edges",
        graph.number_of_nodes(), graph.number_of_edges(),
    )
    return graph


def entity_attributes(entity: Entity, tag_separator: str = ";") -> dict[str, Any]:
    data = entity.model_dump(mode="json", exclude=_NODE_STRUCTURAL)
    data["tags"] = tag_separator.join(entity.tags)
    return _flatten(data)


def relationship_attributes(rel: Relationship) -> dict[str, Any]:
    return _flatten(rel.model_dump(mode="json", exclude=_EDGE_STRUCTURAL))


def _flatten(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for k, v in data.items():
        if v is None:
            continue
        if k == "metadata":
            if not v:
                continue
            v = json.dumps(v, ensure_ascii=False, sort_keys=True)
        elif isinstance(v, (list, dict)):
            v = json.dumps(v, ensure_ascii=False)
        if isinstance(v, str):
            v = xml_safe(v)
        out[k] = v
    return out


def xml_safe(text: str) -> str:
    """Drop control characters and lone surrogates that XML 1.0 cannot carry."""
    return _XML_INVALID.sub("", text)
