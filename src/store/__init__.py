# src/store/__init__.py - v1
"""In-memory entity, relationship and attachment stores."""

from osintgraph.store.graph_store import GraphStore

__all__ = ["GraphStore"]
