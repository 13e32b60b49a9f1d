# src/__init__.py - v1
"""osintgraph: in-memory investigation graph store."""

from osintgraph.version import __version__

__all__ = ["__version__"]
