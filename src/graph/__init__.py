# src/graph/__init__.py - v1
"""Graph building and export."""
