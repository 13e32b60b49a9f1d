# src/graph/exporters/__init__.py - v1
"""JSON, CSV and GraphML exporters."""
