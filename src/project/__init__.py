# src/project/__init__.py - v1
"""Project file save/load."""
