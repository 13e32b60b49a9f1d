# src/api/__init__.py - v1
"""Command surface: request models and GraphCommands."""
