# src/graph/base_graph_exporter.py - v1
"""Abstract graph export interface.

Exporters render a GraphSnapshot to text without touching the store, then
write it as UTF-8 in one piece. Callers take the snapshot under the store's
read lock and export outside it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from osintgraph.core.files import write_text_file
from osintgraph.core.models import GraphSnapshot

logger = logging.getLogger(__name__)


class BaseGraphExporter(ABC):
    """Unified interface for investigation graph export formats."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Export format identifier (e.g., 'json', 'graphml')."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Output file extension (e.g., '.json', '.graphml')."""

    @abstractmethod
    def render(self, snapshot: GraphSnapshot) -> str:
        """Serialize the snapshot to text."""

    def export(self, snapshot: GraphSnapshot, output_path: str | Path) -> str:
        """Render and write to ``output_path``, return the path written.

        Raises:
            GraphIOError: The file could not be written.
        """
        path = write_text_file(output_path, self.render(snapshot))
        logger.info(
            "Exported %s: %d entities, %d relationships -> %s",
            self.format_name, len(snapshot.entities),
            len(snapshot.relationships), path,
        )
        return str(path)
