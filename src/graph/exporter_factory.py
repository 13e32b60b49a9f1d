# src/graph/exporter_factory.py - v1
"""Factory for graph exporter instantiation.

JSON exporter is always included regardless of configuration.
"""

from __future__ import annotations

import importlib

from osintgraph.config.settings import Settings
from osintgraph.core.errors import ValidationError
from osintgraph.graph.base_graph_exporter import BaseGraphExporter

_EXPORTERS: dict[str, str] = {
    "json": "osintgraph.graph.exporters.json_exporter.JsonExporter",
    "csv": "osintgraph.graph.exporters.csv_exporter.CsvExporter",
    "graphml": "osintgraph.graph.exporters.graphml_exporter.GraphMLExporter",
}

SUPPORTED_FORMATS: tuple[str, ...] = tuple(_EXPORTERS)


def get_exporter(fmt: str, settings: Settings | None = None) -> BaseGraphExporter:
    """Instantiate the exporter for one format.

    Raises:
        ValidationError: If the format is not supported.
    """
    key = fmt.strip().lower()
    fqcn = _EXPORTERS.get(key)
    if fqcn is None:
        raise ValidationError(
            f"Unsupported export format {fmt!r}; expected one of: "
            f"{', '.join(SUPPORTED_FORMATS)}"
        )
    settings = settings or Settings()
    module_path, class_name = fqcn.rsplit(".", 1)
    cls = getattr(importlib.import_module(module_path), class_name)

    if key == "json":
        return cls(
            project_name=settings.export_project_name,
            format_version=settings.project_format_version,
        )
    return cls(tag_separator=settings.csv_tag_separator)


def create_exporters(settings: Settings | None = None) -> list[BaseGraphExporter]:
    """Create all configured graph exporters.

    JSON is always included. Additional formats come from settings; unknown
    names are skipped.
    """
    formats: set[str] = {"json"}  # Always present

    if settings is not None:
        formats.update(settings.graph_export_formats_list)

    return [
        get_exporter(fmt, settings)
        for fmt in sorted(formats)
        if fmt in _EXPORTERS
    ]
