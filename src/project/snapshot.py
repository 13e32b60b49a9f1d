# src/project/snapshot.py - v1
"""Project save/load: the whole GraphStore to and from one JSON file.

Save snapshots the store under its read lock and serializes outside it.
Load parses and validates the file completely before the store is touched,
so a bad file leaves the current graph as it was.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from osintgraph.config.settings import Settings
from osintgraph.core.errors import ParseError, ValidationError, describe_pydantic_error
from osintgraph.core.files import read_text_file, write_text_file
from osintgraph.project.models import AttachmentRecord, ProjectFile, ProjectMetadata
from osintgraph.store.graph_store import GraphStore

logger = logging.getLogger(__name__)


def read_project(path: str | Path) -> ProjectFile:
    """Parse a project (or JSON export) file without touching any store.

    Raises:
        GraphIOError: The file cannot be read.
        ParseError: Invalid JSON or a document that does not match the schema.
    """
    text = read_text_file(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"{path}: malformed JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ParseError(f"{path}: expected a JSON object at top level")
    try:
        return ProjectFile.model_validate(data)
    except PydanticValidationError as exc:
        raise ParseError(f"{path}: {describe_pydantic_error(exc)}") from exc


class ProjectSnapshot:
    """Saves and restores the full contents of one GraphStore."""

    def __init__(self, store: GraphStore, settings: Settings | None = None) -> None:
        self._store = store
        self._settings = settings or store.settings

    def save(self, path: str | Path, project_name: str) -> ProjectMetadata:
        """Write every entity, relationship and attachment to ``path``.

        Raises:
            GraphIOError: The file could not be written. The store is unchanged.
        """
        snapshot = self._store.snapshot()
        project = ProjectFile(
            project_name=project_name,
            saved_at=snapshot.taken_at,
            format_version=self._settings.project_format_version,
            nodes=snapshot.entities,
            relationships=snapshot.relationships,
            attachments=[AttachmentRecord.from_attachment(a) for a in snapshot.attachments],
        )
        written = write_text_file(path, project.model_dump_json(indent=2))
        meta = _metadata(project)
        logger.info(
            "Saved project %r to %s (%d entities, %d relationships, %d attachments)",
            project_name, written, meta.entity_count,
            meta.relationship_count, meta.attachment_count,
        )
        return meta

    def load(self, path: str | Path) -> ProjectMetadata:
        """Replace the store contents with the project at ``path``.

        Original ids, timestamps and relationships are preserved.

        Raises:
            GraphIOError: The file cannot be read.
            ParseError: Malformed content, duplicate ids, or relationships and
                attachments referencing entities absent from the file.
        """
        project = read_project(path)
        try:
            snapshot = project.to_snapshot()
        except ValueError as exc:
            raise ParseError(f"{path}: {exc}") from exc
        try:
            self._store.replace_all(snapshot)
        except ValidationError as exc:
            raise ParseError(f"{path}: {exc.message}") from exc

        meta = _metadata(project)
        logger.info(
            "Loaded project %r from %s (%d entities, %d relationships)",
            meta.project_name, path, meta.entity_count, meta.relationship_count,
        )
        return meta


def _metadata(project: ProjectFile) -> ProjectMetadata:
    return ProjectMetadata(
        project_name=project.project_name,
        entity_count=len(project.nodes),
        relationship_count=len(project.relationships),
        attachment_count=len(project.attachments),
        saved_at=project.saved_at,
        format_version=project.format_version,
    )
