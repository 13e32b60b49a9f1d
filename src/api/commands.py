# src/api/commands.py - v1
"""Command surface over a GraphStore.

Usage:
    store = GraphStore(settings)
    commands = GraphCommands(store)
    result = commands.create_node(CreateNodeRequest(entity_type="Person", label="Alice"))
    result = commands.invoke("search_nodes", {"query": "alice"})

Every command returns a CommandResult. Store failures (NotFound,
ValidationError, IOError, ParseError) are logged and reported in
``result.error``; they never propagate to the caller.
"""

from __future__ import annotations

import base64
import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from osintgraph.api.models import (
    AttachmentData,
    CommandResult,
    CreateNodeRequest,
    CreateRelationshipRequest,
    SaveAttachmentRequest,
    UpdateNodeRequest,
    UpdateRelationshipRequest,
)
from osintgraph.config.settings import Settings
from osintgraph.core.errors import GraphStoreError, ValidationError, describe_pydantic_error
from osintgraph.core.files import write_text_file
from osintgraph.graph.exporter_factory import get_exporter
from osintgraph.logging.context import (
    reset_command_context,
    set_command_context,
    set_project_context,
)
from osintgraph.project.snapshot import ProjectSnapshot
from osintgraph.store.graph_store import GraphStore

logger = logging.getLogger(__name__)

# Commands taking one request model; the method has the same name.
_REQUEST_COMMANDS: dict[str, type[BaseModel]] = {
    "create_node": CreateNodeRequest,
    "update_node": UpdateNodeRequest,
    "create_relationship": CreateRelationshipRequest,
    "update_relationship": UpdateRelationshipRequest,
    "save_attachment": SaveAttachmentRequest,
}

# Commands taking plain string arguments, in positional order.
_ARG_COMMANDS: dict[str, tuple[str, ...]] = {
    "get_node": ("id",),
    "delete_node": ("id",),
    "get_all_nodes": (),
    "search_nodes": ("query",),
    "get_relationships": (),
    "get_node_relationships": ("node_id",),
    "delete_relationship": ("id",),
    "list_attachments": ("node_id",),
    "delete_attachment": ("id", "node_id"),
    "export_json": ("file_path",),
    "export_csv": ("file_path",),
    "export_graphml": ("file_path",),
    "save_project": ("file_path", "project_name"),
    "load_project": ("file_path",),
    "write_report": ("file_path", "content"),
    "clear_all_data": (),
}

_ARG_ALIASES = {"attachment_id": "id"}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class GraphCommands:
    """One method per command; the store is passed in, never global."""

    def __init__(self, store: GraphStore, settings: Settings | None = None) -> None:
        self._store = store
        self._settings = settings or store.settings
        self._projects = ProjectSnapshot(store, self._settings)

    @property
    def command_names(self) -> list[str]:
        return sorted([*_REQUEST_COMMANDS, *_ARG_COMMANDS])

    # --- Entities ---

    def create_node(self, request: CreateNodeRequest) -> CommandResult:
        return self._run("create_node", lambda: self._store.create_entity(
            request.entity_type,
            request.label,
            description=request.description,
            tags=request.tags,
            confidence=request.confidence,
            source=request.source,
            metadata=request.metadata,
        ))

    def get_node(self, id: str) -> CommandResult:  # noqa: A002
        return self._run("get_node", lambda: self._store.get_entity(id))

    def update_node(self, request: UpdateNodeRequest) -> CommandResult:
        def _update() -> None:
            self._store.update_entity(
                request.id,
                label=request.label,
                description=request.description,
                tags=request.tags,
                confidence=request.confidence,
                source=request.source,
                metadata=request.metadata,
            )

        return self._run("update_node", _update)

    def delete_node(self, id: str) -> CommandResult:  # noqa: A002
        return self._run("delete_node", lambda: self._store.delete_entity(id))

    def get_all_nodes(self) -> CommandResult:
        return self._run("get_all_nodes", self._store.all_entities)

    def search_nodes(self, query: str) -> CommandResult:
        return self._run("search_nodes", lambda: self._store.search_entities(query))

    # --- Relationships ---

    def create_relationship(self, request: CreateRelationshipRequest) -> CommandResult:
        return self._run("create_relationship", lambda: self._store.create_relationship(
            request.source_id,
            request.target_id,
            request.relation_type,
            description=request.description,
            weight=request.weight,
            confidence=request.confidence,
            source=request.source,
            metadata=request.metadata,
        ))

    def get_relationships(self) -> CommandResult:
        return self._run("get_relationships", self._store.all_relationships)

    def get_node_relationships(self, node_id: str) -> CommandResult:
        return self._run(
            "get_node_relationships",
            lambda: self._store.relationships_for_node(node_id),
        )

    def update_relationship(self, request: UpdateRelationshipRequest) -> CommandResult:
        def _update() -> None:
            self._store.update_relationship(
                request.id,
                relation_type=request.relation_type,
                description=request.description,
                weight=request.weight,
                confidence=request.confidence,
                source=request.source,
                metadata=request.metadata,
            )

        return self._run("update_relationship", _update)

    def delete_relationship(self, id: str) -> CommandResult:  # noqa: A002
        return self._run("delete_relationship", lambda: self._store.delete_relationship(id))

    # --- Attachments ---

    def save_attachment(self, request: SaveAttachmentRequest) -> CommandResult:
        def _save() -> str:
            try:
                content = base64.b64decode(request.content_base64, validate=True)
            except ValueError as exc:  # binascii.Error or non-ASCII input
                raise ValidationError(f"Invalid base64 content: {exc}") from exc
            return self._store.save_attachment(request.node_id, request.filename, content)

        return self._run("save_attachment", _save)

    def list_attachments(self, node_id: str) -> CommandResult:
        images = self._settings.image_extensions_set
        return self._run("list_attachments", lambda: [
            AttachmentData.from_attachment(a, images)
            for a in self._store.list_attachments(node_id)
        ])

    def delete_attachment(self, id: str, node_id: str) -> CommandResult:  # noqa: A002
        return self._run(
            "delete_attachment",
            lambda: self._store.delete_attachment(id, node_id),
        )

    # --- Export & project files ---

    def export_json(self, file_path: str) -> CommandResult:
        return self._run("export_json", lambda: self._export("json", file_path))

    def export_csv(self, file_path: str) -> CommandResult:
        return self._run("export_csv", lambda: self._export("csv", file_path))

    def export_graphml(self, file_path: str) -> CommandResult:
        return self._run("export_graphml", lambda: self._export("graphml", file_path))

    def save_project(self, file_path: str, project_name: str) -> CommandResult:
        def _save():
            meta = self._projects.save(file_path, project_name)
            set_project_context(meta.project_name)
            return meta

        return self._run("save_project", _save)

    def load_project(self, file_path: str) -> CommandResult:
        def _load():
            meta = self._projects.load(file_path)
            set_project_context(meta.project_name)
            return meta

        return self._run("load_project", _load)

    def write_report(self, file_path: str, content: str) -> CommandResult:
        """Write externally generated report text to ``file_path``."""
        return self._run(
            "write_report",
            lambda: str(write_text_file(file_path, content)),
        )

    def clear_all_data(self) -> CommandResult:
        return self._run("clear_all_data", self._store.clear_all)

    # --- Dispatch by name ---

    def invoke(self, command: str, payload: dict[str, Any] | None = None) -> CommandResult:
        """Run a command from its name and a plain dict payload.

        Request commands accept the request fields directly or wrapped as
        ``{"request": {...}}``. camelCase keys are accepted.
        """
        payload = {_snake(k): v for k, v in (payload or {}).items()}

        if command in _REQUEST_COMMANDS:
            body = payload.get("request", payload)
            if not isinstance(body, dict):
                return self._reject(command, "request must be an object")
            try:
                request = _REQUEST_COMMANDS[command].model_validate(
                    {_snake(k): v for k, v in body.items()}
                )
            except PydanticValidationError as exc:
                return self._reject(command, describe_pydantic_error(exc))
            return getattr(self, command)(request)

        if command in _ARG_COMMANDS:
            for alias, name in _ARG_ALIASES.items():
                if alias in payload and name not in payload:
                    payload[name] = payload.pop(alias)
            args: list[str] = []
            for name in _ARG_COMMANDS[command]:
                value = payload.get(name)
                if not isinstance(value, str):
                    return self._reject(command, f"missing or non-string argument {name!r}")
                args.append(value)
            return getattr(self, command)(*args)

        return self._reject(command, f"Unknown command: {command}")

    # --- Internals ---

    def _export(self, fmt: str, file_path: str | Path) -> str:
        snapshot = self._store.snapshot()
        return get_exporter(fmt, self._settings).export(snapshot, file_path)

    def _run(self, name: str, fn: Callable[[], Any]) -> CommandResult:
        token = set_command_context(name)
        try:
            data = fn()
        except GraphStoreError as exc:
            logger.warning("Command %s failed: [%s] %s", name, exc.kind, exc.message)
            return CommandResult.failure(exc)
        finally:
            reset_command_context(token)
        return CommandResult.success(data)

    def _reject(self, name: str, message: str) -> CommandResult:
        exc = ValidationError(f"{name}: {message}")
        logger.warning("Command %s rejected: %s", name, message)
        return CommandResult.failure(exc)


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()
