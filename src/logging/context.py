# src/logging/context.py - v1
"""Contextual logging support: attach project and command to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per command invocation.
_project: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "project", default=None
)
_command: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "command", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    project: str | None = None
    command: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(project=_project.get(), command=_command.get())


def set_project_context(project: str | None) -> None:
    """Set the active project name (on load/save, or from the CLI)."""
    _project.set(project)


def set_command_context(command: str | None) -> contextvars.Token[str | None]:
    """Set the command being executed; returns a token for reset_command_context()."""
    return _command.set(command)


def reset_command_context(token: contextvars.Token[str | None]) -> None:
    _command.reset(token)


def clear_context() -> None:
    """Reset all context variables."""
    _project.set(None)
    _command.set(None)
