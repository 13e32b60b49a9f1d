# src/core/files.py - v1
"""Whole-file UTF-8 text I/O with store error mapping."""

from __future__ import annotations

from pathlib import Path

from osintgraph.core.errors import GraphIOError, ParseError


def write_text_file(path: str | Path, text: str) -> Path:
    """Write ``text`` as UTF-8, creating parent directories.

    Raises:
        GraphIOError: The file could not be written.
    """
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise GraphIOError(f"Cannot write {p}: {exc}") from exc
    return p


def read_text_file(path: str | Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        GraphIOError: The file could not be read.
        ParseError: The file is not valid UTF-8.
    """
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"{p} is not UTF-8 text: {exc}") from exc
    except OSError as exc:
        raise GraphIOError(f"Cannot read {p}: {exc}") from exc
