# tests/unit/core/test_unit_errors.py - v1
"""Tests for core/errors.py and core/files.py."""

from __future__ import annotations

import pytest

from osintgraph.core.errors import (
    GraphIOError,
    GraphStoreError,
    NotFoundError,
    ParseError,
    ValidationError,
)
from osintgraph.core.files import read_text_file, write_text_file


class TestErrorKinds:
    @pytest.mark.parametrize(
        "cls,kind",
        [
            (NotFoundError, "NotFound"),
            (ValidationError, "ValidationError"),
            (GraphIOError, "IOError"),
            (ParseError, "ParseError"),
        ],
    )
    def test_kind(self, cls, kind):
        exc = cls("msg")
        assert isinstance(exc, GraphStoreError)
        assert exc.kind == kind
        assert exc.message == "msg"
        assert str(exc) == "msg"


class TestFiles:
    def test_write_creates_parents(self, tmp_path):
        path = write_text_file(tmp_path / "a" / "b" / "out.txt", "héllo")
        assert path.read_text(encoding="utf-8") == "héllo"

    def test_read_roundtrip(self, tmp_path):
        p = tmp_path / "x.txt"
        p.write_text("data", encoding="utf-8")
        assert read_text_file(p) == "data"

    def test_read_missing(self, tmp_path):
        with pytest.raises(GraphIOError, match="Cannot read"):
            read_text_file(tmp_path / "missing.json")

    def test_read_not_utf8(self, tmp_path):
        p = tmp_path / "bin.json"
        p.write_bytes(b"\xff\xfe\x00garbage\xc3")
        with pytest.raises(ParseError, match="not UTF-8"):
            read_text_file(p)

    def test_write_into_directory_fails(self, tmp_path):
        with pytest.raises(GraphIOError, match="Cannot write"):
            write_text_file(tmp_path, "x")
