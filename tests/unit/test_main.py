# tests/unit/test_main.py - v1
"""Tests for main.py - CLI argument parsing and subcommands."""

from __future__ import annotations

import json

import pytest

from osintgraph.main import main
from osintgraph.project.snapshot import ProjectSnapshot


@pytest.fixture
def project_file(store, sample_graph, tmp_path):
    path = tmp_path / "case.json"
    ProjectSnapshot(store).save(path, "Case 42")
    return path


@pytest.fixture(autouse=True)
def _no_env_file(monkeypatch, tmp_path):
    # Keep a developer's .env out of CLI runs.
    monkeypatch.chdir(tmp_path)


class TestCli:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: osintgraph" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "osintgraph" in capsys.readouterr().out

    def test_info(self, project_file, capsys):
        assert main(["info", str(project_file)]) == 0
        out = capsys.readouterr().out
        assert "Project       : Case 42" in out
        assert "Entities      : 4" in out
        assert "Relationships : 3" in out
        assert "Attachments   : 1" in out

    def test_search(self, project_file, sample_graph, capsys):
        assert main(["search", str(project_file), "smith"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == [f"{sample_graph.alice}\tPerson\tAlice Smith"]

    def test_export_default_output(self, project_file, capsys):
        assert main(["export", str(project_file), "-f", "csv"]) == 0
        written = project_file.with_name("case_export.csv")
        assert capsys.readouterr().out.strip() == str(written)
        assert written.read_text(encoding="utf-8").startswith("id,type,label")

    def test_export_json_does_not_overwrite_project(self, project_file):
        original = project_file.read_text(encoding="utf-8")
        out = project_file.with_name("out.json")
        assert main(["export", str(project_file), "-f", "json", "-o", str(out)]) == 0
        assert project_file.read_text(encoding="utf-8") == original
        assert len(json.loads(out.read_text(encoding="utf-8"))["nodes"]) == 4

    def test_missing_project(self, tmp_path):
        assert main(["info", str(tmp_path / "missing.json")]) == 1

    def test_malformed_project(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("nope", encoding="utf-8")
        assert main(["search", str(bad), "x"]) == 1

    def test_bad_format_rejected_by_parser(self, project_file):
        with pytest.raises(SystemExit):
            main(["export", str(project_file), "-f", "pdf"])

    def test_export_all_formats(self, project_file, capsys):
        assert main(["export", str(project_file), "-f", "all"]) == 0
        written = capsys.readouterr().out.strip().splitlines()
        assert [p.rsplit("_export", 1)[1] for p in written] == [".csv", ".graphml", ".json"]
        for path in written:
            assert project_file.with_name(path.rsplit("/", 1)[-1]).exists()
