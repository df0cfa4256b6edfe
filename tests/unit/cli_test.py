"""Tests for the fragment, page and issue CLI commands against in-memory stores."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from mermaid_fragments.cli.app import app
from mermaid_fragments.cli._common import EXIT_CONFLICT, EXIT_FAILURE
from mermaid_fragments.store.memory import InMemoryDocumentStore, InMemoryIssueSource

runner = CliRunner()


def _invoke(store: InMemoryDocumentStore, *args: str):  # type: ignore[no-untyped-def]
    with patch("mermaid_fragments.cli._common.get_store", return_value=store):
        return runner.invoke(app, list(args))


class TestFragmentGet:
    def test_prints_source(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "get", "12345", "--name", "flow")
        assert result.exit_code == 0
        assert "graph TD; A-->B" in result.output
        assert "version 3" in result.output

    def test_missing_fragment_exits_nonzero(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "get", "12345", "--name", "nope")
        assert result.exit_code == EXIT_FAILURE

    def test_invalid_page_id(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "get", "abc")
        assert result.exit_code == EXIT_FAILURE
        assert "Invalid page ID format" in result.output


class TestFragmentSet:
    def test_updates_fragment(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "set", "12345", "--name", "flow", "--source", "graph LR", "--version", "3")
        assert result.exit_code == 0
        assert "version 4" in result.output
        assert store.pages["12345"].version == 4

    def test_reads_source_from_file(self, store: InMemoryDocumentStore, tmp_path: Path) -> None:
        diagram = tmp_path / "flow.mmd"
        diagram.write_text("graph TD; X-->Y", encoding="utf-8")

        result = _invoke(store, "fragment", "set", "12345", "--name", "flow", "--file", str(diagram))
        assert result.exit_code == 0

        check = _invoke(store, "fragment", "get", "12345", "--name", "flow")
        assert "graph TD; X-->Y" in check.output

    def test_stale_version_exits_with_conflict_code(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "set", "12345", "--name", "flow", "--source", "graph LR", "--version", "2")
        assert result.exit_code == EXIT_CONFLICT
        assert "server version: 3" in result.output
        assert store.write_count == 0

    def test_requires_exactly_one_source(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "set", "12345")
        assert result.exit_code == EXIT_FAILURE
        assert store.write_count == 0


class TestFragmentList:
    def test_lists_top_level_fragments(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "list", "12345")
        assert result.exit_code == 0
        assert "flow" in result.output
        assert "(1 rows)" in result.output

    def test_missing_page(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "fragment", "list", "999")
        assert result.exit_code == EXIT_FAILURE


class TestPageHistory:
    def test_lists_versions(self, store: InMemoryDocumentStore) -> None:
        result = _invoke(store, "page", "history", "12345")
        assert result.exit_code == 0
        assert "(1 rows)" in result.output


class TestIssueDiagrams:
    def test_prints_diagrams(self, issues: InMemoryIssueSource) -> None:
        with patch("mermaid_fragments.cli._common.get_issue_source", return_value=issues):
            result = runner.invoke(app, ["issue", "diagrams", "PROJ-1"])
        assert result.exit_code == 0
        assert "sequenceDiagram" in result.output
        assert "(2 diagrams)" in result.output

    def test_invalid_key(self, issues: InMemoryIssueSource) -> None:
        with patch("mermaid_fragments.cli._common.get_issue_source", return_value=issues):
            result = runner.invoke(app, ["issue", "diagrams", "nope"])
        assert result.exit_code == EXIT_FAILURE
