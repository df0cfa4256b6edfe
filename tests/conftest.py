"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from mermaid_fragments.models import DocumentBody
from mermaid_fragments.store.memory import InMemoryDocumentStore, InMemoryIssueSource
from tests.adf import code_block, doc, fragment, paragraph, text

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def flow_body() -> DocumentBody:
    return DocumentBody.from_adf(
        doc(
            paragraph(text("Intro")),
            fragment("mermaid:flow", "graph TD; A-->B"),
            paragraph(text("Outro")),
        )
    )


@pytest.fixture
def store(flow_body: DocumentBody) -> InMemoryDocumentStore:
    s = InMemoryDocumentStore()
    s.add_page("12345", flow_body, title="Architecture", version=3)
    return s


@pytest.fixture
def issues() -> InMemoryIssueSource:
    s = InMemoryIssueSource()
    s.add_issue(
        "PROJ-1",
        doc(
            paragraph(text("Two diagrams follow.")),
            code_block("mermaid", "  graph LR; A-->B\n"),
            code_block("python", "print('x')"),
            code_block("mermaid", "sequenceDiagram\n  A->>B: hi\n"),
        ),
    )
    return s
