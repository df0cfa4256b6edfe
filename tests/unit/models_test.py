"""Unit tests for the ADF tree models."""

import pytest
from pydantic import ValidationError

from mermaid_fragments.models import (
    BlockNode,
    CodeBlockNode,
    Document,
    DocumentBody,
    ExpandNode,
    LeafNode,
    OpaqueNode,
    ParagraphNode,
    TextNode,
    fragment_label_name,
    fragment_title,
    parse_node,
)
from tests.adf import code_block, doc, fragment, paragraph, text


class TestParseNode:
    def test_maps_known_kinds_to_variants(self) -> None:
        assert isinstance(parse_node(text("x")), TextNode)
        assert isinstance(parse_node(paragraph()), ParagraphNode)
        assert isinstance(parse_node(fragment("mermaid:a", "x")), ExpandNode)
        assert isinstance(parse_node(code_block("mermaid", "x")), CodeBlockNode)
        assert isinstance(parse_node({"type": "bulletList", "content": []}), BlockNode)
        assert isinstance(parse_node({"type": "rule"}), LeafNode)

    def test_unknown_kind_is_opaque(self) -> None:
        raw = {"type": "extension", "attrs": {"extensionKey": "x"}}
        node = parse_node(raw)
        assert isinstance(node, OpaqueNode)
        assert node.type == "extension"
        assert node.to_adf() == raw

    def test_malformed_entries_are_opaque(self) -> None:
        assert isinstance(parse_node("junk"), OpaqueNode)
        assert isinstance(parse_node({"text": "no type"}), OpaqueNode)
        assert isinstance(parse_node({"type": "text", "text": 5}), OpaqueNode)

    def test_children_are_parsed_recursively(self) -> None:
        node = parse_node(fragment("mermaid:a", "graph TD"))
        assert isinstance(node, ExpandNode)
        assert node.content is not None
        paragraph_node = node.content[0]
        assert isinstance(paragraph_node, ParagraphNode)
        assert paragraph_node.content == [TextNode(type="text", text="graph TD")]


class TestRoundTrip:
    def test_untouched_body_serializes_to_equal_mapping(self) -> None:
        raw = doc(
            paragraph(text("bold", marks=[{"type": "strong"}])),
            {"type": "extension", "attrs": {"extensionKey": "toc"}, "localId": "abc"},
            {"type": "heading", "attrs": {"level": 2}, "content": [text("Heading")]},
            fragment("mermaid:flow", "graph TD; A-->B"),
            "not-a-node",
        )
        assert DocumentBody.from_adf(raw).to_adf() == raw

    def test_opaque_node_inside_known_parent_is_preserved(self) -> None:
        raw = doc({"type": "panel", "content": [{"type": "weird", "payload": [1, 2, {"x": None}]}]})
        assert DocumentBody.from_adf(raw).to_adf() == raw

    def test_built_nodes_carry_their_tag(self) -> None:
        node = ParagraphNode(content=[TextNode(text="x")])
        assert node.to_adf() == {"type": "paragraph", "content": [{"type": "text", "text": "x"}]}


class TestDocumentBody:
    def test_from_json_string(self) -> None:
        body = DocumentBody.from_adf('{"type": "doc", "version": 1, "content": []}')
        assert body.content == []
        assert body.version == 1

    @pytest.mark.parametrize("value", [None, "", "{}"])
    def test_empty_values_have_no_content(self, value: str | None) -> None:
        assert DocumentBody.from_adf(value).content is None

    @pytest.mark.parametrize("content", ["oops", {"weird": True}, 3])
    def test_rejects_non_list_content(self, content: object) -> None:
        with pytest.raises(ValueError):
            DocumentBody.from_adf({"type": "doc", "version": 1, "content": content})

    @pytest.mark.parametrize("value", ["not json", "[1, 2]"])
    def test_rejects_non_object_json(self, value: str) -> None:
        with pytest.raises(ValueError):
            DocumentBody.from_adf(value)

    def test_is_frozen(self) -> None:
        body = DocumentBody.from_adf(doc())
        with pytest.raises(ValidationError):
            body.version = 2  # type: ignore[misc]


class TestDocument:
    def test_rejects_negative_version(self) -> None:
        with pytest.raises(ValidationError):
            Document(id="1", version=-1)

    def test_defaults_to_empty_body(self) -> None:
        document = Document(id="1", version=0)
        assert document.body.content is None


class TestFragmentLabels:
    def test_label_name_is_trimmed(self) -> None:
        node = parse_node(fragment("mermaid:  flow  ", "x"))
        assert fragment_label_name(node) == "flow"

    def test_bare_prefix_is_default_fragment(self) -> None:
        assert fragment_label_name(parse_node(fragment("mermaid:", "x"))) == ""

    def test_other_titles_are_not_fragments(self) -> None:
        assert fragment_label_name(parse_node(fragment("Details", "x"))) is None
        assert fragment_label_name(parse_node({"type": "expand"})) is None
        assert fragment_label_name(parse_node(paragraph())) is None
        assert fragment_label_name(None) is None

    def test_non_string_title_is_ignored(self) -> None:
        node = parse_node({"type": "expand", "attrs": {"title": 42}, "content": []})
        assert fragment_label_name(node) is None

    def test_fragment_title(self) -> None:
        assert fragment_title("flow") == "mermaid:flow"
        assert fragment_title(None) == "mermaid:"
