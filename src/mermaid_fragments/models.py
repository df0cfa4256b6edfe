"""Document tree and result models.

Page bodies arrive as Atlassian Document Format (ADF) JSON. Each node kind the
fragment code cares about gets its own frozen model; every other kind is kept
as an :class:`OpaqueNode` so it can be written back exactly as it was read.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    ValidationError,
    field_validator,
    model_serializer,
)

FRAGMENT_PREFIX = "mermaid:"
LABELED_CONTAINER_TYPE = "expand"

BLOCK_NODE_TYPES: frozenset[str] = frozenset(
    {
        "blockquote",
        "bulletList",
        "doc",
        "heading",
        "layoutColumn",
        "layoutSection",
        "listItem",
        "nestedExpand",
        "orderedList",
        "panel",
        "table",
        "tableCell",
        "tableHeader",
        "tableRow",
    }
)

LEAF_NODE_TYPES: frozenset[str] = frozenset(
    {
        "blockCard",
        "date",
        "emoji",
        "hardBreak",
        "inlineCard",
        "media",
        "mediaSingle",
        "mention",
        "rule",
        "status",
    }
)


class AdfNode(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    type: str

    @model_serializer(mode="wrap")
    def serialize_node(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        # the tag is emitted even when it was left at its default
        return {"type": self.type, **data}

    @property
    def children(self) -> list[Node] | None:
        return None

    def to_adf(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class ContentNode(AdfNode):
    """A node that owns an ordered list of child nodes."""

    content: list[Node] | None = None

    @field_validator("content", mode="before")
    @classmethod
    def parse_children(cls, value: Any) -> Any:
        if isinstance(value, list):
            return parse_content(value)
        return value

    @property
    def children(self) -> list[Node] | None:
        return self.content


class TextNode(AdfNode):
    type: Literal["text"] = "text"
    text: str | None = None


class ParagraphNode(ContentNode):
    type: Literal["paragraph"] = "paragraph"


class ExpandNode(ContentNode):
    type: Literal["expand"] = "expand"
    attrs: dict[str, Any] | None = None

    @property
    def title(self) -> str:
        title = (self.attrs or {}).get("title")
        return title if isinstance(title, str) else ""


class CodeBlockNode(ContentNode):
    type: Literal["codeBlock"] = "codeBlock"
    attrs: dict[str, Any] | None = None

    @property
    def language(self) -> str | None:
        language = (self.attrs or {}).get("language")
        return language if isinstance(language, str) else None


class BlockNode(ContentNode):
    """Any other known ADF kind that carries children."""


class LeafNode(AdfNode):
    """A known ADF kind without children or text."""

    attrs: dict[str, Any] | None = None


class OpaqueNode(BaseModel):
    """An unrecognized or malformed node, preserved without interpretation."""

    model_config = ConfigDict(frozen=True)

    raw: Any

    @model_serializer(mode="plain")
    def serialize_raw(self) -> Any:
        return self.raw

    @property
    def type(self) -> str | None:
        if isinstance(self.raw, dict) and isinstance(self.raw.get("type"), str):
            return self.raw["type"]
        return None

    @property
    def children(self) -> list[Node] | None:
        if isinstance(self.raw, dict) and isinstance(self.raw.get("content"), list):
            return parse_content(self.raw["content"])
        return None

    def to_adf(self) -> Any:
        return self.raw


Node = Union[ExpandNode, TextNode, ParagraphNode, CodeBlockNode, BlockNode, LeafNode, OpaqueNode]

_NODE_CLASSES: dict[str, type[AdfNode]] = {
    "expand": ExpandNode,
    "text": TextNode,
    "paragraph": ParagraphNode,
    "codeBlock": CodeBlockNode,
    **{name: BlockNode for name in BLOCK_NODE_TYPES},
    **{name: LeafNode for name in LEAF_NODE_TYPES},
}


def parse_node(raw: Any) -> Node:
    """Map one raw ADF mapping to its node variant.

    Anything that does not validate as the variant its tag names falls back
    to :class:`OpaqueNode`.
    """
    if isinstance(raw, (AdfNode, OpaqueNode)):
        return raw  # type: ignore[return-value]
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        return OpaqueNode(raw=raw)
    node_cls = _NODE_CLASSES.get(raw["type"])
    if node_cls is None:
        return OpaqueNode(raw=raw)
    try:
        return node_cls.model_validate(raw)  # type: ignore[return-value]
    except ValidationError:
        return OpaqueNode(raw=raw)


def parse_content(raw: list[Any]) -> list[Node]:
    return [parse_node(item) for item in raw]


for _model in (ContentNode, ParagraphNode, ExpandNode, CodeBlockNode, BlockNode):
    _model.model_rebuild()  # necessary for recursive types


def fragment_label_name(node: Node | None) -> str | None:
    """Return the fragment name a labeled container carries, or None."""
    if not isinstance(node, ExpandNode):
        return None
    title = node.title
    if not title.startswith(FRAGMENT_PREFIX):
        return None
    return title[len(FRAGMENT_PREFIX) :].strip()


def fragment_title(name: str | None) -> str:
    return f"{FRAGMENT_PREFIX}{name or ''}"


class DocumentBody(AdfNode):
    """The ``doc`` root of a page body."""

    type: str = "doc"
    version: int | None = None
    content: list[Node] | None = None

    @field_validator("content", mode="before")
    @classmethod
    def parse_children(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, list):
            raise ValueError("Document content must be a list")
        return parse_content(value)

    @classmethod
    def from_adf(cls, value: str | dict[str, Any] | None) -> DocumentBody:
        """Build a body from the stored representation (JSON text or mapping).

        Raises ``ValueError`` when the text is not a JSON object or its
        ``content`` is not a list.
        """
        if value is None or value == "":
            return cls()
        if isinstance(value, str):
            value = json.loads(value)
        if not isinstance(value, dict):
            raise ValueError("Document body must be a JSON object")
        return cls.model_validate(value)

    def to_json(self) -> str:
        return json.dumps(self.to_adf())


DocumentBody.model_rebuild()


class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    version: int = Field(ge=0)
    body: DocumentBody = Field(default_factory=DocumentBody)


class PageVersion(BaseModel):
    number: int
    message: str = ""
    created_at: datetime | None = None
    author_id: str | None = None


class Issue(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    description: DocumentBody | None = None


# --- Tagged results returned across the service boundary ---


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    FETCH = "fetch"
    CONFLICT = "conflict"
    COMMIT = "commit"
    INTERNAL = "internal"


class ServiceResult(BaseModel):
    ok: bool
    error: str | None = None
    error_kind: ErrorKind | None = None


class PageContentResult(ServiceResult):
    content: str | None = None
    title: str | None = None
    version: int | None = None


class FragmentReadResult(ServiceResult):
    source: str | None = None
    version: int | None = None


class FragmentWriteResult(ServiceResult):
    new_version: int | None = None
    conflict: bool = False
    server_version: int | None = None


class PageHistoryResult(ServiceResult):
    versions: list[PageVersion] = Field(default_factory=list)


class IssueDescriptionResult(ServiceResult):
    key: str | None = None
    description: str = ""


class LooseFragment(BaseModel):
    id: int
    source: str


class IssueFragmentsResult(ServiceResult):
    key: str | None = None
    fragments: list[LooseFragment] = Field(default_factory=list)
