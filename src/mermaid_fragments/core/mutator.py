from collections.abc import Sequence

from mermaid_fragments.core.locator import matches_fragment
from mermaid_fragments.models import ContentNode, DocumentBody, ExpandNode, Node, ParagraphNode, TextNode


def fragment_node_content(source: str) -> list[Node]:
    """Children of a rewritten fragment: one paragraph holding one text node."""
    return [ParagraphNode(content=[TextNode(text=source)])]


def _replace_first(
    nodes: Sequence[Node], name: str | None, new_content: list[Node], recursive: bool
) -> list[Node] | None:
    """Return a copy of *nodes* with the first matching fragment rewritten, or None if nothing matched."""
    for index, node in enumerate(nodes):
        replacement: Node | None = None
        if isinstance(node, ExpandNode) and matches_fragment(node, name):
            replacement = node.model_copy(update={"content": new_content})
        elif recursive and isinstance(node, ContentNode) and node.content:
            children = _replace_first(node.content, name, new_content, recursive)
            if children is not None:
                replacement = node.model_copy(update={"content": children})
        if replacement is not None:
            return [*nodes[:index], replacement, *nodes[index + 1 :]]
    return None


def replace_fragment(
    body: DocumentBody, name: str | None, new_source: str, *, recursive: bool = False
) -> DocumentBody:
    """Return a new body whose first matching fragment holds *new_source*.

    The matched container keeps its type, attributes and position; every other
    node is carried over as-is. The input body is never modified. When the
    body has no content, or no fragment matches, *body* itself is returned.
    """
    if body.content is None:
        return body
    content = _replace_first(body.content, name, fragment_node_content(new_source), recursive)
    if content is None:
        return body
    return body.model_copy(update={"content": content})
