from collections.abc import Iterator, Sequence

from mermaid_fragments.models import ContentNode, DocumentBody, ExpandNode, Node, fragment_label_name


def matches_fragment(node: Node, name: str | None) -> bool:
    """True when *node* is a labeled container for *name* (any name when empty)."""
    label = fragment_label_name(node)
    if label is None:
        return False
    return not name or label == name


def _walk(nodes: Sequence[Node], recursive: bool) -> Iterator[Node]:
    for node in nodes:
        yield node
        if recursive and isinstance(node, ContentNode) and node.content:
            yield from _walk(node.content, recursive)


def find_fragment(body: DocumentBody | None, name: str | None = None, *, recursive: bool = False) -> ExpandNode | None:
    """Return the first labeled container matching *name*, in document order.

    Only the top level of the body is scanned unless *recursive* is set, in
    which case nested containers are searched depth first (pre-order).
    Unknown node kinds are never descended into.
    """
    if body is None or not body.content:
        return None
    for node in _walk(body.content, recursive):
        if isinstance(node, ExpandNode) and matches_fragment(node, name):
            return node
    return None


def iter_fragments(body: DocumentBody | None, *, recursive: bool = False) -> Iterator[tuple[str, ExpandNode]]:
    if body is None or not body.content:
        return
    for node in _walk(body.content, recursive):
        label = fragment_label_name(node)
        if label is not None and isinstance(node, ExpandNode):
            yield label, node
