from mermaid_fragments.models import Node, TextNode


def extract_text(node: Node | None) -> str:
    """Concatenate the text of every ``text`` leaf below *node*, depth first."""
    if node is None:
        return ""
    if isinstance(node, TextNode):
        return node.text or ""
    children = node.children
    if children:
        return "".join(extract_text(child) for child in children)
    return ""
