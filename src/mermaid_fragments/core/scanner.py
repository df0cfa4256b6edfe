"""Best-effort extraction of fenced diagrams from flattened issue text.

Issue descriptions are rendered artifacts rather than a source of truth, so
this path is read-only and never shares the page update machinery.
"""

import re

from mermaid_fragments.core.text import extract_text
from mermaid_fragments.models import CodeBlockNode, DocumentBody, LooseFragment, Node, ParagraphNode, TextNode

DEFAULT_FENCE = "mermaid"


def fence_pattern(fence: str = DEFAULT_FENCE) -> re.Pattern[str]:
    return re.compile(r"```" + re.escape(fence) + r"\n(.*?)```", re.DOTALL)


FENCE_PATTERN = fence_pattern()


def scan_fenced_fragments(text: str | None, fence: str = DEFAULT_FENCE) -> list[LooseFragment]:
    """Return every fenced block body in order of appearance, trimmed."""
    if not text:
        return []
    pattern = FENCE_PATTERN if fence == DEFAULT_FENCE else fence_pattern(fence)
    return [LooseFragment(id=index, source=match.group(1).strip()) for index, match in enumerate(pattern.finditer(text))]


def _flatten_nodes(nodes: list[Node], fence: str) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, CodeBlockNode) and node.language == fence:
            parts.append(f"```{fence}\n{extract_text(node)}```")
        elif isinstance(node, (ParagraphNode, TextNode)):
            parts.append(extract_text(node))
        elif node.children:
            parts.append(_flatten_nodes(node.children, fence))
        else:
            parts.append("")
    return "\n".join(parts)


def flatten_description(body: DocumentBody | None, fence: str = DEFAULT_FENCE) -> str:
    """Flatten an issue description to text, re-fencing matching code blocks."""
    if body is None or not body.content:
        return ""
    return _flatten_nodes(body.content, fence)
