"""Plain-text extraction from rich-text documents.

A rich-text document is a tree of nodes.  Leaf nodes carry
``nodeType == "text"`` and a string ``value``; every other node may hold an
ordered ``content`` list of children::

    {"nodeType": "document", "content": [
        {"nodeType": "paragraph", "content": [
            {"nodeType": "text", "value": "Hello"}]}]}
"""

from typing import Any, List


def extract_plain_text(node: Any) -> str:
    """Concatenate every text leaf under *node* in document order.

    Total over arbitrary JSON: lists concatenate their entries, a bare string
    contributes itself, and any other scalar or unrecognised node contributes
    an empty string.  Applying it to its own output returns the same string.
    """
    parts: List[str] = []
    # Explicit stack keeps deeply nested documents from hitting the recursion limit.
    stack: List[Any] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, str):
            parts.append(current)
        elif isinstance(current, list):
            stack.extend(reversed(current))
        elif isinstance(current, dict):
            if current.get("nodeType") == "text":
                value = current.get("value")
                if isinstance(value, str):
                    parts.append(value)
            else:
                content = current.get("content")
                if isinstance(content, list):
                    stack.extend(reversed(content))
    return "".join(parts)
