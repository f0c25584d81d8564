"""Structure report for export files that the extractor does not recognize"""

from typing import Any, List, Set

from .parser import CONVERSATIONS_KEY


def _keys(value: Any) -> List[str]:
    return list(value.keys()) if isinstance(value, dict) else []


def _items(node: Any, path: str):
    if isinstance(node, dict):
        pairs = node.items()
    else:
        pairs = ((str(index), item) for index, item in enumerate(node))
    for key, value in pairs:
        yield (f"{path}.{key}" if path else key), value


def _find_lists(root: Any, lines: List[str]) -> None:
    """Depth-first walk reporting every non-empty list below root"""
    seen: Set[int] = {id(root)}
    stack = [_items(root, "")]
    while stack:
        for path, value in stack[-1]:
            if isinstance(value, list):
                if not value:
                    continue
                lines.append(f"Found array at '{path}' with {len(value)} items")
                if isinstance(value[0], dict):
                    lines.append(f"Sample item keys at '{path}': {_keys(value[0])}")
            elif isinstance(value, dict) and id(value) not in seen:
                seen.add(id(value))
                stack.append(_items(value, path))
                break
        else:
            stack.pop()


def describe_structure(document: Any) -> List[str]:
    """
    Describe the shape of an export document

    Args:
        document: Parsed JSON document

    Returns:
        Report lines, in the order they should be printed
    """
    lines = ["File structure analysis:", f"Top-level keys: {_keys(document)}"]

    conversations = document.get(CONVERSATIONS_KEY) if isinstance(document, dict) else None
    if conversations is not None:
        size = len(conversations) if isinstance(conversations, (list, dict)) else 0
        lines.append(f"Found '{CONVERSATIONS_KEY}' array with {size} items")
        if isinstance(conversations, list) and conversations:
            first = conversations[0]
            lines.append(f"Sample conversation keys: {_keys(first)}")
            messages = first.get("messages") if isinstance(first, dict) else None
            if isinstance(messages, list) and messages:
                lines.append(f"Sample message keys: {_keys(messages[0])}")
            else:
                lines.append("No 'messages' found in conversation")
    else:
        lines.append(f"No '{CONVERSATIONS_KEY}' array found. Analyzing structure further...")

        if isinstance(document, list):
            lines.append(f"The file contains an array with {len(document)} items")
            if document:
                lines.append(f"First item keys: {_keys(document[0])}")

        if isinstance(document, (dict, list)):
            _find_lists(document, lines)

    lines.append("")
    lines.append("Please analyze the structure and adjust the extraction accordingly")
    return lines
