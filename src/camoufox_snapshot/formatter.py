"""
Text rendering of snapshot trees for LLM consumption.
"""

from __future__ import annotations

from camoufox_snapshot.models import SnapshotNode


def format_node(node: SnapshotNode, depth: int = 0) -> str:
    """Format a single node as one line, without its children."""
    parts = []
    if node.uid:
        parts.append(f"uid={node.uid}")
    parts.append(node.role or "generic")
    if node.name:
        parts.append(f'"{node.name}"')
    if node.value:
        parts.append(f'value="{node.value}"')
    if node.description:
        parts.append(f'description="{node.description}"')

    for key, prop in node.properties.items():
        if prop is True:
            parts.append(key)
        elif prop not in (False, None, ""):
            parts.append(f"{key}={prop}")

    return "  " * depth + " ".join(parts)


def format_snapshot(root: SnapshotNode) -> str:
    """Render a snapshot tree as indented lines, one node per line."""
    lines = []
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        lines.append(format_node(node, depth))
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return "\n".join(lines)
