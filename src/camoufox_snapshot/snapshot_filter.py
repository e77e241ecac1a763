"""
Role based pruning of accessibility snapshots.

Filtering is pure: the input tree is never modified, a new tree is returned.
"""

from __future__ import annotations

from dataclasses import replace

from camoufox_snapshot.models import FilterPolicy, SnapshotNode


def filter_snapshot(root: SnapshotNode, policy: FilterPolicy | None = None) -> SnapshotNode:
    """
    Return a new snapshot tree pruned according to ``policy``.

    - A node whose role is in ``preserve_roles`` is always kept; its children
      are still filtered one by one.
    - A node whose role is in ``ignore_roles`` is dropped together with its
      whole subtree.
    - Any other node is kept with its filtered children.

    Role comparison is case-insensitive. The root itself is never dropped: if
    its role is ignored, the result is the root with no children. Without a
    policy the tree is returned unchanged.

    Args:
        root: Root node of the raw snapshot
        policy: Roles to ignore/preserve; None disables filtering

    Returns:
        The filtered tree, always rooted at ``root``'s identity
    """
    if root is None:
        raise TypeError("filter_snapshot() requires a root node, got None")
    if policy is None:
        return root

    ignore = policy.ignore_roles
    preserve = policy.preserve_roles

    def visit(node: SnapshotNode) -> SnapshotNode | None:
        role = (node.role or "").lower()
        if role not in preserve and role in ignore:
            return None
        children = tuple(
            kept for kept in (visit(child) for child in node.children) if kept is not None
        )
        return replace(node, children=children)

    filtered = visit(root)
    if filtered is None:
        return replace(root, children=())
    return filtered
