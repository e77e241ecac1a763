"""
Snapshot construction from Playwright accessibility trees.

Converts the raw accessibility dict returned by the browser into a
SnapshotNode tree with a uid on every node, then applies the filter policy.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING, Any

from camoufox_snapshot.errors import SnapshotCaptureError
from camoufox_snapshot.logging import get_logger
from camoufox_snapshot.metrics import get_metrics
from camoufox_snapshot.models import FilterPolicy, SnapshotNode
from camoufox_snapshot.snapshot_filter import filter_snapshot

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = get_logger(__name__)

# AX keys that map to dedicated SnapshotNode fields
_NODE_FIELDS = {"role", "name", "value", "description", "children"}

# States kept in the compact (non-verbose) snapshot
COMPACT_STATES = (
    "checked",
    "disabled",
    "expanded",
    "focused",
    "level",
    "pressed",
    "readonly",
    "required",
    "selected",
)


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


class SnapshotBuilder:
    """
    Builds uid-annotated snapshot trees.

    Each build gets a fresh snapshot id; uids have the form
    ``<snapshot_id>_<index>`` with indices assigned in document order, so a uid
    always refers to exactly one node of one snapshot.
    """

    def __init__(self) -> None:
        self._snapshot_ids = itertools.count(1)
        self.last_snapshot_id = 0

    def build(self, raw: dict[str, Any], verbose: bool = False) -> SnapshotNode:
        """Convert a Playwright accessibility dict into a SnapshotNode tree."""
        snapshot_id = next(self._snapshot_ids)
        self.last_snapshot_id = snapshot_id
        node_ids = itertools.count()

        def convert(node: dict[str, Any]) -> SnapshotNode:
            uid = f"{snapshot_id}_{next(node_ids)}"
            if verbose:
                properties = {k: v for k, v in node.items() if k not in _NODE_FIELDS}
            else:
                properties = {k: node[k] for k in COMPACT_STATES if k in node}
            return SnapshotNode(
                role=node.get("role") or "",
                uid=uid,
                name=_text(node.get("name")),
                value=_text(node.get("value")),
                description=_text(node.get("description")),
                properties=properties,
                children=tuple(convert(child) for child in node.get("children") or ()),
            )

        return convert(raw)

    async def capture(self, page: Page, verbose: bool = False) -> SnapshotNode:
        """Read the accessibility tree of ``page`` and build a snapshot from it."""
        raw = await page.accessibility.snapshot(interesting_only=not verbose)
        if not raw:
            raise SnapshotCaptureError(
                "Could not capture accessibility snapshot. Page may not have loaded."
            )
        return self.build(raw, verbose=verbose)


def build_filtered_snapshot(
    raw_tree: dict[str, Any] | SnapshotNode,
    *,
    verbose: bool = False,
    filter: FilterPolicy | None = None,
    builder: SnapshotBuilder | None = None,
) -> SnapshotNode:
    """
    Build a snapshot tree and apply ``filter`` to it.

    Args:
        raw_tree: Playwright accessibility dict, or an already built tree
        verbose: Keep every AX property when converting a raw dict
        filter: Policy handed unchanged to filter_snapshot; None keeps all nodes
        builder: Builder assigning uids (a throwaway one is used if omitted)

    Returns:
        The filtered snapshot root
    """
    if isinstance(raw_tree, SnapshotNode):
        root = raw_tree
    else:
        root = (builder or SnapshotBuilder()).build(raw_tree, verbose=verbose)

    filtered = filter_snapshot(root, filter)

    captured = root.count()
    retained = filtered.count() if filtered is not root else captured
    get_metrics().record_snapshot(captured, retained)
    logger.debug(
        "snapshot_filtered",
        nodes_captured=captured,
        nodes_retained=retained,
        policy=filter.to_dict() if filter else None,
    )
    return filtered
