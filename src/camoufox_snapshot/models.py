"""
Data models for Camoufox Snapshot MCP Server.

Contains the snapshot tree, filter policy, and wait request/result types
shared between the core pipeline and the tool layer.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Iterator

from camoufox_snapshot.errors import InvalidPolicyError


@dataclass(frozen=True)
class SnapshotNode:
    """
    One accessible element of a page snapshot.

    ``properties`` takes part in equality but not in the hash, so nodes stay
    hashable while holding a plain dict of AX states.
    """

    role: str = ""
    children: tuple[SnapshotNode, ...] = ()
    uid: str | None = None
    name: str | None = None
    value: str | None = None
    description: str | None = None
    properties: dict[str, Any] = field(default_factory=dict, hash=False)

    def walk(self) -> Iterator[SnapshotNode]:
        """Yield this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def count(self) -> int:
        """Number of nodes in this subtree, including this one."""
        return sum(1 for _ in self.walk())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"role": self.role}
        for key in ("uid", "name", "value", "description"):
            attr = getattr(self, key)
            if attr is not None:
                result[key] = attr
        if self.properties:
            result["properties"] = dict(self.properties)
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def _normalize_roles(field_name: str, roles: Iterable[str] | None) -> frozenset[str]:
    normalized = set()
    for role in roles or ():
        if not isinstance(role, str) or not role.strip():
            raise InvalidPolicyError(field_name, str(role))
        normalized.add(role.strip().lower())
    return frozenset(normalized)


@dataclass(frozen=True)
class FilterPolicy:
    """
    Role sets controlling which snapshot nodes survive filtering.

    Roles are stored lower-cased. Empty or whitespace-only entries are
    rejected with InvalidPolicyError rather than being allowed to match
    nodes that have no role.
    """

    ignore_roles: frozenset[str] = frozenset()
    preserve_roles: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "ignore_roles", _normalize_roles("ignore_roles", self.ignore_roles)
        )
        object.__setattr__(
            self, "preserve_roles", _normalize_roles("preserve_roles", self.preserve_roles)
        )

    @classmethod
    def from_lists(
        cls,
        ignore_roles: Iterable[str] | None = None,
        preserve_roles: Iterable[str] | None = None,
    ) -> FilterPolicy:
        """Build a policy from plain role lists (e.g. tool arguments)."""
        return cls(
            ignore_roles=frozenset(ignore_roles or ()),
            preserve_roles=frozenset(preserve_roles or ()),
        )

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to dictionary with sorted role lists."""
        return {
            "ignore_roles": sorted(self.ignore_roles),
            "preserve_roles": sorted(self.preserve_roles),
        }


@dataclass(frozen=True)
class WaitSpec:
    """A single wait-for-text request."""

    text: str
    timeout_ms: int


@dataclass(frozen=True)
class WaitResult:
    """Successful outcome of a wait-for-text request."""

    text: str
    elapsed_ms: float
    attempts: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class BrowserInfo:
    """Information about the browser session."""

    status: str  # "running", "stopped"
    url: str | None = None
    uptime_seconds: float = 0.0
    snapshots_taken: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
