"""
Tool response assembly.

Collects message lines and an optional snapshot, which is either attached
inline or written to a file.
"""

from __future__ import annotations

from pathlib import Path

from camoufox_snapshot.formatter import format_snapshot
from camoufox_snapshot.logging import get_logger
from camoufox_snapshot.models import SnapshotNode

logger = get_logger(__name__)

SNAPSHOT_HEADER = "## Latest page snapshot"


class ToolResponse:
    """Text response returned by a tool call."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.snapshot: SnapshotNode | None = None
        self.saved_to: Path | None = None

    def append_line(self, line: str) -> None:
        """Append a message line to the response."""
        self.lines.append(line)

    def include_snapshot(self, snapshot: SnapshotNode, file_path: str | None = None) -> None:
        """
        Attach a snapshot to the response.

        Args:
            snapshot: Filtered snapshot tree
            file_path: Absolute path, or a path relative to the current working
                directory, to write the snapshot to instead of attaching it
        """
        if file_path:
            path = Path(file_path).expanduser()
            if not path.is_absolute():
                path = Path.cwd() / path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(format_snapshot(snapshot), encoding="utf-8")
            self.saved_to = path
            self.snapshot = None
            logger.info("snapshot_saved", path=str(path))
        else:
            self.snapshot = snapshot
            self.saved_to = None

    def render(self) -> str:
        """Render the response as text."""
        parts = list(self.lines)
        if self.saved_to is not None:
            parts.append(f"Saved snapshot to {self.saved_to}.")
        elif self.snapshot is not None:
            parts.append(SNAPSHOT_HEADER)
            parts.append(format_snapshot(self.snapshot))
        return "\n".join(parts)
