"""Domain datatypes for lazily loaded file tree nodes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class NodeKind(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"


class ExpansionState(enum.Enum):
    """Load/visibility tag of a directory node.

    ``UNLOADED`` means the scanner has not run yet. ``EXPANDED`` and
    ``COLLAPSED`` both imply cached children.
    """

    UNLOADED = "unloaded"
    EXPANDED = "expanded"
    COLLAPSED = "collapsed"


@dataclass
class TreeNode:
    """One registered filesystem path.

    Parent and children are stored as path keys into the owning tree's
    registry, never as node references.
    """

    path: Path
    kind: NodeKind
    parent: Path | None = None
    state: ExpansionState = ExpansionState.UNLOADED
    children: tuple[Path, ...] = ()
    scan_error: str | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def is_expanded(self) -> bool:
        return self.state is ExpansionState.EXPANDED

    @property
    def is_loaded(self) -> bool:
        return self.state is not ExpansionState.UNLOADED


__all__ = [
    "NodeKind",
    "ExpansionState",
    "TreeNode",
]
