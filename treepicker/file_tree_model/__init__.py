"""Domain model for the lazily loaded file tree.

This package contains non-UI tree primitives:
- node datatypes with a three-state expansion tag
- one-level filesystem scanning with a fixed display order
- the path-keyed node registry that caches scanned directories
"""

from __future__ import annotations

from .fs import DirectoryChild, scan_directory, sort_key
from .tree import LazyTree, Scanner
from .types import ExpansionState, NodeKind, TreeNode

__all__ = [
    "DirectoryChild",
    "scan_directory",
    "sort_key",
    "LazyTree",
    "Scanner",
    "ExpansionState",
    "NodeKind",
    "TreeNode",
]
