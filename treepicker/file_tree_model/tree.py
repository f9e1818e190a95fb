"""Lazy tree model backed by a path-keyed node registry.

Directories are scanned on first expansion only; later expand/collapse
toggles reuse the cached children. The filesystem is assumed not to change
underneath a session, so nothing is re-scanned unless ``invalidate`` is called.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from functools import partial
from pathlib import Path

from ..errors import ReadError
from .fs import DirectoryChild, scan_directory
from .types import ExpansionState, NodeKind, TreeNode

logger = logging.getLogger(__name__)

Scanner = Callable[[Path], list[DirectoryChild]]


class LazyTree:
    """In-memory registry of every node discovered so far."""

    def __init__(self, root: Path, scanner: Scanner | None = None, show_hidden: bool = True) -> None:
        self.root = root
        self._scanner: Scanner = scanner or partial(scan_directory, show_hidden=show_hidden)
        self._nodes: dict[Path, TreeNode] = {
            root: TreeNode(path=root, kind=NodeKind.DIRECTORY),
        }

    def __contains__(self, path: object) -> bool:
        return path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, path: Path) -> TreeNode:
        """Return the registered node for ``path``; ``KeyError`` when unknown."""
        return self._nodes[path]

    def get(self, path: Path) -> TreeNode | None:
        return self._nodes.get(path)

    def _load_children(self, node: TreeNode) -> None:
        try:
            listing = self._scanner(node.path)
        except ReadError as exc:
            logger.warning("cannot read directory %s: %s", node.path, exc.reason)
            node.children = ()
            node.scan_error = str(exc.reason)
            return

        child_paths: list[Path] = []
        for entry in listing:
            kind = NodeKind.DIRECTORY if entry.is_dir else NodeKind.FILE
            self._nodes[entry.path] = TreeNode(path=entry.path, kind=kind, parent=node.path)
            child_paths.append(entry.path)
        node.children = tuple(child_paths)
        node.scan_error = None

    def expand(self, path: Path) -> None:
        """Show children of a directory, scanning it the first time only."""
        node = self._nodes[path]
        if not node.is_dir:
            return
        if not node.is_loaded:
            self._load_children(node)
        node.state = ExpansionState.EXPANDED

    def collapse(self, path: Path) -> None:
        """Hide children of an expanded directory, keeping them cached."""
        node = self._nodes[path]
        if node.state is ExpansionState.EXPANDED:
            node.state = ExpansionState.COLLAPSED

    def toggle(self, path: Path) -> None:
        node = self._nodes[path]
        if node.is_expanded:
            self.collapse(path)
        else:
            self.expand(path)

    def invalidate(self, path: Path) -> None:
        """Forget cached children so the next ``expand`` scans again.

        Descendant nodes are dropped from the registry.
        """
        node = self._nodes[path]
        if not node.is_dir:
            return
        for descendant in list(self._descendants(node)):
            self._nodes.pop(descendant, None)
        node.children = ()
        node.scan_error = None
        node.state = ExpansionState.UNLOADED

    def _descendants(self, node: TreeNode) -> Iterator[Path]:
        for child_path in node.children:
            yield child_path
            child = self._nodes.get(child_path)
            if child is not None and child.children:
                yield from self._descendants(child)

    def parent_of(self, path: Path) -> TreeNode | None:
        parent = self._nodes[path].parent
        if parent is None:
            return None
        return self._nodes.get(parent)

    def children_of(self, path: Path) -> list[TreeNode]:
        return [self._nodes[child] for child in self._nodes[path].children]

    def first_child(self, path: Path) -> TreeNode | None:
        """Return the first child, loading the directory if it was never scanned."""
        node = self._nodes[path]
        if not node.is_dir:
            return None
        if not node.is_loaded:
            self.expand(path)
        if not node.children:
            return None
        return self._nodes[node.children[0]]

    def depth_of(self, path: Path) -> int:
        depth = 0
        parent = self._nodes[path].parent
        while parent is not None:
            depth += 1
            parent = self._nodes[parent].parent
        return depth

    def visible_paths(self) -> list[Path]:
        """Depth-first display order, descending only into expanded directories."""
        out: list[Path] = []

        def walk(path: Path) -> None:
            out.append(path)
            node = self._nodes[path]
            if node.is_expanded:
                for child in node.children:
                    walk(child)

        walk(self.root)
        return out


__all__ = [
    "LazyTree",
    "Scanner",
]
