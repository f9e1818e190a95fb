"""Insertion-ordered set of selected file paths."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path


class SelectionSet:
    """Ordered selection backed by a dict used as an ordered set.

    Dict insertion order keeps ``ordered_paths`` in selection order, and
    deleting a key leaves the relative order of the remaining keys intact.
    """

    def __init__(self) -> None:
        self._paths: dict[Path, None] = {}

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __bool__(self) -> bool:
        return bool(self._paths)

    def contains(self, path: Path) -> bool:
        return path in self._paths

    def add(self, path: Path) -> None:
        if path not in self._paths:
            self._paths[path] = None

    def remove(self, path: Path) -> None:
        self._paths.pop(path, None)

    def toggle(self, path: Path) -> bool:
        """Flip membership of ``path`` and return whether it is now selected."""
        if path in self._paths:
            del self._paths[path]
            return False
        self._paths[path] = None
        return True

    def ordered_paths(self) -> tuple[Path, ...]:
        return tuple(self._paths)


__all__ = ["SelectionSet"]
