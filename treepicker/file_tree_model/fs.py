"""Filesystem scanning for one directory level."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import ReadError


@dataclass(frozen=True)
class DirectoryChild:
    """One directory child row as reported by the scanner."""

    name: str
    path: Path
    is_dir: bool


def sort_key(child: DirectoryChild) -> tuple[bool, str]:
    """Directories first, then case-insensitive name order."""
    return (not child.is_dir, child.name.lower())


def scan_directory(directory: Path, show_hidden: bool = True) -> list[DirectoryChild]:
    """List immediate children of ``directory`` in display order.

    Raises ``ReadError`` when the directory cannot be scanned (permission
    denied, vanished, or not a directory). Symlinks are classified without
    being followed.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                children.append(DirectoryChild(name=name, path=Path(child.path), is_dir=is_dir))
    except OSError as exc:
        raise ReadError(directory, exc.strerror or exc) from exc

    children.sort(key=sort_key)
    return children


__all__ = [
    "DirectoryChild",
    "sort_key",
    "scan_directory",
]
