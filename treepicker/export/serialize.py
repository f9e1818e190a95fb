"""Serialization of the selection into one export buffer.

Both export modes share the per-file header (relative path plus a blank line)
and the newline normalization of the content. The editor mode wraps content
in Markdown code fences; the clipboard mode separates blocks with ``---``.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from ..errors import ReadError

CLIPBOARD_SEPARATOR = b"\n---\n\n"
FENCE = b"```"


def relative_label(path: Path, start_dir: Path) -> str:
    """Return ``path`` relative to ``start_dir``, or the absolute path on failure."""
    try:
        return os.path.relpath(path, start_dir)
    except ValueError:
        return str(path)


def fence_language(path: Path) -> str:
    """Pygments alias for the fence info string, empty when unknown or plain text."""
    try:
        lexer = get_lexer_for_filename(path.name)
    except ClassNotFound:
        return ""
    aliases = getattr(lexer, "aliases", None) or []
    if not aliases or aliases[0] == "text":
        return ""
    return aliases[0]


def read_file_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ReadError(path, exc) from exc


def _content_block(path: Path) -> bytes:
    try:
        content = read_file_bytes(path)
    except ReadError as exc:
        return f"error reading file: {exc.reason}\n".encode("utf-8")
    if not content.endswith(b"\n"):
        content += b"\n"
    return content


def build_export_buffer(paths: Iterable[Path], start_dir: Path, fenced: bool) -> bytes:
    """Concatenate labelled file blocks in the given order.

    Unreadable files are replaced by an inline ``error reading file`` note so
    one bad entry never aborts the export.
    """
    out: list[bytes] = []
    for path in paths:
        out.append(relative_label(path, start_dir).encode("utf-8", errors="surrogateescape"))
        out.append(b"\n\n")
        if fenced:
            out.append(FENCE + fence_language(path).encode("ascii") + b"\n")
            out.append(_content_block(path))
            out.append(FENCE + b"\n\n")
        else:
            out.append(_content_block(path))
            out.append(CLIPBOARD_SEPARATOR)
    return b"".join(out)


__all__ = [
    "CLIPBOARD_SEPARATOR",
    "relative_label",
    "fence_language",
    "read_file_bytes",
    "build_export_buffer",
]
