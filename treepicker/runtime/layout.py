"""Pane width helpers."""

from __future__ import annotations

TREE_SHARE = 3
LIST_SHARE = 2


def compute_left_width(total_width: int, percent: float | None = None) -> int:
    """Choose the tree pane width; by default the tree gets three fifths."""
    if percent is not None:
        desired = int(total_width * percent / 100.0)
    else:
        desired = (total_width * TREE_SHARE) // (TREE_SHARE + LIST_SHARE)
    return clamp_left_width(total_width, desired)


def clamp_left_width(total_width: int, desired_left: int) -> int:
    """Clamp requested tree-pane width to safe viewport bounds."""
    max_possible = max(1, total_width - 2)
    min_left = max(12, min(20, total_width - 12))
    max_left = max(min_left, total_width - 12)
    max_left = min(max_left, max_possible)
    min_left = min(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def scroll_start(selected: int, start: int, rows: int, total: int) -> int:
    """Return a list viewport start that keeps ``selected`` visible."""
    rows = max(1, rows)
    if selected < start:
        start = selected
    elif selected >= start + rows:
        start = selected - rows + 1
    return max(0, min(start, max(0, total - rows)))
