"""Tests for the main loop: redraw bookkeeping and viewport syncing."""

from __future__ import annotations

import os
import unittest
from contextlib import contextmanager
from pathlib import Path
from unittest import mock

from treepicker.file_tree_model import DirectoryChild, LazyTree
from treepicker.navigation import NavigationController
from treepicker.runtime.key_handlers import KeyActions
from treepicker.runtime.loop import IDLE_TIMEOUT_MS, run_main_loop, sync_viewports
from treepicker.runtime.render import FrameSize
from treepicker.runtime.state import AppState
from treepicker.selection import SelectionSet

ROOT = Path("/project")


def _scanner(directory: Path) -> list[DirectoryChild]:
    if directory != ROOT:
        return []
    return [DirectoryChild(name=f"f{idx:02d}.txt", path=ROOT / f"f{idx:02d}.txt", is_dir=False) for idx in range(30)]


def _make_state() -> AppState:
    tree = LazyTree(ROOT, scanner=_scanner)
    tree.expand(ROOT)
    return AppState(start_dir=ROOT, nav=NavigationController(tree, SelectionSet()), left_width=40)


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []
        self.raw_mode_entered = 0
        self.raw_mode_exited = 0

    @contextmanager
    def raw_mode(self):
        self.raw_mode_entered += 1
        try:
            yield
        finally:
            self.raw_mode_exited += 1

    def write(self, frame: str) -> None:
        self.frames.append(frame)


def _key_source(keys: list[str]):
    pending = list(keys)
    calls: list[tuple[int, int | None]] = []

    def read_key_fn(fd: int, timeout_ms: int | None = None) -> str:
        calls.append((fd, timeout_ms))
        return pending.pop(0)

    return read_key_fn, calls


class MainLoopTests(unittest.TestCase):
    def test_redraws_only_when_dirty_and_quits_on_q(self) -> None:
        state = _make_state()
        terminal = _FakeTerminal()
        read_key_fn, calls = _key_source(["", "j", "", "q"])
        actions = KeyActions(export=mock.Mock(), resize_tree=mock.Mock())

        with mock.patch(
            "treepicker.runtime.loop.shutil.get_terminal_size", return_value=os.terminal_size((80, 24))
        ):
            run_main_loop(state, terminal, 7, actions, read_key_fn=read_key_fn)

        self.assertEqual(len(terminal.frames), 2)
        self.assertEqual(terminal.raw_mode_entered, 1)
        self.assertEqual(terminal.raw_mode_exited, 1)
        self.assertEqual(calls[0], (7, IDLE_TIMEOUT_MS))
        self.assertEqual(state.nav.cursor, ROOT / "f00.txt")

    def test_terminal_is_restored_when_a_handler_raises(self) -> None:
        state = _make_state()
        terminal = _FakeTerminal()
        read_key_fn, _ = _key_source(["j"])
        actions = KeyActions(export=mock.Mock(), resize_tree=mock.Mock())

        with mock.patch(
            "treepicker.runtime.loop.shutil.get_terminal_size", return_value=os.terminal_size((80, 24))
        ), mock.patch("treepicker.runtime.loop.handle_key", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                run_main_loop(state, terminal, 0, actions, read_key_fn=read_key_fn)

        self.assertEqual(terminal.raw_mode_exited, 1)


class SyncViewportsTests(unittest.TestCase):
    def test_scrolls_tree_to_keep_cursor_visible(self) -> None:
        state = _make_state()
        state.nav.cursor = ROOT / "f25.txt"
        state.dirty = False

        sync_viewports(state, FrameSize(width=80, height=12))

        # Cursor is visible row 26; ten content rows end on it.
        self.assertEqual(state.usable, 10)
        self.assertEqual(state.tree_start, 17)
        self.assertTrue(state.dirty)

    def test_clamps_left_width_to_terminal(self) -> None:
        state = _make_state()
        state.left_width = 200

        sync_viewports(state, FrameSize(width=60, height=20))

        self.assertEqual(state.left_width, 48)
        self.assertEqual(state.width, 60)

    def test_stable_state_does_not_mark_dirty(self) -> None:
        state = _make_state()
        size = FrameSize(width=80, height=24)
        sync_viewports(state, size)
        state.dirty = False

        sync_viewports(state, size)

        self.assertFalse(state.dirty)

    def test_list_viewport_follows_list_cursor(self) -> None:
        state = _make_state()
        for idx in range(12):
            state.nav.selection.add(ROOT / f"f{idx:02d}.txt")
        state.nav.list_index = 11

        sync_viewports(state, FrameSize(width=80, height=7))

        self.assertEqual(state.list_start, 7)


if __name__ == "__main__":
    unittest.main()
