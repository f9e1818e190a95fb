"""Tests for frame composition of the split tree/selection view."""

from __future__ import annotations

import unittest
from pathlib import Path

from treepicker.ansi import ANSI_ESCAPE_RE, display_width
from treepicker.errors import ReadError
from treepicker.file_tree_model import DirectoryChild, LazyTree
from treepicker.navigation import NavigationController, Pane
from treepicker.runtime.render import HELP_MODAL, HELP_SELECTION, HELP_TREE, FrameSize, format_tree_row, render_frame
from treepicker.runtime.state import AppState, export_prompt
from treepicker.selection import SelectionSet
from treepicker.ui_theme import PLAIN_THEME

ROOT = Path("/project")
SUB = ROOT / "sub"
LOCKED = ROOT / "locked"
A_TXT = ROOT / "a.txt"
C_TXT = SUB / "c.txt"


def _scanner(directory: Path) -> list[DirectoryChild]:
    listing = {
        ROOT: [("locked", True), ("sub", True), ("a.txt", False)],
        SUB: [("c.txt", False)],
    }
    return [DirectoryChild(name=name, path=directory / name, is_dir=is_dir) for name, is_dir in listing[directory]]


def _make_state() -> AppState:
    tree = LazyTree(ROOT, scanner=_scanner)
    tree.expand(ROOT)
    return AppState(start_dir=ROOT, nav=NavigationController(tree, SelectionSet()), left_width=40)


def _plain_rows(frame: str) -> list[str]:
    assert frame.startswith("\033[H\033[J")
    return [ANSI_ESCAPE_RE.sub("", row) for row in frame[len("\033[H\033[J") :].split("\r\n")]


class FormatTreeRowTests(unittest.TestCase):
    def test_rows_show_markers_indent_and_selection(self) -> None:
        state = _make_state()
        tree = state.nav.tree
        tree.expand(SUB)
        state.nav.selection.add(C_TXT)

        def plain(path: Path) -> str:
            return ANSI_ESCAPE_RE.sub("", format_tree_row(tree, path, state.nav.selection, PLAIN_THEME))

        self.assertEqual(plain(ROOT), "▾ /project")
        self.assertEqual(plain(SUB), "  ▾ sub/")
        self.assertEqual(plain(C_TXT), "    * c.txt")
        self.assertEqual(plain(A_TXT), "    a.txt")

    def test_unreadable_directory_is_marked_after_expansion(self) -> None:
        def failing_scanner(directory: Path) -> list[DirectoryChild]:
            if directory == LOCKED:
                raise ReadError(directory, "Permission denied")
            return _scanner(directory)

        tree = LazyTree(ROOT, scanner=failing_scanner)
        tree.expand(ROOT)
        with self.assertLogs("treepicker.file_tree_model.tree", level="WARNING"):
            tree.expand(LOCKED)

        row = ANSI_ESCAPE_RE.sub("", format_tree_row(tree, LOCKED, SelectionSet(), PLAIN_THEME))
        self.assertEqual(row, "  ▾ locked/ [unreadable]")


class RenderFrameTests(unittest.TestCase):
    def test_frame_fills_terminal_with_title_rows_and_help(self) -> None:
        state = _make_state()
        state.nav.selection.add(A_TXT)
        size = FrameSize(width=80, height=10)

        rows = _plain_rows(render_frame(state, size, PLAIN_THEME))

        self.assertEqual(len(rows), 10)
        self.assertIn(" Tree ", rows[0])
        self.assertIn(" Selected files (1) ", rows[0])
        self.assertTrue(rows[1].startswith("▾ /project"))
        self.assertIn("│ a.txt", rows[1])
        self.assertIn("▸ locked/", rows[2])
        self.assertIn("* a.txt", rows[4])
        self.assertEqual(rows[-1].strip(), HELP_TREE)
        for row in rows[:-1]:
            self.assertEqual(display_width(row), 80)

    def test_cursor_row_is_reversed_in_focused_pane(self) -> None:
        state = _make_state()
        state.nav.selection.add(A_TXT)
        state.nav.move_down()

        frame = render_frame(state, FrameSize(width=60, height=8), PLAIN_THEME)
        tree_rows = frame.split("\r\n")

        self.assertIn("\033[7m", tree_rows[2])
        self.assertNotIn("\033[7m", tree_rows[1])

    def test_help_bar_texts_list_pane_bindings(self) -> None:
        self.assertEqual(HELP_TREE, "h/j/k/l move  Enter/l open  Space select  r reload  ] list  q quit")
        self.assertEqual(HELP_SELECTION, "j/k move  d remove  e export  [ tree  Esc tree  q quit")
        self.assertEqual(HELP_MODAL, "Left/Right choose  Enter confirm  Esc cancel")

    def test_selection_focus_switches_help_text(self) -> None:
        state = _make_state()
        state.nav.focus = Pane.SELECTION

        rows = _plain_rows(render_frame(state, FrameSize(width=80, height=6), PLAIN_THEME))

        self.assertEqual(rows[-1].strip(), HELP_SELECTION)
        self.assertIn(" Selected files (0) ", rows[0])

    def test_modal_is_overlaid_with_choices(self) -> None:
        state = _make_state()
        state.nav.selection.add(A_TXT)
        state.modal = export_prompt()

        rows = _plain_rows(render_frame(state, FrameSize(width=100, height=14), PLAIN_THEME))
        text = "\n".join(rows)

        self.assertIn("Open selected files in an editor", text)
        self.assertIn("[ Editor ]", text)
        self.assertIn("[ Copy to clipboard ]", text)
        self.assertIn("[ Cancel ]", text)
        self.assertEqual(rows[-1].strip(), HELP_MODAL)
        self.assertEqual(len(rows), 14)

    def test_tree_start_scrolls_rows(self) -> None:
        state = _make_state()
        state.tree_start = 2

        rows = _plain_rows(render_frame(state, FrameSize(width=80, height=6), PLAIN_THEME))

        self.assertIn("▸ sub/", rows[1])


if __name__ == "__main__":
    unittest.main()
