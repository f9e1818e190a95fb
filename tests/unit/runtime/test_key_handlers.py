"""Tests for key dispatch across the tree pane, the selection pane, and modals."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from treepicker.export import ExportMode, ExportResult
from treepicker.file_tree_model import DirectoryChild, LazyTree
from treepicker.navigation import NavigationController, Pane
from treepicker.runtime.key_handlers import KeyActions, handle_key
from treepicker.runtime.state import AppState
from treepicker.selection import SelectionSet

ROOT = Path("/project")
SUB = ROOT / "sub"
A_TXT = ROOT / "a.txt"
B_TXT = ROOT / "b.txt"

LISTING: dict[Path, list[tuple[str, bool]]] = {
    ROOT: [("sub", True), ("a.txt", False), ("b.txt", False)],
    SUB: [("c.txt", False)],
}


def _scanner(directory: Path) -> list[DirectoryChild]:
    return [DirectoryChild(name=name, path=directory / name, is_dir=is_dir) for name, is_dir in LISTING[directory]]


def _make_state() -> AppState:
    tree = LazyTree(ROOT, scanner=_scanner)
    tree.expand(ROOT)
    return AppState(start_dir=ROOT, nav=NavigationController(tree, SelectionSet()), left_width=40)


def _make_actions(result: ExportResult | None = None) -> KeyActions:
    export = mock.Mock(return_value=result)
    return KeyActions(export=export, resize_tree=mock.Mock())


def _press(state: AppState, actions: KeyActions, *keys: str) -> bool:
    quit_requested = False
    for key in keys:
        quit_requested = handle_key(key, state, actions)
    return quit_requested


class TreeKeyTests(unittest.TestCase):
    def test_quit_keys(self) -> None:
        state = _make_state()
        actions = _make_actions()

        self.assertTrue(handle_key("q", state, actions))
        self.assertTrue(handle_key("CTRL_C", state, actions))
        self.assertFalse(handle_key("j", state, actions))

    def test_hjkl_and_space_select_files(self) -> None:
        state = _make_state()
        actions = _make_actions()

        _press(state, actions, "j", "j", " ", "DOWN", " ")

        self.assertEqual(state.nav.selection.ordered_paths(), (A_TXT, B_TXT))
        self.assertTrue(state.dirty)

        _press(state, actions, "k", "k", "l")
        self.assertEqual(state.nav.cursor, SUB)
        self.assertTrue(state.nav.tree.node(SUB).is_expanded)

        _press(state, actions, "h")
        self.assertFalse(state.nav.tree.node(SUB).is_expanded)
        _press(state, actions, "h")
        self.assertEqual(state.nav.cursor, ROOT)

    def test_right_arrow_only_expands(self) -> None:
        state = _make_state()
        actions = _make_actions()

        _press(state, actions, "j", "RIGHT", "RIGHT")

        self.assertEqual(state.nav.cursor, SUB)
        self.assertTrue(state.nav.tree.node(SUB).is_expanded)

    def test_shift_arrows_resize_tree_pane(self) -> None:
        state = _make_state()
        actions = _make_actions()

        _press(state, actions, "SHIFT_RIGHT", "SHIFT_LEFT")

        self.assertEqual(actions.resize_tree.call_args_list, [mock.call(2), mock.call(-2)])

    def test_focus_keys(self) -> None:
        state = _make_state()
        actions = _make_actions()

        _press(state, actions, "]")
        self.assertIs(state.nav.focus, Pane.SELECTION)
        _press(state, actions, "[")
        self.assertIs(state.nav.focus, Pane.TREE)
        _press(state, actions, "TAB")
        self.assertIs(state.nav.focus, Pane.SELECTION)
        _press(state, actions, "ESC")
        self.assertIs(state.nav.focus, Pane.TREE)


class SelectionPaneKeyTests(unittest.TestCase):
    def test_d_removes_focused_entry(self) -> None:
        state = _make_state()
        actions = _make_actions()
        _press(state, actions, "j", "j", " ", "j", " ", "]", "j", "d")

        self.assertEqual(state.nav.selection.ordered_paths(), (A_TXT,))
        self.assertEqual(state.nav.list_index, 0)

    def test_export_with_empty_selection_shows_notice_without_prompt(self) -> None:
        state = _make_state()
        actions = _make_actions()

        _press(state, actions, "]", "e")

        self.assertIsNotNone(state.modal)
        self.assertEqual(state.modal.text, "No files selected.")
        self.assertEqual([choice.label for choice in state.modal.choices], ["OK"])

        _press(state, actions, "ENTER")
        self.assertIsNone(state.modal)
        actions.export.assert_not_called()


class ExportModalTests(unittest.TestCase):
    def _state_with_selection(self) -> AppState:
        state = _make_state()
        state.nav.selection.add(A_TXT)
        state.nav.focus = Pane.SELECTION
        return state

    def test_prompt_hotkey_runs_clipboard_export_and_shows_result(self) -> None:
        state = self._state_with_selection()
        result = ExportResult(ok=True, message="Combined content copied to clipboard.", mode=ExportMode.CLIPBOARD)
        actions = _make_actions(result)

        _press(state, actions, "e")
        self.assertEqual(len(state.modal.choices), 3)
        _press(state, actions, "c")

        actions.export.assert_called_once_with(ExportMode.CLIPBOARD)
        self.assertEqual(state.modal.text, "Combined content copied to clipboard.")

    def test_enter_confirms_highlighted_choice(self) -> None:
        state = self._state_with_selection()
        artifact = Path("/tmp/treepicker_selected_1.txt")
        result = ExportResult(ok=True, message="opened", mode=ExportMode.OPEN, artifact_path=artifact)
        actions = _make_actions(result)

        _press(state, actions, "e", "ENTER")

        actions.export.assert_called_once_with(ExportMode.OPEN)
        self.assertEqual(state.modal.text, "opened")

    def test_arrow_keys_cycle_choices(self) -> None:
        state = self._state_with_selection()
        result = ExportResult(ok=True, message="copied", mode=ExportMode.CLIPBOARD)
        actions = _make_actions(result)

        _press(state, actions, "e", "RIGHT", "RIGHT", "RIGHT", "LEFT")
        self.assertEqual(state.modal.selected, 2)
        _press(state, actions, "h", "ENTER")

        actions.export.assert_called_once_with(ExportMode.CLIPBOARD)

    def test_escape_cancels_without_export(self) -> None:
        state = self._state_with_selection()
        actions = _make_actions()

        _press(state, actions, "e", "ESC")

        self.assertIsNone(state.modal)
        actions.export.assert_not_called()
        self.assertIs(state.nav.focus, Pane.SELECTION)

    def test_q_is_ignored_while_modal_is_open(self) -> None:
        state = self._state_with_selection()
        actions = _make_actions()

        self.assertFalse(_press(state, actions, "e", "q"))
        self.assertIsNotNone(state.modal)
        self.assertTrue(handle_key("CTRL_C", state, actions))

    def test_unrelated_keys_leave_prompt_open(self) -> None:
        state = self._state_with_selection()
        actions = _make_actions()

        _press(state, actions, "e", "j", "x", "DELETE", "PAGE_DOWN", "UNKNOWN")

        self.assertIsNotNone(state.modal)
        self.assertEqual(state.nav.selection.ordered_paths(), (A_TXT,))


if __name__ == "__main__":
    unittest.main()
