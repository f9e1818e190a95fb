"""Mutable runtime state shared by the loop, key handlers, and renderer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..export import ExportMode
from ..navigation import NavigationController


@dataclass(frozen=True)
class ModalChoice:
    """One button of a modal: hotkeys, label, and the value it resolves to."""

    label: str
    hotkeys: tuple[str, ...]
    value: ExportMode | None = None


@dataclass
class Modal:
    """Centered dialog. ``choices`` with values make it an export prompt."""

    text: str
    choices: tuple[ModalChoice, ...]
    selected: int = 0


OK_CHOICE = ModalChoice("OK", ("ENTER", "ESC", " "))

EXPORT_CHOICES: tuple[ModalChoice, ...] = (
    ModalChoice("Editor", ("o", "e", "g"), ExportMode.OPEN),
    ModalChoice("Copy to clipboard", ("c", "y"), ExportMode.CLIPBOARD),
    ModalChoice("Cancel", ("ESC", "n"), ExportMode.CANCEL),
)


def notice(text: str) -> Modal:
    return Modal(text=text, choices=(OK_CHOICE,))


def export_prompt() -> Modal:
    return Modal(
        text="Open selected files in an editor or copy combined content to clipboard?",
        choices=EXPORT_CHOICES,
    )


@dataclass
class AppState:
    start_dir: Path
    nav: NavigationController
    left_width: int
    usable: int = 24
    width: int = 80
    tree_start: int = 0
    list_start: int = 0
    modal: Modal | None = None
    dirty: bool = True
