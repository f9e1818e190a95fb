"""Persistent JSON config helpers.

Stores export command overrides, hidden-file preference, and the tree pane
width. All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import shlex
import sys
from pathlib import Path

from platformdirs import user_config_dir

from .export.launch import CommandSpec, ExportCommands

APP_NAME = "treepicker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_LINUX_DEFAULTS: dict[str, tuple[str, ...] | None] = {
    "editor": ("gedit",),
    "editor_fallback": ("xdg-open",),
    "clipboard": ("wl-copy",),
    "clipboard_fallback": ("xclip", "-selection", "clipboard"),
}

_MACOS_DEFAULTS: dict[str, tuple[str, ...] | None] = {
    "editor": ("open", "-t"),
    "editor_fallback": ("open",),
    "clipboard": ("pbcopy",),
    "clipboard_fallback": None,
}


def default_commands(platform: str | None = None) -> dict[str, tuple[str, ...] | None]:
    """Return built-in command lines for ``platform`` (defaults to ``sys.platform``)."""
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return dict(_MACOS_DEFAULTS)
    return dict(_LINUX_DEFAULTS)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def parse_command(value: object) -> tuple[str, ...] | None:
    """Normalize a command given as a shell string or a list of strings.

    Returns ``None`` for anything unusable, including empty commands.
    """
    if isinstance(value, str):
        try:
            argv = shlex.split(value)
        except ValueError:
            return None
    elif isinstance(value, list) and all(isinstance(part, str) for part in value):
        argv = list(value)
    else:
        return None
    return tuple(argv) if argv else None


def _resolve_command(
    config: dict[str, object],
    key: str,
    defaults: dict[str, tuple[str, ...] | None],
) -> tuple[str, ...] | None:
    if key not in config:
        return defaults[key]
    raw_value = config[key]
    if raw_value is None and key.endswith("_fallback"):
        return None
    parsed = parse_command(raw_value)
    return parsed if parsed is not None else defaults[key]


def load_export_commands(
    editor: str | None = None,
    clipboard: str | None = None,
    editor_terminal: bool | None = None,
    platform: str | None = None,
) -> ExportCommands:
    """Merge CLI overrides, config values, and platform defaults.

    A command given on the command line replaces the configured primary; the
    configured fallback stays in place. ``editor_terminal`` (or the config key
    of the same name when it is ``None``) marks the primary editor as a terminal
    program that takes over the screen; the fallback is always started detached.
    """
    config = load_config()
    defaults = default_commands(platform)

    editor_argv = parse_command(editor) if editor else None
    editor_argv = editor_argv or _resolve_command(config, "editor", defaults)
    clipboard_argv = parse_command(clipboard) if clipboard else None
    clipboard_argv = clipboard_argv or _resolve_command(config, "clipboard", defaults)
    editor_fallback = _resolve_command(config, "editor_fallback", defaults)
    clipboard_fallback = _resolve_command(config, "clipboard_fallback", defaults)

    if editor_terminal is None:
        raw_terminal = config.get("editor_terminal")
        editor_terminal = raw_terminal if isinstance(raw_terminal, bool) else False

    return ExportCommands(
        editor=CommandSpec(editor_argv or (), terminal=editor_terminal),
        editor_fallback=None if editor_fallback is None else CommandSpec(editor_fallback),
        clipboard=CommandSpec(clipboard_argv or ()),
        clipboard_fallback=None if clipboard_fallback is None else CommandSpec(clipboard_fallback),
    )


def load_show_hidden() -> bool:
    """Return hidden-file visibility preference.

    Only explicit boolean values are accepted; anything else falls back to
    ``True`` so every directory entry is listed by default.
    """
    value = load_config().get("show_hidden")
    return bool(value) if isinstance(value, bool) else True


def load_left_pane_percent() -> float | None:
    """Read the tree pane width percentage constrained to the open interval (0, 100)."""
    value = load_config().get("left_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0 or value >= 100:
        return None
    return float(value)


def save_left_pane_percent(total_width: int, left_width: int) -> None:
    """Store the tree pane width as a bounded percentage.

    ``left_width / total_width`` is clamped to ``[1.0, 99.0]`` and rounded to
    two decimals before persisting.
    """
    if total_width <= 0:
        return
    percent = max(1.0, min(99.0, (left_width / total_width) * 100.0))
    config = load_config()
    config["left_pane_percent"] = round(percent, 2)
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "default_commands",
    "load_config",
    "save_config",
    "parse_command",
    "load_export_commands",
    "load_show_hidden",
    "load_left_pane_percent",
    "save_left_pane_percent",
]
