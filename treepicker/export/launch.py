"""External command helpers for the editor and clipboard hand-off.

Each helper returns an error message string instead of raising, so callers can
try a fallback command and combine both messages into one notice.
"""

from __future__ import annotations

import contextlib
import logging
import shlex
import shutil
import signal
import subprocess
from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SuspendTui = Callable[[], AbstractContextManager[object]]


@dataclass(frozen=True)
class CommandSpec:
    """One external command line.

    ``terminal`` commands take over the terminal: they run to completion with
    the TUI suspended and a non-zero exit status counts as failure. Other
    commands are started detached and only a start failure counts.
    """

    argv: tuple[str, ...]
    terminal: bool = False

    @property
    def name(self) -> str:
        return self.argv[0] if self.argv else ""

    def display(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class ExportCommands:
    """Primary and fallback commands for both export modes."""

    editor: CommandSpec
    editor_fallback: CommandSpec | None
    clipboard: CommandSpec
    clipboard_fallback: CommandSpec | None


def _default_sigint() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)


def launch_opener(
    command: CommandSpec,
    target: Path,
    suspend_tui: SuspendTui | None = None,
) -> str | None:
    """Open ``target`` with ``command``; return an error message on failure."""
    if not command.argv:
        return "no command configured"
    argv = [*command.argv, str(target)]
    if command.terminal:
        suspend = suspend_tui or contextlib.nullcontext
        # The tty is cooked while suspended, so Ctrl-C reaches this process
        # too. Only the editor should see it.
        previous_handler = signal.signal(signal.SIGINT, signal.SIG_IGN)
        try:
            with suspend():
                proc = subprocess.run(argv, check=False, preexec_fn=_default_sigint)
        except OSError as exc:
            return f"{command.name}: {exc}"
        except KeyboardInterrupt:
            return f"{command.name}: interrupted"
        finally:
            signal.signal(signal.SIGINT, previous_handler)
        if proc.returncode != 0:
            return f"{command.name}: exited with status {proc.returncode}"
        return None

    try:
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        return f"{command.name}: {exc}"
    return None


def pipe_to_command(command: CommandSpec, data: bytes) -> str | None:
    """Write ``data`` to the stdin of ``command`` and wait for it to exit.

    Blocks until the command exits; there is no timeout.
    """
    if not command.argv:
        return "no command configured"
    if shutil.which(command.name) is None:
        return f"{command.name}: not found in PATH"
    try:
        proc = subprocess.run(
            list(command.argv),
            input=data,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        return f"{command.name}: {exc}"
    if proc.returncode != 0:
        return f"{command.name}: exited with status {proc.returncode}"
    return None


@dataclass(frozen=True)
class LaunchOutcome:
    """Result of a primary/fallback command chain."""

    ok: bool
    used: CommandSpec | None = None
    primary_error: str | None = None
    fallback_error: str | None = None


def run_with_fallback(
    attempt: Callable[[CommandSpec], str | None],
    primary: CommandSpec,
    fallback: CommandSpec | None,
) -> LaunchOutcome:
    """Run ``attempt`` with the primary command, then the fallback if needed."""
    primary_error = attempt(primary)
    if primary_error is None:
        return LaunchOutcome(ok=True, used=primary)
    logger.warning("primary command %s failed: %s", primary.display(), primary_error)
    if fallback is None:
        return LaunchOutcome(ok=False, primary_error=primary_error)
    fallback_error = attempt(fallback)
    if fallback_error is not None:
        logger.warning("fallback command %s failed: %s", fallback.display(), fallback_error)
        return LaunchOutcome(ok=False, primary_error=primary_error, fallback_error=fallback_error)
    return LaunchOutcome(ok=True, used=fallback, primary_error=primary_error)


__all__ = [
    "CommandSpec",
    "ExportCommands",
    "LaunchOutcome",
    "SuspendTui",
    "launch_opener",
    "pipe_to_command",
    "run_with_fallback",
]
