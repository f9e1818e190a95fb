"""Two-mode export of the current selection.

``open`` spools the fenced buffer to a temporary file and hands it to an
editor; ``clipboard`` pipes the unfenced buffer into a clipboard utility.
Temporary files are left on disk so the user can still inspect them when the
editor fails to start.
"""

from __future__ import annotations

import enum
import logging
import os
import tempfile
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from ..errors import ArtifactError, EmptySelectionError, ProcessLaunchError, TreePickerError
from ..selection import SelectionSet
from .launch import ExportCommands, SuspendTui, launch_opener, pipe_to_command, run_with_fallback
from .serialize import build_export_buffer

logger = logging.getLogger(__name__)

ARTIFACT_PREFIX = "treepicker_selected_"
ARTIFACT_SUFFIX = ".txt"


class ExportMode(enum.Enum):
    OPEN = "open"
    CLIPBOARD = "clipboard"
    CANCEL = "cancel"


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export trigger, ready to be shown as a notice."""

    ok: bool
    message: str
    mode: ExportMode
    artifact_path: Path | None = None
    error: TreePickerError | None = None


def write_artifact(buffer: bytes, temp_dir: Path | None = None) -> Path:
    """Write ``buffer`` to a new uniquely named temporary file and return its path."""
    try:
        fd, raw_path = tempfile.mkstemp(
            prefix=ARTIFACT_PREFIX,
            suffix=ARTIFACT_SUFFIX,
            dir=None if temp_dir is None else str(temp_dir),
        )
    except OSError as exc:
        raise ArtifactError(f"Error creating temporary file: {exc}") from exc

    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(buffer)
    except OSError as exc:
        raise ArtifactError(f"Error writing temporary file: {exc}") from exc
    return Path(raw_path)


class ExportPipeline:
    """Serialize the selection and hand it to an external consumer."""

    def __init__(
        self,
        selection: SelectionSet,
        start_dir: Path,
        commands: ExportCommands,
        suspend_tui: SuspendTui | None = None,
        temp_dir: Path | None = None,
    ) -> None:
        self.selection = selection
        self.start_dir = start_dir
        self.commands = commands
        self.suspend_tui = suspend_tui
        self.temp_dir = temp_dir

    def build_buffer(self, mode: ExportMode) -> bytes:
        return build_export_buffer(
            self.selection.ordered_paths(),
            self.start_dir,
            fenced=mode is ExportMode.OPEN,
        )

    def _require_selection(self) -> None:
        if not self.selection:
            raise EmptySelectionError()

    def open_in_editor(self) -> Path:
        """Spool the fenced buffer and launch the editor; return the artifact path."""
        self._require_selection()
        artifact = write_artifact(self.build_buffer(ExportMode.OPEN), self.temp_dir)
        logger.info("wrote export artifact %s", artifact)

        outcome = run_with_fallback(
            partial(launch_opener, target=artifact, suspend_tui=self.suspend_tui),
            self.commands.editor,
            self.commands.editor_fallback,
        )
        if not outcome.ok:
            primary_error = outcome.primary_error or "unknown error"
            message = f"Error opening editor: {primary_error}"
            if self.commands.editor_fallback is not None:
                message += (
                    f"\n(fallback {self.commands.editor_fallback.name} also failed: "
                    f"{outcome.fallback_error})"
                )
            message += f"\nTemporary file kept at: {artifact}"
            raise ProcessLaunchError(message, primary_error, outcome.fallback_error)
        logger.info("started %s for %s", outcome.used.display(), artifact)
        return artifact

    def copy_to_clipboard(self) -> None:
        """Pipe the unfenced buffer to the clipboard utility."""
        self._require_selection()
        buffer = self.build_buffer(ExportMode.CLIPBOARD)
        outcome = run_with_fallback(
            partial(pipe_to_command, data=buffer),
            self.commands.clipboard,
            self.commands.clipboard_fallback,
        )
        if not outcome.ok:
            primary_error = outcome.primary_error or "unknown error"
            details = primary_error
            if outcome.fallback_error is not None:
                details += f"; {outcome.fallback_error}"
            raise ProcessLaunchError(
                f"Failed to copy to clipboard: {details}",
                primary_error,
                outcome.fallback_error,
            )
        logger.info("piped export buffer to %s", outcome.used.display())

    def export(self, mode: ExportMode) -> ExportResult:
        """Run one export in ``mode`` and report the outcome without raising."""
        if mode is ExportMode.CANCEL:
            return ExportResult(ok=True, message="", mode=mode)
        try:
            if mode is ExportMode.OPEN:
                artifact = self.open_in_editor()
                return ExportResult(
                    ok=True,
                    message=f"Temporary file created: {artifact}\n(Editor started)",
                    mode=mode,
                    artifact_path=artifact,
                )
            self.copy_to_clipboard()
        except EmptySelectionError as exc:
            logger.info("export requested with empty selection")
            return ExportResult(ok=False, message=str(exc), mode=mode, error=exc)
        except TreePickerError as exc:
            logger.warning("export failed: %s", exc)
            return ExportResult(ok=False, message=str(exc), mode=mode, error=exc)
        logger.info("copied %d file(s) to clipboard", len(self.selection))
        return ExportResult(ok=True, message="Combined content copied to clipboard.", mode=mode)


__all__ = [
    "ARTIFACT_PREFIX",
    "ARTIFACT_SUFFIX",
    "ExportMode",
    "ExportResult",
    "ExportPipeline",
    "write_artifact",
]
