"""Exception taxonomy shared by the tree model and the export pipeline.

None of these are fatal to the interactive session: the runtime turns each of
them into a notice. Only startup failures end the process (see ``cli``).
"""

from __future__ import annotations

from pathlib import Path


class TreePickerError(Exception):
    """Base class for all recoverable treepicker failures."""


class ReadError(TreePickerError):
    """A directory listing or file read failed."""

    def __init__(self, path: Path, reason: object) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ArtifactError(TreePickerError):
    """The temporary export file could not be created or written."""


class ProcessLaunchError(TreePickerError):
    """Both the primary and the fallback external command failed.

    ``fallback_error`` is ``None`` when no fallback command is configured.
    """

    def __init__(self, message: str, primary_error: str, fallback_error: str | None = None) -> None:
        self.primary_error = primary_error
        self.fallback_error = fallback_error
        super().__init__(message)


class EmptySelectionError(TreePickerError):
    """Export was requested while nothing is selected."""

    def __init__(self) -> None:
        super().__init__("No files selected.")


__all__ = [
    "TreePickerError",
    "ReadError",
    "ArtifactError",
    "ProcessLaunchError",
    "EmptySelectionError",
]
