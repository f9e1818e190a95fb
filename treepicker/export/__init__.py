"""Export of the selected files to an editor or the clipboard."""

from __future__ import annotations

from .launch import CommandSpec, ExportCommands, LaunchOutcome, launch_opener, pipe_to_command, run_with_fallback
from .pipeline import ExportMode, ExportPipeline, ExportResult, write_artifact
from .serialize import build_export_buffer, fence_language, relative_label

__all__ = [
    "CommandSpec",
    "ExportCommands",
    "LaunchOutcome",
    "launch_opener",
    "pipe_to_command",
    "run_with_fallback",
    "ExportMode",
    "ExportPipeline",
    "ExportResult",
    "write_artifact",
    "build_export_buffer",
    "fence_language",
    "relative_label",
]
