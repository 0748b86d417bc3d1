"""
Error types raised by the pageres pipeline.

Per-task errors carry the task they belong to so a failed batch can tell
which (url, resolution) pair went wrong.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pageres.models import CaptureTask


class PageresError(Exception):
    """Base class for all pageres errors."""


class InputError(PageresError):
    """The caller supplied no usable URLs."""


class TaskError(PageresError):
    """A failure attributed to a single capture task."""

    def __init__(self, task: CaptureTask, cause: BaseException | str):
        self.task = task
        self.cause = cause
        super().__init__(f"{task.url} ({task.resolution}): {cause}")


class RenderError(TaskError):
    """The render capability failed for one task."""


class WriteError(TaskError):
    """Writing the screenshot to disk failed for one task."""


class ResolutionLookupError(PageresError, LookupError):
    """Fetching the default list of popular resolutions failed."""
