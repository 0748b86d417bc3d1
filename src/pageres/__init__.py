"""Capture screenshots of websites at multiple screen resolutions."""

__version__ = "0.1.0"

from pageres.coordinator import BatchCoordinator, generate  # noqa: E402
from pageres.errors import (  # noqa: E402
    InputError,
    PageresError,
    RenderError,
    ResolutionLookupError,
    WriteError,
)
from pageres.models import BatchOutcome, CaptureResult, CaptureTask, Resolution  # noqa: E402
from pageres.tasks import enumerate_tasks, split_arguments  # noqa: E402

__all__ = [
    "BatchCoordinator",
    "BatchOutcome",
    "CaptureResult",
    "CaptureTask",
    "InputError",
    "PageresError",
    "RenderError",
    "Resolution",
    "ResolutionLookupError",
    "WriteError",
    "enumerate_tasks",
    "generate",
    "split_arguments",
]
