"""
Value types shared by the pipeline stages.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from pageres.errors import TaskError

RESOLUTION_PATTERN = re.compile(r"^(\d{3,4})x(\d{3,4})$", re.IGNORECASE)


@dataclass(frozen=True)
class Resolution:
    """A viewport size, written as WIDTHxHEIGHT."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Resolution must be positive, got {self.width}x{self.height}")

    @classmethod
    def parse(cls, text: str) -> Resolution:
        match = RESOLUTION_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Not a resolution: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class CaptureTask:
    """One (url, resolution) unit of work and the file it is saved to."""

    url: str
    resolution: Resolution
    filename: str


@dataclass(frozen=True)
class CaptureResult:
    """How a single task settled."""

    task: CaptureTask
    path: Path | None = None
    bytes_written: int = 0
    error: TaskError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchOutcome:
    """
    Aggregate over every task in a batch.

    Results are appended in settlement order. Once finalize() is called
    the outcome no longer accepts results.
    """

    attempted: int = 0
    succeeded: list[CaptureResult] = field(default_factory=list)
    failures: list[CaptureResult] = field(default_factory=list)
    finalized: bool = False

    def add(self, result: CaptureResult) -> None:
        if self.finalized:
            raise RuntimeError("BatchOutcome is finalized")
        if result.ok:
            self.succeeded.append(result)
        else:
            self.failures.append(result)

    def finalize(self) -> BatchOutcome:
        self.finalized = True
        return self

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def first_error(self) -> TaskError | None:
        return self.failures[0].error if self.failures else None

    @property
    def settled(self) -> int:
        return len(self.succeeded) + len(self.failures)
