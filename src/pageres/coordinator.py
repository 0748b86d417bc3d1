"""
Fan capture tasks out and join them into a single BatchOutcome.

By default every task is started immediately; the renderer and the OS file
descriptor limit are the only throttles, so very large batches can exhaust
resources. Pass ``concurrency`` to cap the number of tasks in flight.

A failing task never cancels its siblings. The batch settles once every
task has either written its file or failed, and there are no retries.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from pathlib import Path

from pageres.capture import capture
from pageres.errors import RenderError, TaskError
from pageres.models import BatchOutcome, CaptureResult, CaptureTask, Resolution
from pageres.renderer import Renderer
from pageres.sink import write
from pageres.tasks import enumerate_tasks

PENDING = "pending"
RUNNING = "running"
SETTLED = "settled"

SettledCallback = Callable[[TaskError | None, list[CaptureResult]], None]


class BatchCoordinator:
    """Runs a batch of capture tasks against one renderer."""

    def __init__(
        self,
        renderer: Renderer,
        output_dir: Path | str = ".",
        concurrency: int | None = None,
        task_timeout: float | None = None,
        verbose: bool = False,
    ):
        if concurrency is not None and concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.renderer = renderer
        self.output_dir = Path(output_dir)
        self.concurrency = concurrency
        self.task_timeout = task_timeout
        self.verbose = verbose
        self.state = PENDING
        self._semaphore: asyncio.Semaphore | None = None

    async def run(
        self,
        tasks: Sequence[CaptureTask],
        on_settled: SettledCallback | None = None,
    ) -> BatchOutcome:
        if self.state != PENDING:
            raise RuntimeError(f"Batch already {self.state}")

        self.state = RUNNING
        outcome = BatchOutcome(attempted=len(tasks))
        if self.concurrency:
            self._semaphore = asyncio.Semaphore(self.concurrency)

        async def settle(task: CaptureTask) -> None:
            result = await self._run_task(task)
            outcome.add(result)
            if result.ok:
                if self.verbose:
                    print(f"[batch] Saved {result.path} ({result.bytes_written} bytes)")
            else:
                print(f"[batch] Failed {result.error}")

        await asyncio.gather(*(settle(task) for task in tasks))

        self.state = SETTLED
        outcome.finalize()

        if on_settled:
            on_settled(outcome.first_error, list(outcome.succeeded))
        return outcome

    async def _run_task(self, task: CaptureTask) -> CaptureResult:
        if self._semaphore:
            async with self._semaphore:
                return await self._attempt(task)
        return await self._attempt(task)

    async def _attempt(self, task: CaptureTask) -> CaptureResult:
        path = self.output_dir / task.filename
        try:
            job = write(capture(self.renderer, task), path, task)
            if self.task_timeout is not None:
                written = await asyncio.wait_for(job, timeout=self.task_timeout)
            else:
                written = await job
        except TaskError as e:
            return CaptureResult(task=task, error=e)
        except asyncio.TimeoutError:
            error = RenderError(task, f"timed out after {self.task_timeout}s")
            return CaptureResult(task=task, error=error)
        except Exception as e:
            return CaptureResult(task=task, error=RenderError(task, e))

        return CaptureResult(task=task, path=path, bytes_written=written)


async def generate(
    urls: Sequence[str],
    resolutions: Sequence[Resolution],
    renderer: Renderer,
    output_dir: Path | str = ".",
    concurrency: int | None = None,
    task_timeout: float | None = None,
    on_settled: SettledCallback | None = None,
    verbose: bool = False,
) -> BatchOutcome:
    """Enumerate tasks for ``urls`` x ``resolutions`` and run them as one batch."""
    tasks = enumerate_tasks(urls, resolutions)
    coordinator = BatchCoordinator(
        renderer,
        output_dir=output_dir,
        concurrency=concurrency,
        task_timeout=task_timeout,
        verbose=verbose,
    )
    return await coordinator.run(tasks, on_settled=on_settled)
