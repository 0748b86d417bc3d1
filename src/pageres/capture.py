"""Run the render capability for a single task."""

from __future__ import annotations

from collections.abc import AsyncIterator

from pageres.errors import RenderError
from pageres.models import CaptureTask
from pageres.renderer import Renderer


async def capture(renderer: Renderer, task: CaptureTask) -> AsyncIterator[bytes]:
    """
    Stream the screenshot bytes for ``task``.

    Any failure from the renderer, before the first chunk or midway through,
    is re-raised as a RenderError tagged with the task.
    """
    resolution = task.resolution
    try:
        async for chunk in renderer.render(task.url, resolution.width, resolution.height):
            yield chunk
    except RenderError:
        raise
    except Exception as e:
        raise RenderError(task, e) from e
