"""
Write a screenshot stream to disk.

The destination is opened for create/truncate when the first chunk arrives,
so a render that fails up front leaves no file behind. It only counts as
written once every chunk has been flushed and fsynced. A stream that fails
partway leaves the partial file in place; nothing is rolled back.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator
from pathlib import Path

from pageres.errors import RenderError, WriteError
from pageres.models import CaptureTask


def _sync_and_close(handle) -> None:
    handle.flush()
    os.fsync(handle.fileno())
    handle.close()


async def write(stream: AsyncIterator[bytes], path: Path, task: CaptureTask) -> int:
    """Copy ``stream`` into ``path`` and return the number of bytes written."""
    handle = None
    written = 0
    try:
        async for chunk in stream:
            try:
                if handle is None:
                    handle = await asyncio.to_thread(open, path, "wb")
                await asyncio.to_thread(handle.write, chunk)
            except OSError as e:
                raise WriteError(task, e) from e
            written += len(chunk)

        if handle is None or written == 0:
            raise RenderError(task, "renderer produced no image data")

        try:
            await asyncio.to_thread(_sync_and_close, handle)
        except OSError as e:
            raise WriteError(task, e) from e
    finally:
        if handle is not None and not handle.closed:
            handle.close()
        aclose = getattr(stream, "aclose", None)
        if aclose is not None:
            await aclose()

    return written
