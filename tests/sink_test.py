import asyncio

import pytest

from pageres.capture import capture
from pageres.errors import RenderError, WriteError
from pageres.models import CaptureTask, Resolution
from pageres.sink import write

from conftest import PNG_HEADER, StubRenderer


def make_task(url="example.com"):
    return CaptureTask(url, Resolution(1024, 768), f"{url}-1024x768.png")


def test_write_saves_every_chunk(tmp_path):
    task = make_task()
    path = tmp_path / task.filename
    written = asyncio.run(write(capture(StubRenderer(), task), path, task))

    data = path.read_bytes()
    assert written == len(data) > 0
    assert data.startswith(PNG_HEADER)
    assert data.endswith(b"example.com@1024x768")


def test_render_error_before_first_chunk(tmp_path):
    task = make_task("bad.invalid")
    path = tmp_path / task.filename
    with pytest.raises(RenderError) as excinfo:
        asyncio.run(write(capture(StubRenderer(fail=["bad.invalid"]), task), path, task))

    assert excinfo.value.task is task
    assert isinstance(excinfo.value.cause, ConnectionError)
    assert not path.exists()


def test_render_error_midway_leaves_partial_file(tmp_path):
    task = make_task("flaky.com")
    path = tmp_path / task.filename
    with pytest.raises(RenderError):
        asyncio.run(write(capture(StubRenderer(fail_midway=["flaky.com"]), task), path, task))

    assert path.read_bytes() == PNG_HEADER


def test_empty_stream_is_not_a_success(tmp_path):
    task = make_task("blank.com")
    path = tmp_path / task.filename
    with pytest.raises(RenderError):
        asyncio.run(write(capture(StubRenderer(empty=["blank.com"]), task), path, task))

    assert not path.exists()


def test_unwritable_destination_is_write_error(tmp_path):
    task = make_task()
    path = tmp_path / "missing" / task.filename
    with pytest.raises(WriteError) as excinfo:
        asyncio.run(write(capture(StubRenderer(), task), path, task))

    assert excinfo.value.task is task
    assert isinstance(excinfo.value.cause, OSError)


def test_write_overwrites_existing_file(tmp_path):
    task = make_task()
    path = tmp_path / task.filename
    path.write_bytes(b"stale contents that are longer than the new image")
    asyncio.run(write(capture(StubRenderer(), task), path, task))

    assert path.read_bytes() == PNG_HEADER + b"example.com@1024x768"
