import asyncio

import pytest

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class StubRenderer:
    """Renderer double that fakes PNG bytes and fails on demand."""

    def __init__(self, fail=(), fail_midway=(), empty=(), slow=(), delay=0.0):
        self.fail = set(fail)
        self.fail_midway = set(fail_midway)
        self.empty = set(empty)
        self.slow = set(slow)
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def render(self, url, width, height):
        self.calls.append((url, width, height))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if url in self.slow:
                await asyncio.sleep(10)
            if url in self.fail:
                raise ConnectionError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
            if url in self.empty:
                return
            yield PNG_HEADER
            if url in self.fail_midway:
                raise ConnectionError("connection reset")
            yield f"{url}@{width}x{height}".encode()
        finally:
            self.in_flight -= 1


@pytest.fixture
def renderer():
    return StubRenderer()
