"""
Headless Chromium render capability.

A single browser is launched for the whole batch and every render call gets
its own page sized to the requested viewport. The PNG comes back as a stream
of byte chunks so the sink can write it incrementally.

Usage:
    async with PlaywrightRenderer(config) as renderer:
        async for chunk in renderer.render("example.com", 1024, 768):
            ...
"""

from __future__ import annotations

import re
from collections.abc import AsyncIterator
from typing import Protocol

from playwright.async_api import Browser, Playwright, async_playwright

from pageres.config import PageresConfig

CHUNK_SIZE = 64 * 1024

_HAS_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


class Renderer(Protocol):
    def render(self, url: str, width: int, height: int) -> AsyncIterator[bytes]: ...


def normalize_url(url: str) -> str:
    """Prefix bare hosts like ``example.com`` with http://."""
    url = url.strip()
    if _HAS_SCHEME.match(url):
        return url
    return f"http://{url}"


class PlaywrightRenderer:
    """Renders pages with Playwright's Chromium and yields PNG bytes."""

    def __init__(self, config: PageresConfig | None = None):
        self.config = config or PageresConfig()
        self.browser: Browser | None = None
        self._playwright: Playwright | None = None

    async def start(self) -> None:
        print("[render] Launching headless Chromium")
        self._playwright = await async_playwright().start()
        self.browser = await self._playwright.chromium.launch(headless=True)

    async def stop(self) -> None:
        if self.browser:
            await self.browser.close()
            self.browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def __aenter__(self) -> PlaywrightRenderer:
        await self.start()
        return self

    async def __aexit__(self, *exc) -> None:
        await self.stop()

    async def render(self, url: str, width: int, height: int) -> AsyncIterator[bytes]:
        if not self.browser:
            raise RuntimeError("Renderer not started")

        page = await self.browser.new_page(viewport={"width": width, "height": height})
        try:
            await page.goto(
                normalize_url(url),
                wait_until=self.config.wait_until,
                timeout=self.config.navigation_timeout * 1000,
            )
            screenshot_bytes = await page.screenshot(type="png", full_page=self.config.full_page)
        finally:
            await page.close()

        for offset in range(0, len(screenshot_bytes), CHUNK_SIZE):
            yield screenshot_bytes[offset : offset + CHUNK_SIZE]
