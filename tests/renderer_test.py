import asyncio

import pytest

from pageres.renderer import PlaywrightRenderer, normalize_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("example.com", "http://example.com"),
        ("localhost:3000/app", "http://localhost:3000/app"),
        ("https://example.com", "https://example.com"),
        ("HTTP://example.com", "HTTP://example.com"),
        ("file:///tmp/page.html", "file:///tmp/page.html"),
    ],
)
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected


def test_render_requires_started_browser():
    async def go():
        async for _ in PlaywrightRenderer().render("example.com", 1024, 768):
            pass

    with pytest.raises(RuntimeError):
        asyncio.run(go())
