"""
Default screen resolutions.

When no resolutions are given, pageres falls back to the ten most popular
ones according to w3counter's global stats page.
"""

from __future__ import annotations

import asyncio
import re

import httpx

from pageres.config import W3COUNTER_URL
from pageres.errors import ResolutionLookupError
from pageres.models import Resolution

_TOKEN = re.compile(r"\b(\d{3,4})x(\d{3,4})\b")


def parse_resolutions(html: str, limit: int = 10) -> list[Resolution]:
    """Pull WIDTHxHEIGHT tokens out of a page, in order of appearance."""
    found = []
    for width, height in _TOKEN.findall(html):
        resolution = Resolution(int(width), int(height))
        if resolution not in found:
            found.append(resolution)
        if len(found) >= limit:
            break
    return found


async def fetch_popular_resolutions(
    client: httpx.AsyncClient | None = None,
    url: str = W3COUNTER_URL,
    limit: int = 10,
    max_retries: int = 3,
    retry_delay: float = 1.0,
) -> list[Resolution]:
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=30.0, follow_redirects=True)

    last_error: Exception | None = None
    try:
        for attempt in range(max_retries):
            try:
                response = await client.get(url)
                if response.status_code == 200:
                    break
                last_error = ResolutionLookupError(
                    f"{url} responded with status {response.status_code}"
                )
            except httpx.HTTPError as e:
                last_error = e
            print(f"[resolutions] Lookup failed (attempt {attempt + 1}): {last_error}")
            if attempt < max_retries - 1:
                await asyncio.sleep(retry_delay)
        else:
            raise ResolutionLookupError(
                f"Could not fetch popular resolutions: {last_error}"
            ) from last_error
    finally:
        if owns_client:
            await client.aclose()

    resolutions = parse_resolutions(response.text, limit)
    if not resolutions:
        raise ResolutionLookupError(f"No resolutions found at {url}")
    return resolutions
