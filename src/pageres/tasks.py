"""
Turn raw inputs into the flat list of capture tasks.

Tasks are ordered URL-major: every resolution of the first URL, then every
resolution of the second, and so on. URLs that would be saved under the same
filename (``example.com``, ``http://example.com``, ``example.com/``) count as
one URL; the first spelling wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from pageres.errors import InputError
from pageres.models import RESOLUTION_PATTERN, CaptureTask, Resolution

URL_PATTERN = re.compile(r"\.|localhost")
_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def _unique(items: Iterable, key: Callable | None = None) -> list:
    seen = set()
    out = []
    for item in items:
        marker = key(item) if key else item
        if marker not in seen:
            seen.add(marker)
            out.append(item)
    return out


def url_slug(url: str) -> str:
    """Filesystem-safe name for a URL, without scheme or trailing slash."""
    name = _SCHEME.sub("", url.strip()).rstrip("/")
    return _UNSAFE.sub("!", name)


def split_arguments(args: Iterable[str]) -> tuple[list[str], list[Resolution]]:
    """Sort free-form arguments into URLs and resolutions, dropping the rest."""
    urls = []
    resolutions = []
    for arg in args:
        arg = arg.strip()
        if not arg:
            continue
        if RESOLUTION_PATTERN.match(arg):
            try:
                resolutions.append(Resolution.parse(arg))
            except ValueError as e:
                raise InputError(f"Invalid resolution {arg}: {e}") from e
        elif URL_PATTERN.search(arg):
            urls.append(arg)
    return _unique(urls, key=url_slug), _unique(resolutions)


def task_filename(url: str, resolution: Resolution) -> str:
    return f"{url_slug(url)}-{resolution}.png"


def enumerate_tasks(urls: Iterable[str], resolutions: Iterable[Resolution]) -> list[CaptureTask]:
    resolutions = _unique(resolutions)
    return [
        CaptureTask(url=url, resolution=resolution, filename=task_filename(url, resolution))
        for url in _unique(urls, key=url_slug)
        for resolution in resolutions
    ]
