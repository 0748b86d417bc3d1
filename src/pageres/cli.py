"""
Command line entry point.

Get screenshots of websites in different resolutions.

Usage:
    pageres <url> <resolution> [<resolution> <url> ...]
    pageres [<url> <resolution> ...] < <file>
    cat <file> | pageres [<url> <resolution> ...]

Example:
    pageres todomvc.com yeoman.io 1366x768 1600x900
    pageres 1366x768 < urls.txt
    cat screen-resolutions.txt | pageres todomvc.com yeoman.io
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from playwright.async_api import Error as PlaywrightError

from pageres import __version__
from pageres.config import PageresConfig
from pageres.coordinator import generate
from pageres.errors import InputError, ResolutionLookupError
from pageres.renderer import PlaywrightRenderer, Renderer
from pageres.reporter import report
from pageres.resolutions import fetch_popular_resolutions
from pageres.tasks import split_arguments

EPILOG = """\
Specify urls and screen resolutions as arguments. Order doesn't matter.
Screenshots are saved in the current directory.

You can also pipe in a newline separated list of urls and screen resolutions
which will get merged with the arguments. If no screen resolutions are
specified it will fall back to the ten most popular ones according to
w3counter.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageres",
        description="Get screenshots of websites in different resolutions.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("items", nargs="*", metavar="url|resolution")
    parser.add_argument("-v", "--version", action="version", version=__version__)
    parser.add_argument("-d", "--dest", type=Path, default=Path("."), help="Output directory")
    parser.add_argument(
        "-c", "--concurrency", type=int, default=None, help="Max screenshots in flight"
    )
    parser.add_argument("--timeout", type=float, default=None, help="Seconds allowed per screenshot")
    parser.add_argument("--full-page", action="store_true", help="Capture full scrollable page")
    parser.add_argument("--verbose", action="store_true", help="Log every saved screenshot")
    return parser


def refuse_root() -> bool:
    """Return True when running as root, which pageres refuses to do."""
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def read_stdin(stream=None) -> list[str]:
    stream = stream or sys.stdin
    if stream is None or stream.isatty():
        return []
    return stream.read().strip().splitlines()


async def run(
    items: Sequence[str],
    config: PageresConfig,
    renderer: Renderer | None = None,
) -> int:
    urls, resolutions = split_arguments(items)

    if not urls:
        raise InputError("Specify at least one url")

    if not resolutions:
        resolutions = await fetch_popular_resolutions(
            url=config.lookup_url,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )
        print(
            "No sizes specified. Falling back to the ten most popular screen "
            "resolutions according to w3counter:\n" + " ".join(str(r) for r in resolutions)
        )

    config.output_dir.mkdir(parents=True, exist_ok=True)

    async def run_batch(active: Renderer) -> int:
        outcome = await generate(
            urls,
            resolutions,
            active,
            output_dir=config.output_dir,
            concurrency=config.concurrency,
            task_timeout=config.task_timeout,
            verbose=config.verbose,
        )
        return report(outcome, len(urls), len(resolutions))

    if renderer is not None:
        return await run_batch(renderer)

    async with PlaywrightRenderer(config) as browser_renderer:
        return await run_batch(browser_renderer)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if refuse_root():
        print("[pageres] You are not allowed to run this app with root permissions.", file=sys.stderr)
        return 1

    if args.concurrency is not None and args.concurrency < 1:
        parser.error("--concurrency must be at least 1")

    config = PageresConfig(
        output_dir=args.dest,
        concurrency=args.concurrency,
        task_timeout=args.timeout,
        full_page=args.full_page,
        verbose=args.verbose,
    )

    items = list(args.items) + read_stdin()

    try:
        return asyncio.run(run(items, config))
    except InputError as e:
        print(f"[pageres] {e}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 2
    except (ResolutionLookupError, PlaywrightError, OSError) as e:
        print(f"[pageres] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
