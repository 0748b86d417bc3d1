"""Console summary of a finished batch."""

import sys

from pageres.models import BatchOutcome


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_success(url_count: int, resolution_count: int) -> str:
    total = url_count * resolution_count
    return (
        f"Successfully generated {_plural(total, 'screenshot')} from "
        f"{_plural(url_count, 'url')} and {_plural(resolution_count, 'resolution')}"
    )


def report(outcome: BatchOutcome, url_count: int, resolution_count: int) -> int:
    """Print the outcome and return the process exit status."""
    if outcome.ok:
        print(f"\n✓ {format_success(url_count, resolution_count)}")
        return 0

    print(
        f"\n✗ {len(outcome.failures)} of {outcome.attempted} screenshots failed:",
        file=sys.stderr,
    )
    for failure in outcome.failures:
        print(f"  {failure.error}", file=sys.stderr)
    return 1
