"""Runtime configuration for a pageres run."""

from dataclasses import dataclass
from pathlib import Path

W3COUNTER_URL = "https://www.w3counter.com/globalstats.php"


@dataclass
class PageresConfig:
    """Configuration for the screenshot pipeline."""

    output_dir: Path = Path(".")
    concurrency: int | None = None  # None starts every task at once
    task_timeout: float | None = None  # Seconds per task, None waits forever
    navigation_timeout: float = 60.0  # Seconds
    wait_until: str = "load"
    full_page: bool = False
    lookup_url: str = W3COUNTER_URL
    max_retries: int = 3
    retry_delay: float = 1.0
    verbose: bool = False
