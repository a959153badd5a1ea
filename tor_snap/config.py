"""Configuration objects and constants for the crawler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict
from urllib.parse import urlparse

DEFAULT_PROXY_SERVER = "socks5://127.0.0.1:9050"
DEFAULT_VERIFY_URL = "https://check.torproject.org"
DEFAULT_TARGETS_FILE = Path("targets.yaml")
DEFAULT_OUTPUT_ROOT = Path("scraped_data")
DEFAULT_REPORT_LOG = Path("scan_report.log")
DEFAULT_WORKER_COUNT = 5


@dataclass
class CrawlConfig:
    """Top-level settings that control verification, rendering and output."""

    output_root: Path = DEFAULT_OUTPUT_ROOT
    targets_file: Path = DEFAULT_TARGETS_FILE
    report_log: Path = DEFAULT_REPORT_LOG
    proxy_server: str = DEFAULT_PROXY_SERVER
    verify_url: str = DEFAULT_VERIFY_URL
    worker_count: int = DEFAULT_WORKER_COUNT
    task_timeout: float = 40.0
    verify_timeout: float = 15.0
    screenshot_quality: int = 90
    viewport_width: int = 1920
    viewport_height: int = 1080
    headless: bool = True
    ignore_https_errors: bool = True

    def __post_init__(self) -> None:
        self.output_root = Path(self.output_root)
        self.targets_file = Path(self.targets_file)
        self.report_log = Path(self.report_log)
        if self.worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {self.worker_count}")
        if self.task_timeout <= 0 or self.verify_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if not 0 <= self.screenshot_quality <= 100:
            raise ValueError(
                f"screenshot_quality must be within 0..100, got {self.screenshot_quality}"
            )

    def proxies(self) -> Dict[str, str]:
        """Proxy mapping for requests; SOCKS names are resolved by the proxy."""
        parsed = urlparse(self.proxy_server)
        proxy = self.proxy_server
        if parsed.scheme in ("socks5", "socks"):
            proxy = parsed._replace(scheme="socks5h").geturl()
        return {"http": proxy, "https": proxy}

    def browser_proxy(self) -> Dict[str, str]:
        """Proxy setting in the shape Playwright's ``launch`` expects."""
        return {"server": self.proxy_server}
