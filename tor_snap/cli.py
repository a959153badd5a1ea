"""Command-line entry point for the Tor snapshot crawler."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import (
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_PROXY_SERVER,
    DEFAULT_REPORT_LOG,
    DEFAULT_TARGETS_FILE,
    DEFAULT_VERIFY_URL,
    DEFAULT_WORKER_COUNT,
    CrawlConfig,
)
from .crawler import run_crawler
from .errors import CrawlError

logger = logging.getLogger("tor_snap.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Capture HTML, a full-page screenshot and outbound links for every "
            "target, routed through Tor."
        ),
    )
    parser.add_argument(
        "targets",
        nargs="?",
        default=DEFAULT_TARGETS_FILE,
        type=Path,
        help="Target list file (default: targets.yaml)",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_ROOT,
        type=Path,
        help="Directory receiving the htmls/, images/ and urls/ folders",
    )
    parser.add_argument(
        "--log-file",
        default=DEFAULT_REPORT_LOG,
        type=Path,
        help="Append-only report with one line per target",
    )
    parser.add_argument(
        "--proxy",
        default=DEFAULT_PROXY_SERVER,
        help="SOCKS proxy all traffic is routed through",
    )
    parser.add_argument(
        "--verify-url",
        default=DEFAULT_VERIFY_URL,
        help="Page used to confirm that traffic leaves through Tor",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKER_COUNT,
        help="Number of pages rendered concurrently",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=40.0,
        help="Deadline in seconds for rendering one target",
    )
    parser.add_argument(
        "--verify-timeout",
        type=float,
        default=15.0,
        help="Timeout in seconds for the Tor check",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=90,
        help="Screenshot quality (0-100)",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    argv = list(sys.argv[1:] if argv is None else argv)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CrawlConfig:
    return CrawlConfig(
        output_root=Path(args.output).resolve(),
        targets_file=args.targets,
        report_log=args.log_file,
        proxy_server=args.proxy,
        verify_url=args.verify_url,
        worker_count=args.workers,
        task_timeout=args.timeout,
        verify_timeout=args.verify_timeout,
        screenshot_quality=args.quality,
        headless=not args.headed,
    )


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        config = build_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        raise SystemExit(2) from exc

    try:
        summary = asyncio.run(run_crawler(config))
    except CrawlError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc

    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        summary.total_seconds,
        summary.succeeded,
        len(summary.records),
        summary.failed,
    )
    if args.verbose:
        for record in summary.records:
            logger.debug(
                "Timing for %s -> %s in %.2fs",
                record.destination,
                record.status.value,
                record.elapsed_seconds,
            )
    logger.info("Done!")


if __name__ == "__main__":
    main()
