"""High-level orchestration: verify Tor, load targets, fan out to workers."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional, Sequence

from .artifacts import ArtifactWriter
from .config import CrawlConfig
from .errors import (
    ArtifactWriteError,
    CrawlError,
    RenderError,
    VerificationFailure,
)
from .models import CrawlSummary, OutcomeRecord, Status
from .renderer import PageRenderer, PlaywrightRenderer
from .report import OutcomeLogger
from .targets import read_targets
from .utils import normalize_destination
from .verify import verify_anonymity

logger = logging.getLogger("tor_snap")

SUCCESS_DETAIL = "Saved HTML, IMG, URLs"

Verifier = Callable[[CrawlConfig], bool]


async def process_destination(
    destination: str,
    renderer: PageRenderer,
    writer: ArtifactWriter,
    timeout: float,
) -> None:
    """Render one destination under a deadline and write its artifacts.

    Nothing is written unless the render succeeded as a whole.
    """
    url = normalize_destination(destination)
    try:
        result = await asyncio.wait_for(renderer.render(url), timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise RenderError(f"timeout after {timeout:g}s", timed_out=True) from exc
    except RenderError:
        raise
    except Exception as exc:  # pylint: disable=broad-except
        raise RenderError(str(exc) or exc.__class__.__name__) from exc

    writer.write(url, result)


async def _worker(
    worker_id: int,
    queue: asyncio.Queue,
    renderer: PageRenderer,
    writer: ArtifactWriter,
    outcome_logger: OutcomeLogger,
    timeout: float,
) -> List[OutcomeRecord]:
    """Take destinations until the closing ``None`` and record each outcome."""
    records: List[OutcomeRecord] = []
    while True:
        destination = await queue.get()
        if destination is None:
            break

        start = time.perf_counter()
        try:
            await process_destination(destination, renderer, writer, timeout)
        except (RenderError, ArtifactWriteError) as exc:
            status, detail = Status.FAIL, str(exc)
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Unexpected error processing %s", destination)
            status, detail = Status.FAIL, str(exc) or exc.__class__.__name__
        else:
            status, detail = Status.SUCCESS, SUCCESS_DETAIL
        elapsed = time.perf_counter() - start

        if status is Status.SUCCESS:
            logger.info("COMPLETED: %s", destination)
        else:
            logger.error("ERROR: %s (%s)", destination, detail)
        logger.debug("Worker %d finished %s in %.2fs", worker_id, destination, elapsed)
        records.append(
            outcome_logger.record(destination, status, detail, elapsed_seconds=elapsed)
        )
    return records


async def run_workers(
    destinations: Sequence[str],
    renderer: PageRenderer,
    writer: ArtifactWriter,
    outcome_logger: OutcomeLogger,
    worker_count: int,
    timeout: float,
) -> List[OutcomeRecord]:
    """Crawl ``destinations`` with a fixed pool of workers.

    Returns one record per destination, in completion order.
    """
    queue: asyncio.Queue = asyncio.Queue(maxsize=len(destinations))
    workers = [
        asyncio.create_task(
            _worker(i, queue, renderer, writer, outcome_logger, timeout)
        )
        for i in range(1, worker_count + 1)
    ]

    for destination in destinations:
        await queue.put(destination)
    for _ in workers:
        await queue.put(None)

    per_worker = await asyncio.gather(*workers)
    records = [record for batch in per_worker for record in batch]
    records.sort(key=lambda record: record.timestamp)
    return records


async def run_crawler(
    config: CrawlConfig,
    renderer: Optional[PageRenderer] = None,
    verifier: Verifier = verify_anonymity,
    writer: Optional[ArtifactWriter] = None,
    outcome_logger: Optional[OutcomeLogger] = None,
) -> CrawlSummary:
    """Run a whole crawl.

    Raises VerificationFailure before any other work when Tor is not in use,
    and TargetSourceFailure when no destinations can be loaded. When no
    renderer is given a PlaywrightRenderer is opened for the run.
    """
    overall_start = time.perf_counter()

    logger.info("[CHECK] Checking Tor connection...")
    if not await asyncio.to_thread(verifier, config):
        raise VerificationFailure("NOT CONNECTED TO TOR! Scan cannot start.")
    logger.info("Tor connection successful! Starting scan...")

    writer = writer or ArtifactWriter(config.output_root)
    try:
        writer.ensure_dirs()
    except OSError as exc:
        raise CrawlError(f"Failed to create output folders: {exc}") from exc

    targets = read_targets(config.targets_file)
    logger.info("[INIT] %d targets loaded.", len(targets))

    outcome_logger = outcome_logger or OutcomeLogger(config.report_log)

    if renderer is not None:
        records = await run_workers(
            targets,
            renderer,
            writer,
            outcome_logger,
            config.worker_count,
            config.task_timeout,
        )
    else:
        async with PlaywrightRenderer(config) as browser_renderer:
            records = await run_workers(
                targets,
                browser_renderer,
                writer,
                outcome_logger,
                config.worker_count,
                config.task_timeout,
            )

    return CrawlSummary(
        records=records,
        total_seconds=time.perf_counter() - overall_start,
    )
