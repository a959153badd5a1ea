"""Append-only scan report with one line per finished task."""

from __future__ import annotations

import datetime as dt
import logging
import threading
from pathlib import Path
from typing import Optional

from .models import OutcomeRecord, Status

logger = logging.getLogger("tor_snap.report")


def format_record(record: OutcomeRecord) -> str:
    """Render a record as ``[HH:MM:SS] <destination> -> <STATUS> (<detail>)``."""
    return "[{}] {} -> {} ({})\n".format(
        record.timestamp.strftime("%H:%M:%S"),
        record.destination,
        record.status.value,
        record.detail,
    )


class OutcomeLogger:
    """Owns the report file; appends are serialized by a lock.

    ``record`` is safe to call from several threads as well as from the
    event loop. The file is opened and closed for every record. Failing to append is
    logged and otherwise ignored so that it never changes a task's outcome.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def record(
        self,
        destination: str,
        status: Status,
        detail: str,
        elapsed_seconds: float = 0.0,
        timestamp: Optional[dt.datetime] = None,
    ) -> OutcomeRecord:
        record = OutcomeRecord(
            timestamp=timestamp or dt.datetime.now(),
            destination=destination,
            status=status,
            detail=detail,
            elapsed_seconds=elapsed_seconds,
        )
        line = format_record(record)
        with self._lock:
            try:
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(line)
            except OSError as exc:
                logger.warning("Could not append to %s: %s", self.path, exc)
        return record
