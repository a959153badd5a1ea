"""Data models used throughout the crawler pipeline."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List


class Status(str, Enum):
    """Final classification of a task."""

    SUCCESS = "SUCCESS"
    FAIL = "FAIL"


@dataclass
class RenderResult:
    """Everything captured from one rendered destination."""

    markup: str
    image: bytes
    links: List[str] = field(default_factory=list)


@dataclass
class ArtifactSet:
    """The three sibling files written for one destination."""

    html_path: Path
    image_path: Path
    links_path: Path

    def paths(self) -> List[Path]:
        return [self.html_path, self.image_path, self.links_path]


@dataclass
class OutcomeRecord:
    """One line of the scan report."""

    timestamp: dt.datetime
    destination: str
    status: Status
    detail: str
    elapsed_seconds: float = 0.0


@dataclass
class CrawlSummary:
    """Outcome records of a run, in completion order."""

    records: List[OutcomeRecord] = field(default_factory=list)
    total_seconds: float = 0.0

    @property
    def succeeded(self) -> int:
        return sum(1 for record in self.records if record.status is Status.SUCCESS)

    @property
    def failed(self) -> int:
        return sum(1 for record in self.records if record.status is Status.FAIL)
