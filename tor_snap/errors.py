"""Exceptions raised by the crawler."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CrawlError(Exception):
    """Base class for crawler errors."""


class VerificationFailure(CrawlError):
    """Outbound traffic is not routed through the anonymizing proxy."""


class TargetSourceFailure(CrawlError):
    """The target list is missing, unreadable or empty."""


class BrowserLaunchFailure(CrawlError):
    """The headless browser could not be started."""


class RenderError(CrawlError):
    """Loading or capturing a destination failed."""

    def __init__(self, message: str, timed_out: bool = False) -> None:
        super().__init__(message)
        self.timed_out = timed_out


class ArtifactWriteError(CrawlError):
    """One or more artifact files could not be written."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
