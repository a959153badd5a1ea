"""Loading the list of destinations to crawl."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List

from .errors import TargetSourceFailure

logger = logging.getLogger("tor_snap.targets")

LIST_HEADER = "urls:"
LIST_MARKER = "- "


def parse_targets(lines: Iterable[str]) -> List[str]:
    """Return destinations from a ``urls:`` style list, in file order.

    Blank lines, ``#`` comments and the ``urls:`` header are skipped and a
    leading ``- `` list marker is removed.
    """
    targets: List[str] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith(LIST_HEADER):
            continue
        if line.startswith(LIST_MARKER):
            line = line[len(LIST_MARKER):].strip()
        if line:
            targets.append(line)
    return targets


def read_targets(path: Path) -> List[str]:
    """Read and parse a target file; an unreadable or empty file is fatal."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TargetSourceFailure(f"Failed to read targets file {path}: {exc}") from exc

    targets = parse_targets(text.splitlines())
    if not targets:
        raise TargetSourceFailure(f"Targets file {path} contains no destinations")
    logger.debug("Parsed %d destinations from %s", len(targets), path)
    return targets
