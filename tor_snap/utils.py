"""Utility helpers for destination normalization and file naming."""

from __future__ import annotations

import re

DEFAULT_SCHEME = "http://"
PATH_PLACEHOLDER = "_"

_SCHEME_PATTERN = re.compile(r"https?://", re.IGNORECASE)
_DOMAIN_SUFFIX_PATTERN = re.compile(r"\.onion", re.IGNORECASE)


def normalize_destination(raw: str) -> str:
    """Trim a destination and give it an explicit scheme when it has none."""
    destination = raw.strip()
    if not destination:
        raise ValueError("destination must not be empty")
    if not _SCHEME_PATTERN.match(destination):
        destination = DEFAULT_SCHEME + destination
    return destination


def safe_name(destination: str) -> str:
    """Derive the artifact file stem for a destination.

    ``http://``/``https://`` prefixes (any case) and the ``.onion`` suffix
    are removed and every ``/`` becomes ``_``. Distinct destinations can map
    to the same name; no collision detection is done.
    """
    name = _SCHEME_PATTERN.sub("", destination)
    name = _DOMAIN_SUFFIX_PATTERN.sub("", name)
    return name.replace("/", PATH_PLACEHOLDER)
