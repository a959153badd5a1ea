"""Checking that outbound traffic leaves through Tor."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import CrawlConfig

logger = logging.getLogger("tor_snap.verify")

NEGATIVE_MARKER = "Sorry. You are not using Tor"
POSITIVE_MARKERS = ("Congratulations", "successfully")


def make_tor_session(config: CrawlConfig) -> requests.Session:
    """Build a requests session whose traffic goes through the SOCKS proxy."""
    session = requests.Session()
    session.proxies = config.proxies()
    # Environment proxy variables must not override the Tor route.
    session.trust_env = False
    return session


def is_anonymized(body: str) -> bool:
    """Interpret the verification page body."""
    if NEGATIVE_MARKER in body:
        return False
    return any(marker in body for marker in POSITIVE_MARKERS)


def verify_anonymity(
    config: CrawlConfig,
    session: Optional[requests.Session] = None,
) -> bool:
    """Fetch the verification page through the proxy and check its verdict.

    Any proxy, transport or read error counts as "not anonymized".
    """
    try:
        session = session or make_tor_session(config)
    except ValueError as exc:
        logger.error("Proxy setup error: %s", exc)
        return False

    try:
        resp = session.get(config.verify_url, timeout=config.verify_timeout)
        body = resp.text
    except requests.RequestException as exc:
        logger.error("Tor connection error: %s", exc)
        return False

    anonymized = is_anonymized(body)
    if not anonymized:
        logger.debug("Verification page at %s did not confirm Tor", config.verify_url)
    return anonymized
