"""Shared test doubles for the crawler tests."""

import asyncio

from tor_snap.models import RenderResult

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeRenderer:
    """Deterministic stand-in for the browser.

    ``failures`` maps URLs to the exception to raise, ``delays`` maps URLs to
    seconds to sleep before answering. Tracks calls and peak concurrency.
    """

    def __init__(self, failures=None, delays=None, links=None, default_delay=0.0):
        self.failures = failures or {}
        self.delays = delays or {}
        self.links = links if links is not None else ["http://x.onion/1", "http://y.onion/2"]
        self.default_delay = default_delay
        self.calls = []
        self.active = 0
        self.peak = 0

    async def render(self, url):
        self.calls.append(url)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(self.delays.get(url, self.default_delay))
            if url in self.failures:
                raise self.failures[url]
            return RenderResult(
                markup=f"<html><body>{url}</body></html>",
                image=PNG_BYTES,
                links=list(self.links),
            )
        finally:
            self.active -= 1
