"""Rendering destinations with Playwright through the Tor proxy."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from filetype import guess
from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import CrawlConfig
from .errors import BrowserLaunchFailure, RenderError
from .models import RenderResult

logger = logging.getLogger("tor_snap.renderer")

LINKS_SCRIPT = "Array.from(document.querySelectorAll('a')).map(a => a.href)"
MARKUP_SCRIPT = "document.documentElement.outerHTML"


class PageRenderer(Protocol):
    """Anything that can turn a destination URL into a RenderResult."""

    async def render(self, url: str) -> RenderResult:
        ...


def check_image(data: bytes) -> None:
    """Raise RenderError unless ``data`` looks like an image file."""
    kind = guess(data) if data else None
    if kind is None or not kind.mime.startswith("image/"):
        raise RenderError("screenshot capture returned no image data")


class PlaywrightRenderer:
    """Headless Chromium routed through the configured proxy.

    One browser is shared by the whole run; every render gets its own
    browser context so that cookies, storage and cancellation stay per task.
    Use as an async context manager.
    """

    def __init__(self, config: CrawlConfig) -> None:
        self.config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> "PlaywrightRenderer":
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless,
                proxy=self.config.browser_proxy(),
            )
        except PlaywrightError as exc:
            await self._playwright.stop()
            self._playwright = None
            raise BrowserLaunchFailure(f"Failed to launch Chromium: {exc}") from exc
        except BaseException:
            await self._playwright.stop()
            self._playwright = None
            raise
        logger.debug("Launched Chromium via %s", self.config.proxy_server)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
            self._playwright = None

    async def render(self, url: str) -> RenderResult:
        if self._browser is None:
            raise RuntimeError("PlaywrightRenderer used outside of 'async with'")

        timeout_ms = self.config.task_timeout * 1000
        try:
            context = await self._browser.new_context(
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                },
                ignore_https_errors=self.config.ignore_https_errors,
            )
        except PlaywrightError as exc:
            raise RenderError(str(exc)) from exc

        try:
            context.set_default_timeout(timeout_ms)
            page = await context.new_page()
            logger.debug("Loading %s", url)
            await page.goto(url, wait_until="domcontentloaded")
            await page.wait_for_selector("body", state="visible")
            links: List[str] = await page.evaluate(LINKS_SCRIPT)
            markup: str = await page.evaluate(MARKUP_SCRIPT)
            image = await page.screenshot(
                full_page=True,
                type="jpeg",
                quality=self.config.screenshot_quality,
            )
        except PlaywrightTimeoutError as exc:
            raise RenderError(f"timeout: {exc}", timed_out=True) from exc
        except PlaywrightError as exc:
            raise RenderError(str(exc)) from exc
        finally:
            await context.close()

        check_image(image)
        return RenderResult(markup=markup, image=image, links=[str(link) for link in links])
