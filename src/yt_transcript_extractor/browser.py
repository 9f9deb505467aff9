"""Headless browser pages for the DOM strategy."""

import logging
from contextlib import asynccontextmanager

from playwright.async_api import async_playwright

from yt_transcript_extractor.config import Settings

logger = logging.getLogger(__name__)


class PlaywrightPageOpener:
    """Opens a rendered watch page per video on a shared Chromium instance."""

    def __init__(self, settings: Settings):
        self._settings = settings
        self._playwright = None
        self._browser = None

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._settings.browser_headless,
            args=["--no-sandbox", "--disable-dev-shm-usage"],
        )
        logger.info("Browser started")

    @asynccontextmanager
    async def __call__(self, video_id: str):
        if self._browser is None:
            await self.start()
        context = await self._browser.new_context(
            user_agent=self._settings.user_agent,
            locale="en-US",
        )
        try:
            page = await context.new_page()
            url = f"{self._settings.youtube_base_url.rstrip('/')}/watch?v={video_id}"
            await page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self._settings.http_timeout * 1000,
            )
            yield page
        finally:
            await context.close()

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        logger.info("Browser stopped")
