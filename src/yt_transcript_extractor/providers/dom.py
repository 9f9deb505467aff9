"""DOM strategy: scrape the platform's own transcript panel from a live page.

The page object follows Playwright's async ``Page`` API: ``query_selector``,
``query_selector_all`` and element ``click`` / ``text_content``.
"""

import asyncio
import logging
from contextlib import AbstractAsyncContextManager
from typing import Any, Callable

from yt_transcript_extractor.config import Settings
from yt_transcript_extractor.errors import DomUnavailableError, NoSegmentsError
from yt_transcript_extractor.models import TranscriptEntry, TranscriptResult
from yt_transcript_extractor.utils import parse_timestamp
from .base import TranscriptProvider, build_entries

logger = logging.getLogger(__name__)

SHOW_TRANSCRIPT_BUTTON = 'button[aria-label="Show transcript"]'
SEGMENT_ROWS = "#segments-container ytd-transcript-segment-renderer"
SEGMENT_TIMESTAMP = ".segment-timestamp"
SEGMENT_TEXT = ".segment-text"

PageOpener = Callable[[str], AbstractAsyncContextManager[Any]]


async def _text_of(row, selector: str) -> str:
    el = await row.query_selector(selector)
    if el is None:
        return ""
    return ((await el.text_content()) or "").strip()


class DomScrapeProvider(TranscriptProvider):
    name = "dom"

    def __init__(
        self,
        settings: Settings | None = None,
        page_opener: PageOpener | None = None,
    ):
        self._settings = settings or Settings()
        self._page_opener = page_opener

    async def wait_for_rows(self, page) -> list:
        """Poll for rendered rows until they appear or the ready timeout passes."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._settings.dom_ready_timeout
        while True:
            rows = await page.query_selector_all(SEGMENT_ROWS)
            if rows or loop.time() >= deadline:
                return rows
            await asyncio.sleep(self._settings.dom_poll_interval)

    async def fetch_from_dom(self, page) -> list[TranscriptEntry]:
        button = await page.query_selector(SHOW_TRANSCRIPT_BUTTON)
        if button is not None:
            await button.click()
            rows = await self.wait_for_rows(page)
        else:
            rows = await page.query_selector_all(SEGMENT_ROWS)
        if not rows:
            raise NoSegmentsError()

        items = []
        for row in rows:
            timestamp = await _text_of(row, SEGMENT_TIMESTAMP)
            text = await _text_of(row, SEGMENT_TEXT)
            items.append((text, parse_timestamp(timestamp) if timestamp else None))
        return build_entries(items, "No transcript entries extracted from DOM")

    async def get_entries(self, video_id: str) -> list[TranscriptEntry]:
        if self._page_opener is None:
            raise DomUnavailableError()
        async with self._page_opener(video_id) as page:
            return await self.fetch_from_dom(page)

    async def get_transcript(
        self, video_id: str, language: str | None = None
    ) -> TranscriptResult:
        entries = await self.get_entries(video_id)
        return TranscriptResult(entries=entries, method=self.name)

    async def close(self) -> None:
        pass
