"""Transcript extraction with ordered fallback across strategies.

Strategies run one after another, never concurrently:

1. caption tracks from the watch page's player response, fetched as timed text;
2. the player's internal get_transcript RPC;
3. scraping the transcript panel of a live rendered page.

The first one to produce entries wins. Each failure is kept as a tagged
diagnostic line and only surfaces when every strategy has failed.
"""

import logging

import httpx

from yt_transcript_extractor.config import Settings
from yt_transcript_extractor.errors import NoVideoIdError, TranscriptUnavailableError
from yt_transcript_extractor.models import TranscriptEntry, TranscriptResult
from yt_transcript_extractor.page import build_client
from yt_transcript_extractor.providers.base import TranscriptProvider
from yt_transcript_extractor.providers.caption_track import CaptionTrackProvider
from yt_transcript_extractor.providers.dom import DomScrapeProvider, PageOpener
from yt_transcript_extractor.providers.internal_api import InternalApiProvider

logger = logging.getLogger(__name__)


class TranscriptExtractor(TranscriptProvider):
    name = "extractor"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        page_opener: PageOpener | None = None,
        caption_tracks: CaptionTrackProvider | None = None,
        internal_api: InternalApiProvider | None = None,
        dom: DomScrapeProvider | None = None,
    ):
        self._settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)
        self.caption_tracks = caption_tracks or CaptionTrackProvider(
            self._settings, self._client
        )
        self.internal_api = internal_api or InternalApiProvider(
            self._settings, self._client
        )
        self.dom = dom or DomScrapeProvider(self._settings, page_opener)

    async def get_transcript(
        self, video_id: str, language: str | None = None
    ) -> TranscriptResult:
        if not video_id:
            raise NoVideoIdError()

        errors = []

        logger.info(f"{video_id}: trying caption tracks")
        try:
            return await self.caption_tracks.get_transcript(video_id, language)
        except Exception as e:
            logger.warning(f"{video_id}: caption tracks failed: {e}")
            errors.append(f"CaptionTrack: {e}")

        logger.info(f"{video_id}: trying internal API")
        try:
            entries = await self.internal_api.fetch_from_internal_api(video_id)
            return TranscriptResult(entries=entries, method=self.internal_api.name)
        except Exception as e:
            logger.warning(f"{video_id}: internal API failed: {e}")
            errors.append(f"InternalAPI: {e}")

        logger.info(f"{video_id}: trying DOM scrape")
        try:
            entries = await self.dom.get_entries(video_id)
            return TranscriptResult(entries=entries, method=self.dom.name)
        except Exception as e:
            logger.warning(f"{video_id}: DOM scrape failed: {e}")
            errors.append(f"DOM: {e}")

        raise TranscriptUnavailableError(errors)

    async def get_transcript_for_language(
        self, video_id: str, lang: str
    ) -> list[TranscriptEntry]:
        if not video_id:
            raise NoVideoIdError()
        return await self.caption_tracks.get_transcript_for_language(video_id, lang)

    async def close(self) -> None:
        await self.caption_tracks.close()
        await self.internal_api.close()
        await self.dom.close()
        if self._owns_client:
            await self._client.aclose()
