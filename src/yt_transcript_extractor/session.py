"""Current-video state for a consumer that follows navigation."""

import logging

from yt_transcript_extractor.errors import NoVideoIdError
from yt_transcript_extractor.extractor import TranscriptExtractor
from yt_transcript_extractor.models import TranscriptEntry, TranscriptResult
from yt_transcript_extractor.utils import format_transcript_lines

logger = logging.getLogger(__name__)


class TranscriptSession:
    """Tracks which video is current and drops results that arrive too late.

    Extraction calls cannot be cancelled, so a call issued for one video may
    resolve after the consumer has moved on to another. Such results are
    discarded instead of replacing the current transcript.
    """

    def __init__(self, extractor: TranscriptExtractor):
        self._extractor = extractor
        self.video_id: str | None = None
        self.result: TranscriptResult | None = None
        self.entries: list[TranscriptEntry] = []

    def is_current(self, video_id: str) -> bool:
        return video_id == self.video_id

    async def load(
        self, video_id: str, preferred_lang: str | None = None
    ) -> TranscriptResult | None:
        if not video_id:
            raise NoVideoIdError()
        if self.is_current(video_id) and self.result is not None and not preferred_lang:
            return self.result

        self.video_id = video_id
        self.result = None
        self.entries = []

        result = await self._extractor.get_transcript(video_id, preferred_lang)
        if not self.is_current(video_id):
            logger.info(f"Discarding stale transcript for {video_id}")
            return None
        self.result = result
        self.entries = list(result.entries)
        return result

    async def switch_language(self, lang: str) -> list[TranscriptEntry] | None:
        video_id = self.video_id
        if not video_id:
            raise NoVideoIdError()
        entries = await self._extractor.get_transcript_for_language(video_id, lang)
        if not self.is_current(video_id):
            logger.info(f"Discarding stale {lang} transcript for {video_id}")
            return None
        self.entries = entries
        if self.result is not None:
            selected = next(
                (l.name for l in self.result.languages if lang in (l.code, l.name)),
                lang,
            )
            self.result = self.result.model_copy(
                update={"entries": entries, "selected_language": selected}
            )
        return entries

    def export_text(self) -> str:
        return format_transcript_lines(self.entries)
