"""Caption track strategy: player-response tracks plus the timed-text document."""

import html
import logging
import xml.etree.ElementTree as ET

import httpx

from yt_transcript_extractor.config import Settings
from yt_transcript_extractor.errors import (
    LanguageNotAvailableError,
    NoTrackUrlError,
    NotFoundError,
    ParseError,
)
from yt_transcript_extractor.extractors import MarkupExtractor, captions_extractor
from yt_transcript_extractor.models import (
    CaptionTrack,
    LanguageDescriptor,
    TranscriptEntry,
    TranscriptResult,
)
from yt_transcript_extractor.page import build_client, fetch_watch_page, request
from .base import TranscriptProvider, build_entries, round_seconds

logger = logging.getLogger(__name__)


def select_track(
    tracks: list[CaptionTrack], preferred: str | None = None
) -> CaptionTrack:
    """Pick the preferred track, else the first human-authored one, else the first."""
    if preferred:
        for track in tracks:
            if track.matches(preferred):
                return track
    for track in tracks:
        if not track.is_auto_generated:
            return track
    return tracks[0]


def find_track(tracks: list[CaptionTrack], lang: str) -> CaptionTrack | None:
    return next((t for t in tracks if t.matches(lang)), None)


def parse_timed_text(document: str) -> list[TranscriptEntry]:
    """Parse a timed-text XML document into entries."""
    try:
        root = ET.fromstring(document)
    except ET.ParseError as e:
        raise ParseError(f"Malformed timed-text document: {e}") from e

    items = []
    for node in root.iter():
        start = node.get("start")
        if start is None:
            continue
        try:
            seconds = max(0, round_seconds(float(start)))
        except (ValueError, OverflowError):
            seconds = 0
        text = html.unescape("".join(node.itertext())).strip()
        items.append((text, seconds))
    return build_entries(items)


class CaptionTrackProvider(TranscriptProvider):
    name = "caption_track"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        extractor: MarkupExtractor = captions_extractor,
    ):
        self._settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)
        self._extractor = extractor

    async def get_caption_tracks(self, video_id: str) -> list[CaptionTrack]:
        markup = await fetch_watch_page(self._client, video_id)
        captions = self._extractor(markup)
        if not isinstance(captions, dict):
            return []
        try:
            renderer = captions.get("playerCaptionsTracklistRenderer") or {}
            raw_tracks = renderer.get("captionTracks") or []
            tracks = [
                CaptionTrack.from_player_track(t)
                for t in raw_tracks
                if isinstance(t, dict)
            ]
        except (AttributeError, TypeError, ValueError) as e:
            logger.debug(f"{video_id}: unusable captions block: {e}")
            return []
        logger.debug(f"{video_id}: {len(tracks)} caption track(s)")
        return tracks

    async def fetch_from_caption_track(
        self, track: CaptionTrack
    ) -> list[TranscriptEntry]:
        if not track.source_url:
            raise NoTrackUrlError()
        resp = await request(self._client, "GET", track.source_url)
        return parse_timed_text(resp.text)

    async def get_transcript(
        self, video_id: str, language: str | None = None
    ) -> TranscriptResult:
        tracks = await self.get_caption_tracks(video_id)
        if not tracks:
            raise NotFoundError("No caption tracks found")
        track = select_track(tracks, language)
        entries = await self.fetch_from_caption_track(track)
        return TranscriptResult(
            entries=entries,
            languages=[LanguageDescriptor.from_track(t) for t in tracks],
            selected_language=track.display_name or track.language_code,
            method=self.name,
        )

    async def get_transcript_for_language(
        self, video_id: str, lang: str
    ) -> list[TranscriptEntry]:
        tracks = await self.get_caption_tracks(video_id)
        track = find_track(tracks, lang)
        if track is None:
            raise LanguageNotAvailableError(lang)
        return await self.fetch_from_caption_track(track)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
