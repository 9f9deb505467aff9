"""Internal API strategy: the player's own get_transcript RPC."""

import logging

import httpx

from yt_transcript_extractor.config import Settings
from yt_transcript_extractor.errors import ParamsNotFoundError, ParseError
from yt_transcript_extractor.extractors import (
    MarkupExtractor,
    dig,
    transcript_params_extractor,
)
from yt_transcript_extractor.models import TranscriptEntry, TranscriptResult
from yt_transcript_extractor.page import build_client, fetch_watch_page, request
from .base import TranscriptProvider, build_entries, round_seconds

logger = logging.getLogger(__name__)

GET_TRANSCRIPT_PATH = "/youtubei/v1/get_transcript"

SEARCH_PANEL_PATH = (
    "actions",
    0,
    "updateEngagementPanelAction",
    "content",
    "transcriptRenderer",
    "content",
    "transcriptSearchPanelRenderer",
)


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


def parse_transcript_response(data: dict) -> list[TranscriptEntry]:
    """Pull entries out of a get_transcript JSON payload.

    Segments or runs that are not objects are skipped.
    """
    panel = _mapping(dig(data, *SEARCH_PANEL_PATH))
    body = _mapping(panel.get("body"))
    segments = _mapping(body.get("transcriptSegmentListRenderer")).get("initialSegments")
    if not isinstance(segments, list):
        segments = []

    items = []
    for seg in segments:
        renderer = _mapping(_mapping(seg).get("transcriptSegmentRenderer"))
        if not renderer:
            continue
        try:
            start_ms = max(0, int(float(renderer.get("startMs") or 0)))
        except (TypeError, ValueError, OverflowError):
            start_ms = 0
        runs = _mapping(renderer.get("snippet")).get("runs")
        if not isinstance(runs, list):
            runs = []
        text = "".join(
            str(run.get("text") or "") for run in runs if isinstance(run, dict)
        ).strip()
        items.append((text, round_seconds(start_ms / 1000)))
    return build_entries(items)


class InternalApiProvider(TranscriptProvider):
    name = "internal_api"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
        extractor: MarkupExtractor = transcript_params_extractor,
    ):
        self._settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)
        self._extractor = extractor

    def _payload(self, params: str) -> dict:
        return {
            "context": {
                "client": {
                    "clientName": self._settings.client_name,
                    "clientVersion": self._settings.client_version,
                },
            },
            "params": params,
        }

    async def fetch_from_internal_api(self, video_id: str) -> list[TranscriptEntry]:
        markup = await fetch_watch_page(self._client, video_id)
        params = self._extractor(markup)
        if not params:
            raise ParamsNotFoundError()

        resp = await request(
            self._client,
            "POST",
            GET_TRANSCRIPT_PATH,
            params={"prettyPrint": "false"},
            json=self._payload(params),
        )
        try:
            data = resp.json()
        except ValueError as e:
            raise ParseError(f"Transcript response is not JSON: {e}") from e
        return parse_transcript_response(data)

    async def get_transcript(
        self, video_id: str, language: str | None = None
    ) -> TranscriptResult:
        entries = await self.fetch_from_internal_api(video_id)
        return TranscriptResult(entries=entries, method=self.name)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
