"""Shared test fixtures and recorded markup."""

import json

import pytest

from yt_transcript_extractor.config import Settings
from yt_transcript_extractor.models import CaptionTrack, TranscriptEntry, TranscriptResult

BASE_URL = "https://yt.test"
VIDEO_ID = "dQw4w9WgXcQ"
TIMEDTEXT_URL = f"{BASE_URL}/api/timedtext?v={VIDEO_ID}&lang=en"


CAPTIONS_BLOCK = {
    "playerCaptionsTracklistRenderer": {
        "captionTracks": [
            {
                "baseUrl": f"{BASE_URL}/api/timedtext?v={VIDEO_ID}&lang=en&kind=asr",
                "name": {"simpleText": "English (auto-generated)"},
                "languageCode": "en",
                "kind": "asr",
            },
            {
                "baseUrl": TIMEDTEXT_URL,
                "name": {"simpleText": "English"},
                "languageCode": "en",
            },
            {
                "baseUrl": f"{BASE_URL}/api/timedtext?v={VIDEO_ID}&lang=de",
                "name": {"runs": [{"text": "German"}]},
                "languageCode": "de",
            },
        ]
    }
}


def watch_page(captions: dict | None = CAPTIONS_BLOCK, params: str | None = None) -> str:
    """Build a watch page resembling the real markup around the markers."""
    player = '{"responseContext":{},"playabilityStatus":{"status":"OK"}'
    if captions is not None:
        player += ',"captions":' + json.dumps(captions).replace("},", "},\n", 1)
    player += ',"videoDetails":{"videoId":"%s"}}' % VIDEO_ID
    initial_data = "{}"
    if params is not None:
        initial_data = (
            '{"serializedShareEntity":"CgtkUXc0dzlXZ1hjUQ%3D%3D",'
            '"engagementPanels":[{"continuationItemRenderer":{"continuationEndpoint":'
            '{"getTranscriptEndpoint":{"params":"' + params + '"}}}}]}'
        )
    return (
        "<!DOCTYPE html><html><head><title>Video - YouTube</title></head><body>"
        f"<script>var ytInitialPlayerResponse = {player};</script>"
        f"<script>var ytInitialData = {initial_data};</script>"
        "</body></html>"
    )


TIMEDTEXT_XML = """<?xml version="1.0" encoding="utf-8" ?><transcript>
<text start="0.4" dur="2.1">Hello &amp;amp; welcome</text>
<text start="2.5" dur="1.5">   </text>
<text start="4.6" dur="3.0">it&amp;#39;s a test</text>
<text start="65.2" dur="2.0">goodbye</text>
</transcript>"""


def segment(start_ms, *runs):
    return {
        "transcriptSegmentRenderer": {
            "startMs": start_ms,
            "snippet": {"runs": [{"text": r} for r in runs]},
        }
    }


def transcript_response(segments: list) -> dict:
    return {
        "actions": [
            {
                "updateEngagementPanelAction": {
                    "content": {
                        "transcriptRenderer": {
                            "content": {
                                "transcriptSearchPanelRenderer": {
                                    "body": {
                                        "transcriptSegmentListRenderer": {
                                            "initialSegments": segments
                                        }
                                    }
                                }
                            }
                        }
                    }
                }
            }
        ]
    }


class FakeElement:
    def __init__(self, text=None, children=None):
        self._text = text
        self._children = children or {}
        self.clicks = 0

    async def query_selector(self, selector):
        return self._children.get(selector)

    async def text_content(self):
        return self._text

    async def click(self):
        self.clicks += 1


def fake_row(timestamp, text):
    children = {}
    if timestamp is not None:
        children[".segment-timestamp"] = FakeElement(timestamp)
    if text is not None:
        children[".segment-text"] = FakeElement(text)
    return FakeElement(children=children)


class FakePage:
    """Live page whose transcript rows render after ``render_after`` polls."""

    def __init__(self, rows=None, button=None, render_after=0):
        self.rows = rows or []
        self.button = button
        self.render_after = render_after
        self.row_queries = 0

    async def query_selector(self, selector):
        if selector == 'button[aria-label="Show transcript"]':
            return self.button
        return None

    async def query_selector_all(self, selector):
        if selector != "#segments-container ytd-transcript-segment-renderer":
            return []
        self.row_queries += 1
        if self.row_queries <= self.render_after:
            return []
        return list(self.rows)


@pytest.fixture
def settings():
    return Settings(
        youtube_base_url=BASE_URL,
        dom_ready_timeout=0.5,
        dom_poll_interval=0,
    )


@pytest.fixture
def tracks():
    return [
        CaptionTrack.from_player_track(t)
        for t in CAPTIONS_BLOCK["playerCaptionsTracklistRenderer"]["captionTracks"]
    ]


@pytest.fixture
def sample_entries():
    return [
        TranscriptEntry(index=0, text="Hello world", start=0),
        TranscriptEntry(index=1, text="this is a test", start=3),
        TranscriptEntry(index=2, text="goodbye world", start=65),
    ]


@pytest.fixture
def sample_result(sample_entries):
    return TranscriptResult(
        entries=sample_entries,
        languages=[],
        selected_language="English",
        method="caption_track",
    )
