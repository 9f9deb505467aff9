"""YouTube Transcript Extractor MCP Server."""

import logging
import sys
import time
from collections import deque
from contextlib import asynccontextmanager
from typing import Annotated, Literal

from pydantic import Field
from mcp.server.fastmcp import FastMCP

from yt_transcript_extractor.config import Settings, Transport
from yt_transcript_extractor.errors import (
    LanguageNotAvailableError,
    TranscriptUnavailableError,
)
from yt_transcript_extractor.extractor import TranscriptExtractor
from yt_transcript_extractor.models import LanguageDescriptor, TranscriptEntry
from yt_transcript_extractor.session import TranscriptSession
from yt_transcript_extractor.utils import extract_video_id, format_timestamp

# Logging to stderr (MCP convention)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("yt-transcript-extractor")

NO_TRANSCRIPT_MESSAGE = (
    "No transcript available for this video. "
    "The video may not have captions enabled."
)

# Module-level state
_extractor = None
_session = None
_browser = None
_settings = None
_rate_window = deque()

# Tool annotations for read-only API tools
TOOL_ANNOTATIONS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "openWorldHint": True,
}


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    global _extractor, _session, _browser, _settings, _rate_window
    _settings = Settings()
    _rate_window = deque()

    _browser = None
    page_opener = None
    if _settings.dom_enabled:
        from yt_transcript_extractor.browser import PlaywrightPageOpener

        _browser = PlaywrightPageOpener(_settings)
        page_opener = _browser
        logger.info("DOM fallback enabled")

    _extractor = TranscriptExtractor(_settings, page_opener=page_opener)
    _session = TranscriptSession(_extractor)

    logger.info("Server started")
    yield

    if _extractor:
        await _extractor.close()
    if _browser:
        await _browser.close()
        _browser = None
    logger.info("Server stopped")


mcp = FastMCP(
    "YouTube Transcript Extractor",
    instructions="Extract YouTube video transcripts with caption track, internal API and page fallbacks",
    lifespan=app_lifespan,
)


def _check_rate_limit():
    """Sliding window rate limit."""
    now = time.time()
    limit = (_settings.rate_limit_per_minute if _settings else 30)
    while _rate_window and _rate_window[0] < now - 60:
        _rate_window.popleft()
    if len(_rate_window) >= limit:
        raise ValueError(
            f"Rate limit exceeded ({limit}/min). Try again in a few seconds."
        )
    _rate_window.append(now)


def _entries_to_markdown(entries: list[TranscriptEntry]) -> str:
    """Format entries as markdown with timestamps."""
    return "\n".join(
        f"**[{format_timestamp(e.start)}]** {e.text}" for e in entries
    )


def _languages_to_markdown(languages: list[LanguageDescriptor]) -> str:
    lines = []
    for lang in languages:
        label = f"{lang.name} (auto)" if lang.is_auto else lang.name
        lines.append(f"- `{lang.code}`: {label}")
    return "\n".join(lines)


def _unavailable(video_id: str, error: TranscriptUnavailableError) -> str:
    details = "\n".join(f"- {d}" for d in error.diagnostics)
    return f"Error: {NO_TRANSCRIPT_MESSAGE} ({video_id})\n{details}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_transcript(
    url: Annotated[str, Field(description="YouTube video URL or video ID (e.g. https://youtube.com/watch?v=dQw4w9WgXcQ or just dQw4w9WgXcQ)")],
    language: Annotated[str | None, Field(default=None, description="Preferred caption language, as a language code (en, de) or display name (English). Defaults to the first human-authored track")] = None,
    format: Annotated[Literal["text", "segments", "both"], Field(default="text", description="Output format: text for plain text, segments for timestamped segments, both for combined output")] = "text",
) -> str:
    """Get the full transcript of a YouTube video, trying every extraction method in turn."""
    _check_rate_limit()

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        result = await _extractor.get_transcript(video_id, language)
    except TranscriptUnavailableError as e:
        return _unavailable(video_id, e)
    except Exception as e:
        return f"Error fetching transcript for {video_id}: {e}"

    header = f"## Transcript: {video_id}\n**Method:** {result.method}"
    if result.selected_language:
        header += f" | **Language:** {result.selected_language}"
    header += "\n"

    if format == "segments":
        body = _entries_to_markdown(result.entries)
    elif format == "both":
        body = (
            f"### Full Text\n{result.text}\n\n"
            f"### Timestamped Segments\n{_entries_to_markdown(result.entries)}"
        )
    else:
        body = result.text

    return f"{header}\n{body}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def get_transcript_for_language(
    url: Annotated[str, Field(description="YouTube video URL or video ID")],
    language: Annotated[str, Field(description="Caption language code (e.g. en, de) or display name (e.g. English) exactly as listed by list_languages")],
) -> str:
    """Get the timestamped transcript of a video in one specific caption language."""
    _check_rate_limit()

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        entries = await _extractor.get_transcript_for_language(video_id, language)
    except Exception as e:
        logger.warning(f"{video_id}: {language} transcript failed: {e}")
        return f"Error: Could not load {language} transcript for {video_id}: {e}"

    header = f"## Transcript: {video_id}\n**Language:** {language}\n"
    return f"{header}\n{_entries_to_markdown(entries)}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def list_languages(
    url: Annotated[str, Field(description="YouTube video URL or video ID")],
) -> str:
    """List the caption languages available for a video."""
    _check_rate_limit()

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        tracks = await _extractor.caption_tracks.get_caption_tracks(video_id)
    except Exception as e:
        return f"Error fetching caption tracks for {video_id}: {e}"

    if not tracks:
        return f"No caption tracks found for {video_id}."

    languages = [LanguageDescriptor.from_track(t) for t in tracks]
    return f"## Languages: {video_id}\n\n{_languages_to_markdown(languages)}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def open_video(
    url: Annotated[str, Field(description="YouTube video URL or video ID to make the current video")],
    language: Annotated[str | None, Field(default=None, description="Preferred caption language code or display name")] = None,
) -> str:
    """Make a video current and load its transcript for later language switches and export."""
    _check_rate_limit()

    video_id = extract_video_id(url)
    if not video_id:
        return f"Error: Invalid YouTube URL or video ID: {url}"

    try:
        result = await _session.load(video_id, language)
    except TranscriptUnavailableError as e:
        return _unavailable(video_id, e)
    except Exception as e:
        return f"Error fetching transcript for {video_id}: {e}"

    if result is None:
        return f"Transcript for {video_id} arrived after another video was opened; discarded."

    header = f"## Transcript: {video_id}\n**Method:** {result.method}"
    if result.selected_language:
        header += f" | **Language:** {result.selected_language}"
    parts = [header]
    if len(result.languages) > 1:
        parts.append(f"### Languages\n{_languages_to_markdown(result.languages)}")
    parts.append(_entries_to_markdown(result.entries))
    return "\n\n".join(parts)


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def switch_language(
    language: Annotated[str, Field(description="Caption language code or display name for the current video")],
) -> str:
    """Reload the current video's transcript in another caption language."""
    _check_rate_limit()

    if not _session.video_id:
        return "Error: No video is open. Use open_video first."

    video_id = _session.video_id
    try:
        entries = await _session.switch_language(language)
    except LanguageNotAvailableError:
        return f"Error: Could not load {language} transcript. Language not available."
    except Exception as e:
        return f"Error: Could not load {language} transcript: {e}"

    if entries is None:
        return f"{language} transcript for {video_id} arrived after another video was opened; discarded."

    header = f"## Transcript: {video_id}\n**Language:** {language}\n"
    return f"{header}\n{_entries_to_markdown(entries)}"


@mcp.tool(annotations=TOOL_ANNOTATIONS)
async def export_transcript() -> str:
    """Export the current video's transcript as plain "M:SS - text" lines."""
    text = _session.export_text() if _session else ""
    if not text:
        return "Error: No transcript loaded. Use open_video first."
    return text


# -- MCP Resources --


@mcp.resource("youtube://help")
def help_resource() -> str:
    """Usage guide for the YouTube Transcript Extractor MCP server."""
    return """# YouTube Transcript Extractor - Help Guide

## How transcripts are found
Each request tries, in order:
1. Caption tracks listed in the watch page (timed-text download)
2. The player's internal transcript API
3. The rendered transcript panel of the page (only when YT_EXTRACTOR_DOM_ENABLED=true)

The first method that yields text wins. When all fail, every method's error is listed.

## Available Tools

### get_transcript
- Optional language (code like `en` or name like `English`)
- Output formats: text, segments (with timestamps), or both
- Example: get_transcript(url="VIDEO_ID", language="en", format="segments")

### get_transcript_for_language / list_languages
- list_languages(url="VIDEO_ID") shows the caption tracks
- get_transcript_for_language(url="VIDEO_ID", language="de")

### open_video / switch_language / export_transcript
- open_video(url="VIDEO_ID") makes a video current
- switch_language(language="es") reloads it in another language
- export_transcript() returns "M:SS - text" lines for copying or saving
"""


def main():
    settings = Settings()
    if settings.transport == Transport.STREAMABLE_HTTP:
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
