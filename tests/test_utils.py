"""Tests for video IDs and timestamps."""

from yt_transcript_extractor.models import TranscriptEntry
from yt_transcript_extractor.utils import (
    extract_video_id,
    format_timestamp,
    format_transcript_lines,
    get_video_id,
    parse_timestamp,
)


class TestGetVideoId:
    def test_watch_url(self):
        assert get_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=30") == "dQw4w9WgXcQ"

    def test_missing_param(self):
        assert get_video_id("https://www.youtube.com/feed/subscriptions") is None

    def test_empty_param(self):
        assert get_video_id("https://www.youtube.com/watch?v=") is None


class TestExtractVideoId:
    def test_standard_url(self):
        assert extract_video_id("https://www.youtube.com/watch?v=dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_short_url(self):
        assert extract_video_id("https://youtu.be/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_embed_url(self):
        assert extract_video_id("https://www.youtube.com/embed/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_shorts_url(self):
        assert extract_video_id("https://www.youtube.com/shorts/dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_raw_id(self):
        assert extract_video_id("dQw4w9WgXcQ") == "dQw4w9WgXcQ"

    def test_invalid_url(self):
        assert extract_video_id("https://google.com") is None

    def test_empty_string(self):
        assert extract_video_id("") is None


class TestFormatTimestamp:
    def test_zero(self):
        assert format_timestamp(0) == "0:00"

    def test_minutes_and_seconds(self):
        assert format_timestamp(65) == "1:05"

    def test_hours(self):
        assert format_timestamp(3661) == "1:01:01"

    def test_minutes_unpadded(self):
        assert format_timestamp(600) == "10:00"

    def test_floors_fractions(self):
        assert format_timestamp(59.9) == "0:59"


class TestParseTimestamp:
    def test_hours(self):
        assert parse_timestamp("1:02:03") == 3723

    def test_minutes(self):
        assert parse_timestamp("2:05") == 125

    def test_whitespace(self):
        assert parse_timestamp("  0:07\n") == 7

    def test_single_part(self):
        assert parse_timestamp("42") is None

    def test_not_numeric(self):
        assert parse_timestamp("a:bc") is None


def test_format_transcript_lines():
    entries = [
        TranscriptEntry(index=0, text="Hello", start=0),
        TranscriptEntry(index=1, text="Later", start=3725),
    ]
    assert format_transcript_lines(entries) == "0:00 - Hello\n1:02:05 - Later"
