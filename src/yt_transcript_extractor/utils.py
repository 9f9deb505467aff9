"""Utility functions."""

import re
from urllib.parse import parse_qs, urlparse


def get_video_id(url: str) -> str | None:
    """Return the ``v`` query parameter of a watch page URL, if any."""
    values = parse_qs(urlparse(url).query).get("v")
    if not values or not values[0]:
        return None
    return values[0]


def extract_video_id(url_or_id: str) -> str | None:
    """Extract YouTube video ID from URL or return as-is if valid ID."""
    patterns = [
        r"(?:v=|/v/|youtu\.be/)([a-zA-Z0-9_-]{11})",
        r"(?:embed/)([a-zA-Z0-9_-]{11})",
        r"(?:shorts/)([a-zA-Z0-9_-]{11})",
    ]
    for pattern in patterns:
        match = re.search(pattern, url_or_id)
        if match:
            return match.group(1)
    if re.match(r"^[a-zA-Z0-9_-]{11}$", url_or_id):
        return url_or_id
    return None


def format_timestamp(total_seconds: float) -> str:
    """Format seconds to H:MM:SS or M:SS."""
    seconds = int(total_seconds // 1)
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    if h > 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m}:{s:02d}"


def parse_timestamp(text: str) -> int | None:
    """Parse a rendered "M:SS" or "H:MM:SS" timestamp into seconds.

    Returns None for any other shape.
    """
    parts = text.strip().split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        values = [int(p) for p in parts]
    except ValueError:
        return None
    if len(values) == 3:
        h, m, s = values
        return h * 3600 + m * 60 + s
    m, s = values
    return m * 60 + s


def format_transcript_lines(entries) -> str:
    """Render entries as "M:SS - text" lines, one per entry."""
    return "\n".join(
        f"{format_timestamp(e.start)} - {e.text}" for e in entries
    )
