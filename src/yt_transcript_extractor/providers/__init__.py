"""Transcript extraction strategies."""

from .base import TranscriptProvider
from .caption_track import CaptionTrackProvider
from .internal_api import InternalApiProvider
from .dom import DomScrapeProvider

__all__ = [
    "TranscriptProvider",
    "CaptionTrackProvider",
    "InternalApiProvider",
    "DomScrapeProvider",
]
