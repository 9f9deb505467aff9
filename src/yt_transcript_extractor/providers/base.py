"""Abstract base for transcript providers."""

import math
from abc import ABC, abstractmethod
from typing import Iterable

from yt_transcript_extractor.errors import EmptyResultError
from yt_transcript_extractor.models import TranscriptEntry, TranscriptResult


def round_seconds(value: float) -> int:
    """Round to whole seconds, halves up."""
    return math.floor(value + 0.5)


def build_entries(
    items: Iterable[tuple[str, int | None]],
    empty_message: str = "No transcript entries found",
) -> list[TranscriptEntry]:
    """Turn (text, start) pairs into entries indexed by position.

    Pairs with empty text or no start are dropped.
    """
    entries = []
    for text, start in items:
        if not text or start is None:
            continue
        entries.append(TranscriptEntry(index=len(entries), text=text, start=start))
    if not entries:
        raise EmptyResultError(empty_message)
    return entries


class TranscriptProvider(ABC):
    name = "unknown"

    @abstractmethod
    async def get_transcript(
        self, video_id: str, language: str | None = None
    ) -> TranscriptResult:
        """Fetch transcript for a single video."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        ...
