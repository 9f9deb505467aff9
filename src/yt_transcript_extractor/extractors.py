"""Pluggable extractors for pulling structured data out of page markup.

The watch page embeds its player response and engagement panels in
undocumented, drifting markup. Each extractor here is a narrow function from
raw markup to an optional value, so a format change breaks one extractor
(and its fixture test) rather than the whole pipeline.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from yt_transcript_extractor.errors import InvalidResponseError

logger = logging.getLogger(__name__)

MarkupExtractor = Callable[[str], Optional[Any]]

_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")


@dataclass(frozen=True)
class MarkerExtractor:
    """Slice the markup between two marker substrings and parse it as JSON."""

    start_marker: str
    end_marker: str

    def __call__(self, markup: str) -> Optional[Any]:
        _, found, rest = markup.partition(self.start_marker)
        if not found:
            logger.debug("Marker %r not found", self.start_marker)
            return None
        chunk, found, _ = rest.partition(self.end_marker)
        if not found:
            logger.debug("Marker %r not found", self.end_marker)
            return None
        try:
            return json.loads(_CONTROL_CHARS.sub("", chunk))
        except ValueError as e:
            logger.debug("Could not parse %r block: %s", self.start_marker, e)
            return None


captions_extractor = MarkerExtractor('"captions":', ',"videoDetails')


@dataclass(frozen=True)
class PatternExtractor:
    """Return a capture group of the first matching regex, tried in order."""

    patterns: Sequence[tuple[re.Pattern, int]]

    def __call__(self, markup: str) -> Optional[str]:
        for pattern, group in self.patterns:
            match = pattern.search(markup)
            if match:
                return match.group(group)
        return None


# New markup variants go at the end of the list.
TRANSCRIPT_PARAMS_PATTERNS = [
    (
        re.compile(
            r'"serializedShareEntity":"([^"]+)".*?'
            r'"getTranscriptEndpoint"\s*:\s*\{\s*"params"\s*:\s*"([^"]+)"'
        ),
        2,
    ),
    (re.compile(r'"params"\s*:\s*"([^"]+)"[^}]*"getTranscriptEndpoint"'), 1),
]

transcript_params_extractor = PatternExtractor(TRANSCRIPT_PARAMS_PATTERNS)


def dig(data: Any, *path: str | int) -> Any:
    """Walk ``path`` through nested dicts and lists.

    Raises InvalidResponseError naming the first step that is absent.
    """
    current = data
    walked = []
    for step in path:
        walked.append(str(step))
        try:
            current = current[step]
        except (KeyError, IndexError, TypeError):
            raise InvalidResponseError(".".join(walked)) from None
        if current is None:
            raise InvalidResponseError(".".join(walked))
    return current
