"""Transcript extraction errors."""


class TranscriptError(Exception):
    """Base class for every extraction failure."""


class NetworkError(TranscriptError):
    """Request rejected or answered with a non-success status."""


class HTTPStatusError(NetworkError):
    def __init__(self, status: int, url: str = ""):
        self.status = status
        self.url = url
        super().__init__(f"HTTP {status}")


class ParseError(TranscriptError):
    """Malformed markup, JSON or XML."""


class SchemaError(TranscriptError):
    """An expected field or path is absent; upstream format drifted."""


class NoTrackUrlError(SchemaError):
    def __init__(self):
        super().__init__("No caption track URL")


class ParamsNotFoundError(SchemaError):
    def __init__(self):
        super().__init__("Could not find transcript params")


class InvalidResponseError(SchemaError):
    def __init__(self, step: str):
        self.step = step
        super().__init__(f"Invalid transcript response: missing {step!r}")


class EmptyResultError(TranscriptError):
    """A strategy ran but produced no usable entries."""


class NoSegmentsError(EmptyResultError):
    def __init__(self):
        super().__init__("No transcript segments found in DOM")


class NotFoundError(TranscriptError):
    """A requested track, language or resource is absent."""


class LanguageNotAvailableError(NotFoundError):
    def __init__(self, language: str):
        self.language = language
        super().__init__(f'Language "{language}" not available')


class DomUnavailableError(NotFoundError):
    def __init__(self):
        super().__init__("No live page available for DOM scraping")


class NoVideoIdError(TranscriptError, ValueError):
    def __init__(self):
        super().__init__("No video ID provided")


class TranscriptUnavailableError(TranscriptError):
    """Every strategy failed. ``diagnostics`` holds one line per attempt."""

    def __init__(self, diagnostics: list[str]):
        self.diagnostics = list(diagnostics)
        super().__init__(
            "No transcript available. Tried all methods:\n"
            + "\n".join(self.diagnostics)
        )
