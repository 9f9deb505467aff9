"""Data models for transcript results."""

from pydantic import BaseModel


class TranscriptEntry(BaseModel):
    index: int
    text: str
    start: int


class CaptionTrack(BaseModel):
    language_code: str
    display_name: str
    is_auto_generated: bool = False
    source_url: str = ""

    @classmethod
    def from_player_track(cls, raw: dict) -> "CaptionTrack":
        """Build a track from a raw ``captionTracks`` item of the player response."""
        code = raw.get("languageCode", "")
        name = raw.get("name") or {}
        display_name = name.get("simpleText") or "".join(
            run.get("text", "") for run in name.get("runs", [])
        )
        return cls(
            language_code=code,
            display_name=display_name or code,
            is_auto_generated=raw.get("kind") == "asr",
            source_url=raw.get("baseUrl", ""),
        )

    def matches(self, lang: str) -> bool:
        return lang in (self.language_code, self.display_name)


class LanguageDescriptor(BaseModel):
    code: str
    name: str
    is_auto: bool = False

    @classmethod
    def from_track(cls, track: CaptionTrack) -> "LanguageDescriptor":
        return cls(
            code=track.language_code,
            name=track.display_name,
            is_auto=track.is_auto_generated,
        )


class TranscriptResult(BaseModel):
    entries: list[TranscriptEntry]
    languages: list[LanguageDescriptor] = []
    selected_language: str = ""
    method: str = "unknown"

    @property
    def text(self) -> str:
        return " ".join(e.text for e in self.entries)
