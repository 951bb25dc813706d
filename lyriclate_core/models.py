"""Value objects passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class PipelineStage(str, Enum):
    """Ordered stages of a single translation request."""

    FETCHING = "fetching"
    STAGING = "staging"
    TRANSCRIBING = "transcribing"
    TRANSLATING = "translating"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class StagedAudio:
    """Audio payload written to a request-scoped temporary file."""

    path: Path
    extension: str
    key: str
    released: bool = field(default=False, compare=False)


@dataclass(frozen=True, slots=True)
class TranscriptOutput:
    text: str
    language_hint: str | None = None


@dataclass(frozen=True, slots=True)
class TranslationResult:
    text: str


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Successful outcome returned to HTTP callers."""

    original: str
    translated: str

    def to_mapping(self) -> dict[str, str]:
        return {"original": self.original, "translated": self.translated}


__all__ = [
    "PipelineResult",
    "PipelineStage",
    "StagedAudio",
    "TranscriptOutput",
    "TranslationResult",
]
