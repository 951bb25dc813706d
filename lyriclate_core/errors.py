"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations

from .models import PipelineStage


class PipelineError(RuntimeError):
    """Base error for every failure a translation request can report.

    ``stage`` names the pipeline stage that failed and ``upstream_status``
    records the HTTP status returned by a remote service, when known. Only
    ``str(error)`` is ever shown to HTTP clients.
    """

    status_code: int = 500
    default_stage: PipelineStage | None = None

    def __init__(
        self,
        message: str,
        *,
        stage: PipelineStage | None = None,
        upstream_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage or self.default_stage
        self.upstream_status = upstream_status


class ValidationError(PipelineError):
    """Raised when a request is missing required fields."""

    status_code = 400


class ConfigurationError(PipelineError):
    """Raised when credentials or settings are unusable."""


class RetrievalError(PipelineError):
    """Raised when the audio file cannot be downloaded."""

    default_stage = PipelineStage.FETCHING


class StagingError(PipelineError):
    """Raised when the audio payload cannot be written locally."""

    default_stage = PipelineStage.STAGING


class TranscriptionError(PipelineError):
    """Raised when the speech-to-text service fails or rejects the audio."""

    default_stage = PipelineStage.TRANSCRIBING


class TranslationError(PipelineError):
    """Raised when the text-generation service call fails."""

    default_stage = PipelineStage.TRANSLATING


class InternalError(PipelineError):
    """Raised for failures nobody anticipated."""


__all__ = [
    "ConfigurationError",
    "InternalError",
    "PipelineError",
    "RetrievalError",
    "StagingError",
    "TranscriptionError",
    "TranslationError",
    "ValidationError",
]
