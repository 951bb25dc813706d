"""Core services and configuration for lyriclate."""

from .config import Settings, get_settings, load_settings
from .errors import (
    ConfigurationError,
    InternalError,
    PipelineError,
    RetrievalError,
    StagingError,
    TranscriptionError,
    TranslationError,
    ValidationError,
)
from .models import PipelineResult, PipelineStage
from .pipeline import run_pipeline

__all__ = [
    "ConfigurationError",
    "InternalError",
    "PipelineError",
    "PipelineResult",
    "PipelineStage",
    "RetrievalError",
    "Settings",
    "StagingError",
    "TranscriptionError",
    "TranslationError",
    "ValidationError",
    "get_settings",
    "load_settings",
    "run_pipeline",
]
