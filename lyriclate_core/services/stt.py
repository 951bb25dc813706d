"""Speech-to-text helper functions."""

from __future__ import annotations

import logging
from typing import Final

import openai
from openai import AsyncOpenAI

from ..config import Settings
from ..errors import TranscriptionError
from ..languages import normalize_language
from ..models import StagedAudio, TranscriptOutput

LOGGER = logging.getLogger(__name__)

RESPONSE_FORMAT: Final[str] = "verbose_json"


async def transcribe(
    staged: StagedAudio,
    language: str | None,
    *,
    client: AsyncOpenAI,
    settings: Settings,
) -> TranscriptOutput:
    """Transcribe the staged audio file and return the trimmed text.

    *language* is a hint only; ``None``, ``""`` and ``"default"`` let the
    service detect the language itself.
    """

    hint = normalize_language(language)
    LOGGER.info("Transcribing %s (model=%s, language=%s)", staged.path.name, settings.transcribe_model, hint)

    kwargs: dict[str, object] = {
        "model": settings.transcribe_model,
        "response_format": RESPONSE_FORMAT,
        "timeout": settings.transcribe_timeout,
    }
    if hint:
        kwargs["language"] = hint

    try:
        with staged.path.open("rb") as audio_file:
            response = await client.audio.transcriptions.create(file=audio_file, **kwargs)
    except openai.APITimeoutError as exc:
        raise TranscriptionError("Transcription timed out") from exc
    except openai.APIStatusError as exc:
        raise TranscriptionError(
            f"Transcription failed: {exc.message}",
            upstream_status=exc.status_code,
        ) from exc
    except openai.OpenAIError as exc:
        raise TranscriptionError(f"Transcription failed: {exc}") from exc
    except OSError as exc:
        raise TranscriptionError("Staged audio file could not be read") from exc

    text = getattr(response, "text", None)
    if not isinstance(text, str):
        raise TranscriptionError("Transcription response did not contain text")

    LOGGER.debug("Received transcription response (%d characters)", len(text))
    return TranscriptOutput(text=text.strip(), language_hint=hint)


__all__ = ["RESPONSE_FORMAT", "transcribe"]
