"""Fetch, transcribe, segment and translate one uploaded song."""

from __future__ import annotations

import logging
import uuid

from .config import Settings, get_settings
from .errors import InternalError, PipelineError
from .models import PipelineResult, PipelineStage, StagedAudio
from .services import (
    extension_from_locator,
    fetch_audio,
    open_clients,
    release,
    segment_lyrics,
    stage_audio,
    transcribe,
    translate,
)

LOGGER = logging.getLogger(__name__)


async def run_pipeline(
    file_url: str,
    input_language: str | None,
    output_language: str,
    *,
    settings: Settings | None = None,
) -> PipelineResult:
    """Run every stage in order and return the lyrics with their translation.

    Stages run strictly one after another: fetching, staging, transcribing
    and translating. The first failure stops the run and is re-raised as a
    :class:`PipelineError` tagged with the failing stage; anything else is
    wrapped in :class:`InternalError`. The staged audio file is removed
    before this coroutine returns or raises, including on cancellation.
    """

    settings = settings or get_settings()
    key = uuid.uuid4().hex
    stage = PipelineStage.FETCHING
    staged: StagedAudio | None = None

    try:
        async with open_clients(settings) as clients:
            LOGGER.info("[%s] %s %s", key, stage.value, file_url)
            payload = await fetch_audio(file_url, client=clients.http, max_bytes=settings.max_audio_bytes)

            stage = _advance(key, PipelineStage.STAGING)
            staged = stage_audio(
                payload,
                extension_from_locator(file_url),
                directory=settings.staging_dir,
                key=key,
            )

            stage = _advance(key, PipelineStage.TRANSCRIBING)
            transcript = await transcribe(staged, input_language, client=clients.openai, settings=settings)
            original = segment_lyrics(transcript.text)

            stage = _advance(key, PipelineStage.TRANSLATING)
            translation = await translate(original, output_language, client=clients.openai, settings=settings)
    except PipelineError as exc:
        if exc.stage is None:
            exc.stage = stage
        LOGGER.error(
            "[%s] %s: %s failed (upstream_status=%s): %s",
            key,
            PipelineStage.FAILED.value,
            exc.stage.value,
            exc.upstream_status,
            exc,
        )
        raise
    except Exception as exc:
        LOGGER.exception("[%s] %s: unexpected error during %s", key, PipelineStage.FAILED.value, stage.value)
        raise InternalError("Internal Server Error", stage=stage) from exc
    finally:
        if staged is not None:
            release(staged)

    _advance(key, PipelineStage.DONE)
    return PipelineResult(original=original, translated=translation.text)


def _advance(key: str, stage: PipelineStage) -> PipelineStage:
    LOGGER.info("[%s] %s", key, stage.value)
    return stage


__all__ = ["run_pipeline"]
