"""Translation helper functions."""

from __future__ import annotations

import logging
from typing import Final

import openai
from openai import AsyncOpenAI

from ..config import Settings
from ..errors import TranslationError
from ..languages import language_label
from ..models import TranslationResult

LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT: Final[str] = (
    "You are a professional song lyric translator. "
    "Keep the lyrics structured properly with correct line breaks."
)
USER_PROMPT_TEMPLATE: Final[str] = (
    "Translate this song into {target}, maintaining its structure as lyrics "
    "with proper line breaks:\n\n{text}"
)


def build_messages(text: str, target_language: str) -> list[dict[str, str]]:
    """Chat messages asking for a line-preserving translation of *text*."""

    prompt = USER_PROMPT_TEMPLATE.format(target=language_label(target_language), text=text)
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


async def translate(
    text: str,
    target_language: str,
    *,
    client: AsyncOpenAI,
    settings: Settings,
) -> TranslationResult:
    """Translate lyric lines into *target_language*.

    The model is only asked to keep the line breaks; the returned text is
    not checked for it. A response without choices or content yields an
    empty translation rather than an error.
    """

    LOGGER.info("Translating %d characters to %s", len(text), target_language)
    if not text.strip():
        return TranslationResult(text="")

    try:
        response = await client.chat.completions.create(
            model=settings.translate_model,
            messages=build_messages(text, target_language),
            timeout=settings.translate_timeout,
        )
    except openai.APITimeoutError as exc:
        raise TranslationError("Translation timed out") from exc
    except openai.APIStatusError as exc:
        raise TranslationError(f"Translation failed: {exc.message}", upstream_status=exc.status_code) from exc
    except openai.OpenAIError as exc:
        raise TranslationError(f"Translation failed: {exc}") from exc

    choices = getattr(response, "choices", None) or []
    if not choices:
        LOGGER.warning("Translation response contained no choices")
        return TranslationResult(text="")

    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None) or ""
    LOGGER.debug("Received translation response (%d characters)", len(content))
    return TranslationResult(text=content)


__all__ = ["SYSTEM_PROMPT", "USER_PROMPT_TEMPLATE", "build_messages", "translate"]
