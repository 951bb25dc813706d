"""Service layer used by the translation pipeline."""

from ._client import ServiceClients, open_clients
from .fetch import fetch_audio
from .staging import extension_from_locator, release, stage_audio, staged_audio
from .stt import transcribe
from .text_utils import segment_lyrics
from .translate import translate

__all__ = [
    "ServiceClients",
    "extension_from_locator",
    "fetch_audio",
    "open_clients",
    "release",
    "segment_lyrics",
    "stage_audio",
    "staged_audio",
    "transcribe",
    "translate",
]
