"""Request-scoped temporary storage for downloaded audio."""

from __future__ import annotations

import logging
import os
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import Iterator
from urllib.parse import urlsplit

from ..errors import StagingError
from ..models import StagedAudio

LOGGER = logging.getLogger(__name__)

DEFAULT_EXTENSION = "mp3"
AUDIO_EXTENSIONS = frozenset({"flac", "m4a", "mp3", "mp4", "mpeg", "mpga", "oga", "ogg", "opus", "wav", "webm"})
FILENAME_PREFIX = "lyriclate-"


def extension_from_locator(locator: str, default: str = DEFAULT_EXTENSION) -> str:
    """Guess the audio container from the URL path, falling back to *default*."""

    suffix = PurePosixPath(urlsplit(locator).path).suffix.lstrip(".").lower()
    return suffix if suffix in AUDIO_EXTENSIONS else default


def stage_audio(
    payload: bytes,
    extension_hint: str = DEFAULT_EXTENSION,
    *,
    directory: Path | None = None,
    key: str | None = None,
) -> StagedAudio:
    """Write *payload* to a uniquely named file and return its handle.

    The data is written to a hidden ``.part`` sibling first and renamed into
    place, so readers never see a partial file. On failure nothing is left
    behind and :class:`StagingError` is raised.
    """

    key = key or uuid.uuid4().hex
    extension = extension_hint.lstrip(".").lower() or DEFAULT_EXTENSION
    target_dir = Path(directory) if directory else Path(tempfile.gettempdir())
    path = target_dir / f"{FILENAME_PREFIX}{key}.{extension}"
    partial = target_dir / f".{FILENAME_PREFIX}{key}.{extension}.part"

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        with partial.open("xb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(partial, path)
    except OSError as exc:
        LOGGER.exception("Failed to stage audio at %s", path)
        _unlink_quietly(partial)
        raise StagingError("Failed to save the audio file") from exc

    LOGGER.info("Staged %d bytes at %s", len(payload), path)
    return StagedAudio(path=path, extension=extension, key=key)


def release(staged: StagedAudio) -> None:
    """Delete the staged file. Safe to call more than once."""

    if staged.released:
        return
    staged.released = True
    if _unlink_quietly(staged.path):
        LOGGER.info("Removed staged audio %s", staged.path)


@contextmanager
def staged_audio(
    payload: bytes,
    extension_hint: str = DEFAULT_EXTENSION,
    *,
    directory: Path | None = None,
    key: str | None = None,
) -> Iterator[StagedAudio]:
    """Stage *payload* for the duration of the ``with`` block."""

    staged = stage_audio(payload, extension_hint, directory=directory, key=key)
    try:
        yield staged
    finally:
        release(staged)


def _unlink_quietly(path: Path) -> bool:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        LOGGER.warning("Failed to remove temporary audio file: %s", path)
        return False
    return True


__all__ = [
    "AUDIO_EXTENSIONS",
    "DEFAULT_EXTENSION",
    "extension_from_locator",
    "release",
    "stage_audio",
    "staged_audio",
]
