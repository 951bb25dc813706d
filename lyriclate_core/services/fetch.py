"""Download uploaded audio from object storage."""

from __future__ import annotations

import logging

import httpx

from ..errors import RetrievalError

LOGGER = logging.getLogger(__name__)


async def fetch_audio(locator: str, *, client: httpx.AsyncClient, max_bytes: int | None = None) -> bytes:
    """Return the bytes behind *locator* with a single GET request.

    Any non-2xx status, transport failure or timeout raises
    :class:`RetrievalError`; nothing is retried. When *max_bytes* is set the
    download is aborted as soon as the body grows past it.
    """

    LOGGER.info("Fetching audio file from %s", locator)
    try:
        url = httpx.URL(locator)
    except httpx.InvalidURL as exc:
        raise RetrievalError(f"Invalid file URL: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise RetrievalError("Invalid file URL: expected an absolute http(s) URL")

    try:
        async with client.stream("GET", url) as response:
            if not response.is_success:
                raise RetrievalError(
                    f"Failed to fetch file. Status: {response.status_code}",
                    upstream_status=response.status_code,
                )
            declared = response.headers.get("content-length")
            if max_bytes is not None and declared and declared.isdigit() and int(declared) > max_bytes:
                raise _too_large(max_bytes)

            chunks: list[bytes] = []
            received = 0
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                if max_bytes is not None and received > max_bytes:
                    raise _too_large(max_bytes)
                chunks.append(chunk)
    except httpx.TimeoutException as exc:
        raise RetrievalError("Timed out fetching file") from exc
    except httpx.HTTPError as exc:
        raise RetrievalError(f"Failed to fetch file: {exc}") from exc

    payload = b"".join(chunks)
    LOGGER.debug("Fetched %d bytes from %s", len(payload), locator)
    return payload


def _too_large(max_bytes: int) -> RetrievalError:
    return RetrievalError(f"Audio file exceeds the {max_bytes // (1024 * 1024)} MB limit")


__all__ = ["fetch_audio"]
