"""Shared helpers for acquiring API clients."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx
from openai import AsyncOpenAI

from ..config import Settings
from ..errors import ConfigurationError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ServiceClients:
    """HTTP and OpenAI clients used by one pipeline invocation."""

    http: httpx.AsyncClient
    openai: AsyncOpenAI


def create_openai_client(settings: Settings) -> AsyncOpenAI:
    """Return an async OpenAI client configured from *settings*.

    ``base_url`` may point at any OpenAI compatible endpoint. Automatic
    retries are disabled so a failed call surfaces immediately.
    """

    if not settings.api_key:
        raise ConfigurationError("LYRICLATE_API_KEY is not configured")
    LOGGER.debug("Initialising OpenAI client (base_url=%s)", settings.base_url or "default")
    return AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url, max_retries=0)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(settings.fetch_timeout), follow_redirects=True)


@asynccontextmanager
async def open_clients(settings: Settings) -> AsyncIterator[ServiceClients]:
    """Open the clients for one invocation and close them on exit.

    Flask runs every async view on a fresh event loop, so connection pools
    cannot outlive a request; only :class:`Settings` is process-wide.
    """

    openai_client = create_openai_client(settings)
    async with create_http_client(settings) as http_client, openai_client:
        yield ServiceClients(http=http_client, openai=openai_client)


__all__ = ["ServiceClients", "create_http_client", "create_openai_client", "open_clients"]
