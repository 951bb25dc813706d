from __future__ import annotations

import types
from contextlib import asynccontextmanager

import httpx
import pytest

from lyriclate.ui_web.app import create_app
from lyriclate_core import Settings
from lyriclate_core.services import ServiceClients


class DummyTranscriptionResponse:
    def __init__(self, text: str) -> None:
        self.text = text
        self.language = "english"
        self.segments: list[dict[str, object]] = []


class DummyChatMessage:
    def __init__(self, content: str | None) -> None:
        self.content = content


class DummyChoice:
    def __init__(self, content: str | None) -> None:
        self.message = DummyChatMessage(content)
        self.index = 0


class DummyChatResponse:
    def __init__(self, *contents: str | None) -> None:
        self.choices = [DummyChoice(content) for content in contents]


class FakeOpenAI:
    """Records calls made through ``audio.transcriptions`` and ``chat.completions``."""

    def __init__(self, transcribe=None, complete=None) -> None:
        self.transcribe_calls: list[dict[str, object]] = []
        self.chat_calls: list[dict[str, object]] = []
        self._transcribe = transcribe or (lambda **_: DummyTranscriptionResponse("Hello world. How are you?"))
        self._complete = complete or (lambda **_: DummyChatResponse("Hola mundo.\n¿Cómo estás?\n"))
        self.audio = types.SimpleNamespace(transcriptions=types.SimpleNamespace(create=self._create_transcription))
        self.chat = types.SimpleNamespace(completions=types.SimpleNamespace(create=self._create_completion))

    async def _create_transcription(self, **kwargs):
        self.transcribe_calls.append(kwargs)
        result = self._transcribe(**kwargs)
        if isinstance(result, BaseException):
            raise result
        return result

    async def _create_completion(self, **kwargs):
        self.chat_calls.append(kwargs)
        result = self._complete(**kwargs)
        if isinstance(result, BaseException):
            raise result
        return result


def audio_handler(payload: bytes = b"ID3fake-mp3-bytes", status: int = 200):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, content=payload if status < 400 else b"not found")

    handler.requests = requests  # type: ignore[attr-defined]
    return handler


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(api_key="test-key", staging_dir=tmp_path / "staging")


@pytest.fixture()
def install_clients(monkeypatch):
    """Replace the per-invocation clients with an httpx mock and a fake OpenAI client."""

    def install(handler, openai_client):
        @asynccontextmanager
        async def fake_open_clients(_settings):
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
                yield ServiceClients(http=http, openai=openai_client)

        monkeypatch.setattr("lyriclate_core.pipeline.open_clients", fake_open_clients)

    return install


@pytest.fixture()
def flask_app(settings):
    app = create_app({"TESTING": True, "LYRICLATE_SETTINGS": settings})
    yield app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
