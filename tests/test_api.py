from __future__ import annotations

from conftest import DummyChatResponse, FakeOpenAI, audio_handler
from lyriclate_core import PipelineResult, TranslationError

SONG_URL = "https://res.example.test/video/upload/song.mp3"


def test_translate_endpoint_returns_lyrics(client, install_clients, settings):
    fake = FakeOpenAI()
    install_clients(audio_handler(), fake)

    response = client.post(
        "/api/translate",
        json={"fileUrl": SONG_URL, "inputLanguage": "en", "outputLanguage": "es"},
    )

    assert response.status_code == 200
    assert response.get_json() == {
        "original": "Hello world.\nHow are you?\n",
        "translated": "Hola mundo.\n¿Cómo estás?\n",
    }
    assert fake.transcribe_calls[0]["language"] == "en"
    assert list(settings.staging_dir.iterdir()) == []


def test_missing_file_url_is_rejected_without_network(client, monkeypatch):
    calls = []

    async def fake_pipeline(*args, **kwargs):
        calls.append(args)
        return PipelineResult(original="", translated="")

    monkeypatch.setattr("lyriclate.ui_web.app.run_pipeline", fake_pipeline)

    for body in ({"outputLanguage": "es"}, {"fileUrl": "", "outputLanguage": "es"}, None):
        response = client.post("/api/translate", json=body)
        assert response.status_code == 400
        assert response.get_json() == {"error": "No file URL provided"}
    assert calls == []


def test_missing_output_language_is_rejected(client):
    response = client.post("/api/translate", json={"fileUrl": SONG_URL})
    assert response.status_code == 400
    assert response.get_json() == {"error": "No output language provided"}


def test_non_object_body_is_rejected(client):
    response = client.post("/api/translate", json=["not", "an", "object"])
    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be a JSON object"}


def test_retrieval_failure_returns_500_without_staging(client, install_clients, monkeypatch):
    staged = []
    monkeypatch.setattr("lyriclate_core.pipeline.stage_audio", lambda *a, **k: staged.append(a))
    install_clients(audio_handler(status=404), FakeOpenAI())

    response = client.post("/api/translate", json={"fileUrl": SONG_URL, "outputLanguage": "es"})

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to fetch file. Status: 404"}
    assert staged == []


def test_pipeline_errors_only_expose_message(client, monkeypatch):
    async def failing_pipeline(*args, **kwargs):
        raise TranslationError("Translation failed: quota exceeded", upstream_status=429)

    monkeypatch.setattr("lyriclate.ui_web.app.run_pipeline", failing_pipeline)

    response = client.post("/api/translate", json={"fileUrl": SONG_URL, "outputLanguage": "fr"})
    assert response.status_code == 500
    assert response.get_json() == {"error": "Translation failed: quota exceeded"}


def test_empty_translation_is_still_success(client, install_clients):
    install_clients(audio_handler(), FakeOpenAI(complete=lambda **_: DummyChatResponse()))

    response = client.post("/api/translate", json={"fileUrl": SONG_URL, "outputLanguage": "es"})

    assert response.status_code == 200
    assert response.get_json()["translated"] == ""


def test_oversized_body_is_rejected(flask_app):
    flask_app.config["MAX_CONTENT_LENGTH"] = 64
    response = flask_app.test_client().post(
        "/api/translate",
        data="{" + '"pad": "' + "x" * 128 + '"}',
        content_type="application/json",
    )
    assert response.status_code == 413
    assert response.get_json() == {"error": "Request body too large"}


def test_health_and_languages(client):
    assert client.get("/api/health").get_json() == {"ok": True}
    languages = client.get("/api/languages").get_json()
    assert {"code": "es", "name": "Spanish"} in languages
