"""Flask JSON API for lyriclate."""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, Flask, Response, current_app, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from lyriclate_core import PipelineError, Settings, ValidationError, get_settings, run_pipeline
from lyriclate_core.config import MAX_AUDIO_BYTES
from lyriclate_core.languages import LANGUAGES, normalize_language

LOGGER = logging.getLogger(__name__)

API = Blueprint("api", __name__, url_prefix="/api")


def create_app(config: dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        MAX_CONTENT_LENGTH=MAX_AUDIO_BYTES,
        LYRICLATE_ENABLE_CORS=False,
        LYRICLATE_CORS_ORIGIN="*",
    )
    if config:
        app.config.update(config)

    app.register_blueprint(API)

    @app.after_request
    def apply_cors_headers(response: Response) -> Response:
        if app.config.get("LYRICLATE_ENABLE_CORS"):
            response.headers.setdefault("Access-Control-Allow-Origin", app.config["LYRICLATE_CORS_ORIGIN"])
            response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
            response.headers.setdefault("Access-Control-Allow-Methods", "GET,POST,OPTIONS")
        return response

    @app.errorhandler(RequestEntityTooLarge)
    def request_too_large(_exc: RequestEntityTooLarge):
        return json_error("Request body too large", 413)

    with app.app_context():
        current_settings()
        LOGGER.info("Loaded settings for web API")

    return app


@API.get("/health")
def health() -> Response:
    return jsonify({"ok": True})


@API.get("/languages")
def api_languages() -> Response:
    return jsonify([{"code": item["code"], "name": item["name"]} for item in LANGUAGES])


@API.post("/translate")
async def api_translate():
    try:
        file_url, input_language, output_language = _parse_translate_request(request.get_json(silent=True))
    except ValidationError as exc:
        LOGGER.warning("Rejected /api/translate request: %s", exc)
        return json_error(str(exc), exc.status_code)

    try:
        result = await run_pipeline(file_url, input_language, output_language, settings=current_settings())
    except PipelineError as exc:
        return json_error(str(exc) or "Internal Server Error", exc.status_code)

    return jsonify(result.to_mapping())


def current_settings() -> Settings:
    settings = current_app.config.get("LYRICLATE_SETTINGS")
    if isinstance(settings, Settings):
        return settings
    settings = get_settings()
    current_app.config["LYRICLATE_SETTINGS"] = settings
    return settings


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def _parse_translate_request(payload: Any) -> tuple[str, str | None, str]:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    file_url = payload.get("fileUrl")
    if not isinstance(file_url, str) or not file_url.strip():
        raise ValidationError("No file URL provided")

    output_language = normalize_language(payload.get("outputLanguage"))
    if not output_language:
        raise ValidationError("No output language provided")

    return file_url.strip(), normalize_language(payload.get("inputLanguage")), output_language


def main(host: str = "127.0.0.1", port: int = 8080) -> int:
    """Serve the API with Flask's development server."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    app = create_app({"LYRICLATE_SETTINGS": settings})
    app.run(host=host, port=port)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main(host="0.0.0.0"))
