"""Configuration helpers shared by the pipeline and the web front end."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import lru_cache
from pathlib import Path
import json
import logging
import os
from typing import Any, Mapping

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

CONFIG_DIR = Path(os.environ.get("LYRICLATE_HOME", Path.home() / ".lyriclate"))
SETTINGS_PATH = CONFIG_DIR / "settings.json"

MAX_AUDIO_BYTES = 25 * 1024 * 1024

# Environment variables win over settings.json; the first name found is used.
ENV_OVERRIDES: dict[str, tuple[str, ...]] = {
    "api_key": ("LYRICLATE_API_KEY", "OPENAI_API_KEY"),
    "base_url": ("LYRICLATE_BASE_URL", "OPENAI_BASE_URL"),
    "transcribe_model": ("LYRICLATE_TRANSCRIBE_MODEL",),
    "translate_model": ("LYRICLATE_TRANSLATE_MODEL",),
    "fetch_timeout": ("LYRICLATE_FETCH_TIMEOUT",),
    "transcribe_timeout": ("LYRICLATE_TRANSCRIBE_TIMEOUT",),
    "translate_timeout": ("LYRICLATE_TRANSLATE_TIMEOUT",),
    "max_audio_bytes": ("LYRICLATE_MAX_AUDIO_BYTES",),
    "staging_dir": ("LYRICLATE_STAGING_DIR",),
    "log_level": ("LYRICLATE_LOG_LEVEL",),
}


@dataclass(slots=True)
class Settings:
    """Process-wide configuration, read-only once loaded."""

    api_key: str | None = None
    base_url: str | None = None
    transcribe_model: str = "whisper-1"
    translate_model: str = "gpt-4o-mini"
    fetch_timeout: float = 30.0
    transcribe_timeout: float = 300.0
    translate_timeout: float = 120.0
    max_audio_bytes: int = MAX_AUDIO_BYTES
    staging_dir: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "Settings":
        """Create :class:`Settings` from any mapping, ignoring unknown keys."""
        defaults = cls()
        staging_dir = _coerce_optional_str(payload.get("staging_dir"))
        return cls(
            api_key=_coerce_optional_str(payload.get("api_key")),
            base_url=_coerce_optional_str(payload.get("base_url")),
            transcribe_model=str(payload.get("transcribe_model") or defaults.transcribe_model),
            translate_model=str(payload.get("translate_model") or defaults.translate_model),
            fetch_timeout=_coerce_float(payload.get("fetch_timeout"), defaults.fetch_timeout),
            transcribe_timeout=_coerce_float(payload.get("transcribe_timeout"), defaults.transcribe_timeout),
            translate_timeout=_coerce_float(payload.get("translate_timeout"), defaults.translate_timeout),
            max_audio_bytes=int(_coerce_float(payload.get("max_audio_bytes"), defaults.max_audio_bytes)),
            staging_dir=Path(staging_dir) if staging_dir else None,
            log_level=str(payload.get("log_level") or defaults.log_level).upper(),
        )

    def to_mapping(self) -> dict[str, Any]:
        """Serialize to a JSON friendly mapping without the API key."""
        payload = asdict(self)
        payload.pop("api_key")
        payload["staging_dir"] = str(self.staging_dir) if self.staging_dir else None
        return payload


def load_settings(path: Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Load settings from ``settings.json`` and apply environment overrides."""

    if environ is None:
        load_dotenv()
        environ = os.environ

    settings_path = path or SETTINGS_PATH
    payload: dict[str, Any] = {}
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        LOGGER.debug("No settings.json found at %s; using defaults", settings_path)
    except OSError as exc:  # pragma: no cover - filesystem failure
        LOGGER.warning("Failed reading settings at %s: %s", settings_path, exc)
    else:
        try:
            loaded = json.loads(raw)
        except json.JSONDecodeError as exc:
            LOGGER.warning("Invalid JSON in %s: %s", settings_path, exc)
        else:
            if isinstance(loaded, dict):
                payload.update(loaded)
            else:
                LOGGER.warning("Ignoring %s: expected a JSON object", settings_path)

    # Credentials are never read from disk.
    payload.pop("api_key", None)
    for name, variables in ENV_OVERRIDES.items():
        for variable in variables:
            value = environ.get(variable)
            if value:
                payload[name] = value
                break

    return Settings.from_mapping(payload)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""

    settings = load_settings()
    LOGGER.debug("Loaded settings: %s", settings.to_mapping())
    return settings


def _coerce_optional_str(value: Any) -> str | None:
    if value in (None, ""):
        return None
    return str(value)


def _coerce_float(value: Any, default: float) -> float:
    if value in (None, ""):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        LOGGER.warning("Ignoring invalid numeric setting %r", value)
        return default


__all__ = [
    "CONFIG_DIR",
    "MAX_AUDIO_BYTES",
    "SETTINGS_PATH",
    "Settings",
    "get_settings",
    "load_settings",
]
