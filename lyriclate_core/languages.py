"""Languages offered by the picker and helpers to normalise codes."""

from __future__ import annotations

from typing import Any, Sequence

AUTO_DETECT_CODES = frozenset({"", "auto", "default"})

LANGUAGES: Sequence[dict[str, str]] = [
    {"code": "en", "name": "English", "native": "English"},
    {"code": "es", "name": "Spanish", "native": "Español"},
    {"code": "fr", "name": "French", "native": "Français"},
    {"code": "de", "name": "German", "native": "Deutsch"},
    {"code": "zh", "name": "Chinese", "native": "中文"},
    {"code": "ja", "name": "Japanese", "native": "日本語"},
    {"code": "pt", "name": "Portuguese", "native": "Português"},
    {"code": "it", "name": "Italian", "native": "Italiano"},
    {"code": "ru", "name": "Russian", "native": "Русский"},
    {"code": "ko", "name": "Korean", "native": "한국어"},
    {"code": "ar", "name": "Arabic", "native": "العربية"},
    {"code": "hi", "name": "Hindi", "native": "हिन्दी"},
    {"code": "nl", "name": "Dutch", "native": "Nederlands"},
    {"code": "tr", "name": "Turkish", "native": "Türkçe"},
    {"code": "pl", "name": "Polish", "native": "Polski"},
    {"code": "sv", "name": "Swedish", "native": "Svenska"},
]

LANGUAGE_NAME = {item["code"]: item["name"] for item in LANGUAGES}


def normalize_language(value: Any) -> str | None:
    """Return a language code, or ``None`` when the caller wants auto-detect."""

    if value is None:
        return None
    code = str(value).strip()
    if code.lower() in AUTO_DETECT_CODES:
        return None
    return code


def language_label(value: str) -> str:
    """English name for a known code, otherwise *value* unchanged."""

    return LANGUAGE_NAME.get(value.strip().lower(), value.strip())


__all__ = ["LANGUAGES", "LANGUAGE_NAME", "language_label", "normalize_language"]
