from __future__ import annotations

import re

ENGLISH = "English"
HINDI = "Hindi"

LANGUAGE_LABELS: dict[str, str] = {
    "en": ENGLISH,
    "hi": HINDI,
}

_DEVANAGARI = re.compile(r"[\u0900-\u097F]")


def normalize_code(code: str | None) -> str:
    if not code:
        return ""
    return code.strip().lower().split("-")[0]


def language_label(code: str | None) -> str:
    normalized = normalize_code(code)
    if not normalized:
        return ENGLISH
    return LANGUAGE_LABELS.get(normalized, code or normalized)


def contains_devanagari(text: str) -> bool:
    return _DEVANAGARI.search(text or "") is not None


def detect_target_language(text: str) -> str:
    """Pick the opposite language of the text: Hindi input goes to English, anything else to Hindi."""
    return ENGLISH if contains_devanagari(text) else HINDI
