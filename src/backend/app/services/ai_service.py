from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..core.config import Settings
from ..core.errors import MalformedResponseError, ValidationError
from .chat_client import ChatClient
from .language_utils import detect_target_language, language_label
from .prompts import build_summary_messages, build_translation_messages
from .reasoning_fallback import recover_from_reasoning
from .response_extractor import extract_content, first_message

logger = logging.getLogger(__name__)

SUMMARY_MAX_TOKENS = 2500
SUMMARY_TEMPERATURE = 0.7
TRANSLATION_MAX_TOKENS = 4000
TRANSLATION_TEMPERATURE = 0.3

DEGRADED_TRANSLATION_WARNING = "Translation service had issues. Showing original text."


@dataclass(frozen=True)
class TranslationOutcome:
    text: str
    warning: Optional[str] = None


async def summarize_paragraphs(client: ChatClient, paragraphs: Optional[Sequence[str]]) -> str:
    if not paragraphs:
        raise ValidationError(message="Please provide paragraphs", details="paragraphs must be a non-empty list")

    logger.info("Received %d paragraphs for summarization", len(paragraphs))
    payload = await client.complete(
        build_summary_messages(paragraphs),
        max_tokens=SUMMARY_MAX_TOKENS,
        temperature=SUMMARY_TEMPERATURE,
    )
    summary = extract_content(payload)
    if summary is None:
        logger.error("Model returned empty content for summary: %s", first_message(payload))
        raise MalformedResponseError("model returned empty content")

    logger.info("Summary generated successfully (%d chars)", len(summary))
    return summary


async def translate_text(
    client: ChatClient,
    settings: Settings,
    text: Optional[str],
    target: Optional[str] = None,
) -> TranslationOutcome:
    if not text:
        raise ValidationError(message="Please provide text to translate", details="text must be a non-empty string")

    target_language = detect_target_language(text)
    logger.info("Translating %d chars to %s", len(text), target_language)
    if target and language_label(target) != target_language:
        # Direction always follows the detected script
        logger.info("Ignoring requested target %r in favour of %s", target, target_language)

    payload = await client.complete(
        build_translation_messages(text, target_language),
        max_tokens=TRANSLATION_MAX_TOKENS,
        temperature=TRANSLATION_TEMPERATURE,
        timeout=settings.translate_timeout_seconds,
    )

    translated = extract_content(payload)
    if translated is None and settings.reasoning_fallback_enabled:
        logger.warning("Content empty; trying to recover translation from reasoning")
        translated = recover_from_reasoning(first_message(payload))

    if translated is None:
        logger.warning("Model returned no usable translation; falling back to original text")
        return TranslationOutcome(text=text, warning=DEGRADED_TRANSLATION_WARNING)

    logger.info("Translation successful (%d chars)", len(translated))
    return TranslationOutcome(text=translated)
