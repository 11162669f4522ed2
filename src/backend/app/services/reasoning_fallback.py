"""Degraded-mode recovery of translations from a model's ``reasoning`` field.

Some reasoning models spend the whole token budget thinking and return an
empty ``content``. Their reasoning tends to quote candidate lines as
``English: "..."``; collecting those gives a usable bullet list. The format is
undocumented, so this lives apart from the main extraction path and can be
switched off with ``REASONING_FALLBACK_ENABLED=false``.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

ENGLISH_QUOTE_PATTERN = re.compile(r'English: "([^"]+)"')
BULLET = "• "


def find_english_quotes(reasoning: str) -> List[str]:
    return ENGLISH_QUOTE_PATTERN.findall(reasoning or "")


def recover_from_reasoning(message: Dict[str, Any]) -> Optional[str]:
    reasoning = message.get("reasoning")
    if not isinstance(reasoning, str) or not reasoning:
        return None
    quotes = find_english_quotes(reasoning)
    if not quotes:
        logger.warning("Reasoning present but no quoted translations found")
        return None
    recovered = "\n".join(BULLET + quote for quote in quotes)
    logger.info("Recovered %d lines from reasoning (%d chars)", len(quotes), len(recovered))
    return recovered
