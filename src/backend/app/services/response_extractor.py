from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.errors import NoChoicesError


def first_message(payload: Any) -> Dict[str, Any]:
    """Return ``choices[0].message`` or raise if the reply carries no choices."""
    choices = payload.get("choices") if isinstance(payload, dict) else None
    if not isinstance(choices, list) or not choices:
        raise NoChoicesError("no choices in response")
    choice = choices[0] if isinstance(choices[0], dict) else {}
    message = choice.get("message")
    return message if isinstance(message, dict) else {}


def extract_content(payload: Any) -> Optional[str]:
    """Assistant text from the first choice, or None when it is empty."""
    content = first_message(payload).get("content")
    if isinstance(content, str) and content:
        return content
    return None
