from __future__ import annotations

from typing import List, Sequence

from ..schemas.ai import ChatMessage

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert summarizer who converts complex information into simple short, understandable points."
)
TRANSLATION_SYSTEM_PROMPT = "You are a helpful translator. Translate accurately while preserving formatting."

PARAGRAPH_SEPARATOR = "\n\n"


def build_summary_prompt(paragraphs: Sequence[str]) -> str:
    combined_text = PARAGRAPH_SEPARATOR.join(paragraphs)
    return (
        "Please summarize the following text comprehensively and present ALL important key points "
        "as bullet points. The summary should capture the main ideas and be clear and easy to understand:\n\n"
        f"{combined_text}\n\n"
        "Please format the answer as:\n"
        "• First key point\n"
        "• Second key point\n"
        "• Third key point\n"
        "• ... (include all important points, not limited to 3)"
    )


def build_summary_messages(paragraphs: Sequence[str]) -> List[ChatMessage]:
    return [
        ChatMessage(role="system", content=SUMMARY_SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_summary_prompt(paragraphs)),
    ]


def build_translation_prompt(text: str, target_language: str) -> str:
    return (
        f"Translate the following text into {target_language}. "
        "Preserve the original formatting (bullet points, lists, and newlines) as much as possible.\n\n"
        f"{text}"
    )


def build_translation_messages(text: str, target_language: str) -> List[ChatMessage]:
    return [
        ChatMessage(role="system", content=TRANSLATION_SYSTEM_PROMPT),
        ChatMessage(role="user", content=build_translation_prompt(text, target_language)),
    ]
