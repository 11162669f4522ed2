from typing import List, Literal, Optional

from pydantic import BaseModel


class ChatMessage(BaseModel):
    role: Literal["system", "user"]
    content: str


class SummarizeRequest(BaseModel):
    paragraphs: Optional[List[str]] = None


class SummarizeResponse(BaseModel):
    success: bool = True
    summary: str
    paragraphCount: int
    model: str


class TranslateRequest(BaseModel):
    text: Optional[str] = None
    # Accepted for client compatibility; the direction is auto-detected
    target: Optional[str] = None


class TranslateResponse(BaseModel):
    success: bool = True
    translatedText: str
    warning: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    model: str
    apiKeyConfigured: bool
    baseURL: str
    message: str
