from __future__ import annotations

from typing import Optional

import httpx
from fastapi import FastAPI, Request

from .config import Settings
from ..services.chat_client import ChatClient

SETTINGS_STATE_KEY = "settings"
HTTP_STATE_KEY = "http_client"
CHAT_STATE_KEY = "chat_client"


def init_settings(app: FastAPI, settings: Settings) -> None:
    app.state.__setattr__(SETTINGS_STATE_KEY, settings)


async def init_chat_client(
    app: FastAPI,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ChatClient:
    # One pooled client per lifespan; tests pass a MockTransport
    http = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        transport=transport,
    )
    client = ChatClient(settings, http)
    app.state.__setattr__(HTTP_STATE_KEY, http)
    app.state.__setattr__(CHAT_STATE_KEY, client)
    return client


async def close_chat_client(app: FastAPI) -> None:
    if getattr(app.state, CHAT_STATE_KEY, None) is not None:
        delattr(app.state, CHAT_STATE_KEY)
    http: Optional[httpx.AsyncClient] = getattr(app.state, HTTP_STATE_KEY, None)
    if http is not None:
        try:
            await http.aclose()
        finally:
            delattr(app.state, HTTP_STATE_KEY)


def get_app_settings(request: Request) -> Settings:
    settings: Optional[Settings] = getattr(request.app.state, SETTINGS_STATE_KEY, None)
    if settings is None:
        raise RuntimeError("Settings not initialized")
    return settings


def get_chat_client(request: Request) -> ChatClient:
    client: Optional[ChatClient] = getattr(request.app.state, CHAT_STATE_KEY, None)
    if client is None:
        raise RuntimeError("Chat client not initialized")
    return client
