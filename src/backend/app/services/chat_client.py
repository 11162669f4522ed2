from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import Settings
from ..core.errors import (
    ConfigurationError,
    MalformedResponseError,
    TransportError,
    UpstreamError,
    UpstreamTimeoutError,
)
from ..schemas.ai import ChatMessage

logger = logging.getLogger(__name__)


class ChatClient:
    """Single-shot client for an OpenAI-compatible ``/chat/completions`` API.

    One call per request, no retries. Failures are raised as the typed errors
    from ``core.errors`` so the route can decide the status code.
    """

    def __init__(self, settings: Settings, http: httpx.AsyncClient):
        self._settings = settings
        self._http = http

    @property
    def model(self) -> str:
        return self._settings.model_name

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.api_key}",
            "HTTP-Referer": self._settings.http_referer,
            "X-Title": self._settings.app_title,
        }

    async def complete(
        self,
        messages: List[ChatMessage],
        *,
        max_tokens: int,
        temperature: float,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Send one chat completion request and return the decoded JSON body.

        Args:
            messages: system + user messages, in order
            max_tokens: completion token cap
            temperature: sampling temperature
            timeout: wall-clock limit in seconds; the request is cancelled
                once it elapses. ``None`` leaves only the HTTP client timeout.

        Raises:
            ConfigurationError: no API key is configured
            UpstreamTimeoutError: the call did not settle in time
            UpstreamError: the API answered with a non-2xx status
            TransportError: the API could not be reached
            MalformedResponseError: a 2xx reply that is not JSON
        """
        if not self._settings.api_key_configured:
            raise ConfigurationError("credential not configured")

        body = {
            "model": self._settings.model_name,
            "messages": [m.model_dump() for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        url = self._settings.chat_completions_url

        try:
            if timeout is None:
                response = await self._http.post(url, json=body, headers=self._headers())
            else:
                response = await asyncio.wait_for(
                    self._http.post(url, json=body, headers=self._headers()),
                    timeout=timeout,
                )
        except asyncio.TimeoutError as exc:
            logger.error("Model API call exceeded %ss", timeout)
            raise UpstreamTimeoutError(f"Request timed out after {timeout:g} seconds") from exc
        except httpx.TimeoutException as exc:
            logger.error("Model API call timed out: %s", exc)
            raise UpstreamTimeoutError(f"Request timed out: {exc}" if str(exc) else "Request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Model API transport error: %s", exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            logger.error("Model API error: %s %s", response.status_code, response.text)
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as exc:
            logger.error("Model API returned non-JSON body: %.200s", response.text)
            raise MalformedResponseError("response body is not valid JSON") from exc
