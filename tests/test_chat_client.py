import asyncio

import httpx
import pytest

from src.backend.app.core.errors import (
    ConfigurationError,
    MalformedResponseError,
    TransportError,
    UpstreamError,
    UpstreamTimeoutError,
)
from src.backend.app.services.chat_client import ChatClient
from src.backend.app.services.prompts import build_translation_messages
from tests.conftest import FakeUpstream, completion, make_settings

MESSAGES = build_translation_messages("Hello", "Hindi")


async def _complete(upstream: FakeUpstream, timeout=None, **settings_overrides):
    async with httpx.AsyncClient(transport=upstream.transport()) as http:
        client = ChatClient(make_settings(**settings_overrides), http)
        return await client.complete(MESSAGES, max_tokens=10, temperature=0.5, timeout=timeout)


@pytest.mark.asyncio
async def test_complete_returns_json_body():
    upstream = FakeUpstream(payload=completion("नमस्ते"))
    data = await _complete(upstream)

    assert data["choices"][0]["message"]["content"] == "नमस्ते"
    assert upstream.bodies == [{
        "model": "test-model",
        "messages": [m.model_dump() for m in MESSAGES],
        "max_tokens": 10,
        "temperature": 0.5,
    }]


@pytest.mark.asyncio
async def test_complete_strips_trailing_slash_from_base_url():
    upstream = FakeUpstream()
    await _complete(upstream, base_url="https://example.test/v1/")
    assert str(upstream.requests[0].url) == "https://example.test/v1/chat/completions"


@pytest.mark.asyncio
async def test_complete_requires_api_key():
    upstream = FakeUpstream()
    with pytest.raises(ConfigurationError):
        await _complete(upstream, api_key="")
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_complete_raises_upstream_error_with_status_and_body():
    upstream = FakeUpstream(status_code=401, text="bad key")
    with pytest.raises(UpstreamError) as info:
        await _complete(upstream)
    assert info.value.upstream_status == 401
    assert info.value.body == "bad key"
    assert info.value.details == "401: bad key"


@pytest.mark.asyncio
async def test_complete_raises_transport_error():
    async def broken(request):
        raise httpx.ReadError("socket closed", request=request)

    with pytest.raises(TransportError) as info:
        await _complete(FakeUpstream(handler=broken))
    assert "socket closed" in info.value.details


@pytest.mark.asyncio
async def test_complete_maps_httpx_timeout():
    async def stalled(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(UpstreamTimeoutError):
        await _complete(FakeUpstream(handler=stalled))


@pytest.mark.asyncio
async def test_complete_enforces_wall_clock_timeout():
    async def slow(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=completion("late"))

    with pytest.raises(UpstreamTimeoutError) as info:
        await _complete(FakeUpstream(handler=slow), timeout=0.1)
    assert "0.1 seconds" in info.value.details


@pytest.mark.asyncio
async def test_complete_rejects_non_json_body():
    with pytest.raises(MalformedResponseError):
        await _complete(FakeUpstream(text="<html>gateway</html>"))
