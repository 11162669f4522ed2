import json
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.backend.app.main import create_app
from src.backend.app.core.config import Settings


TEST_API_KEY = "sk-test-0123456789abcdef"
TEST_BASE_URL = "https://upstream.test/api/v1"


def make_settings(**overrides) -> Settings:
    values = {
        "api_key": TEST_API_KEY,
        "model_name": "test-model",
        "base_url": TEST_BASE_URL,
        "app_env": "test",
        "translate_timeout_seconds": 60.0,
    }
    values.update(overrides)
    return Settings(**values)


def completion(content=None, reasoning=None) -> dict:
    message = {"role": "assistant", "content": content}
    if reasoning is not None:
        message["reasoning"] = reasoning
    return {"id": "cmpl-1", "choices": [{"index": 0, "message": message}]}


class FakeUpstream:
    """Records outbound chat completion calls and answers with a canned reply."""

    def __init__(self, status_code=200, payload=None, text=None, handler=None):
        self.status_code = status_code
        self.payload = payload if payload is not None else completion("ok")
        self.text = text
        self.handler = handler
        self.requests: list[httpx.Request] = []

    @property
    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return await self.handler(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream():
    return FakeUpstream()


@asynccontextmanager
async def serve(app):
    # ASGITransport skips the lifespan, which owns the upstream client
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@asynccontextmanager
async def build_client(upstream: FakeUpstream, **settings_overrides):
    app = create_app(make_settings(**settings_overrides), transport=upstream.transport())
    async with serve(app) as client:
        yield client
