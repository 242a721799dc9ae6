import json

import httpx
import pytest
from fastapi.testclient import TestClient

from chargen.core import limiter
from chargen.dependencies import get_character_service
from chargen.main import app
from chargen.providers import OpenRouterChatProvider


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def client():
    limiter.reset()
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def override_service():
    def _override(service):
        app.dependency_overrides[get_character_service] = lambda: service
        return service

    return _override


def chat_completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeOpenRouter:
    """httpx transport answering /chat/completions with canned responses; records requests."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)

    @property
    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def provider_factory(self, *, model: str, api_key: str):
        return OpenRouterChatProvider(
            base_url="https://openrouter.test/api/v1",
            api_key=api_key,
            model=model,
            referer="http://localhost:4000",
            title="Eliza Character Generator",
            retries=0,
            transport=self.transport,
        )
