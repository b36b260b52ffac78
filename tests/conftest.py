"""Pytest configuration and fixtures."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


DEFAULT_RESPONSE = {
    "result": {
        "alternatives": [{"message": {"role": "assistant", "text": "Привет!"}, "status": "ALTERNATIVE_STATUS_FINAL"}],
        "modelVersion": "23.10.2024",
    },
    "usage": {"inputTextTokens": "12", "completionTokens": "3", "totalTokens": "15"},
}


class FakeProvider:
    """Stand-in for the completion endpoint, driven through httpx.MockTransport.

    Queued entries are consumed one per request: a dict becomes a 200 JSON
    response, an httpx.Response is returned as-is and an exception is raised.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._queue: list = []

    def queue(self, *responses):
        self._queue.extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        resp = self._queue.pop(0) if self._queue else DEFAULT_RESPONSE
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, httpx.Response):
            return resp
        return httpx.Response(200, json=resp)

    def bodies(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("YANDEX_GPT_API_KEY", "YANDEX_GPT_ENDPOINT", "CONTINUE_ON_FAIL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def resolver():
    async def _resolve(provider, credential_id):
        return {"apiKey": "test-key"}

    return _resolve
