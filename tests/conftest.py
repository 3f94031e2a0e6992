from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

import gateway_app

UPSTREAM_URL = "https://upstream.test/v1/chat/completions"


def completion(text: str) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


class FakeUpstream:
    """Records forwarded requests and answers with queued responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Callable[[], httpx.Response] | Exception] = []
        self.default: httpx.Response | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0) if self.responses else self.default
        if item is None:
            item = httpx.Response(200, json=completion("generated text"))
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item()
        return item

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def gateway_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UPSTREAM_API_KEY", "service-key")
    monkeypatch.setenv("UPSTREAM_URL", UPSTREAM_URL)
    monkeypatch.setenv("UPSTREAM_RETRIES", "1")
    monkeypatch.delenv("ENFORCE_MODEL_CATALOG", raising=False)
    monkeypatch.delenv("REWRITE_MODEL", raising=False)


@pytest.fixture
def upstream(gateway_env: None):
    fake = FakeUpstream()
    gateway_app.app.state.transport = httpx.MockTransport(fake.handler)
    yield fake
    gateway_app.app.state.transport = None
