from __future__ import annotations

import httpx
import pytest

from shared.config import Settings
from shared.errors import UpstreamRejected, UpstreamUnavailable
from shared.upstream import BufferedCompletion, UpstreamClient
from tests.conftest import FakeUpstream, completion

MESSAGES = [{"role": "system", "content": "s"}, {"role": "user", "content": "u"}]


def make_client(fake: FakeUpstream, **overrides) -> UpstreamClient:
    settings = Settings(upstream_api_key="service-key", upstream_url="https://upstream.test/v1", **overrides)
    return UpstreamClient(settings, transport=httpx.MockTransport(fake.handler))


@pytest.mark.asyncio
async def test_stream_chunks_are_byte_identical() -> None:
    chunks = [b"data: one\n\n", b"data: two\n\n", b"data: [DONE]\n\n"]

    async def body():
        for chunk in chunks:
            yield chunk

    fake = FakeUpstream()
    fake.default = lambda: httpx.Response(200, content=body())

    streamed = await make_client(fake).stream("model-x", MESSAGES)
    received = [chunk async for chunk in streamed.chunks()]

    assert received == chunks
    assert streamed.response.is_closed


@pytest.mark.asyncio
async def test_stream_closes_upstream_when_consumer_stops_early() -> None:
    async def body():
        yield b"data: first\n\n"
        yield b"data: second\n\n"

    fake = FakeUpstream()
    fake.default = lambda: httpx.Response(200, content=body())

    streamed = await make_client(fake).stream("model-x", MESSAGES)
    iterator = streamed.chunks()
    assert await iterator.__anext__() == b"data: first\n\n"
    await iterator.aclose()

    assert streamed.response.is_closed


@pytest.mark.asyncio
async def test_stream_rejection_raises_before_relay() -> None:
    fake = FakeUpstream()
    fake.default = httpx.Response(402, text="no credits")

    with pytest.raises(UpstreamRejected) as excinfo:
        await make_client(fake).stream("model-x", MESSAGES)

    assert excinfo.value.status == 402
    assert excinfo.value.upstream_body == "no credits"


@pytest.mark.asyncio
async def test_complete_extracts_first_choice() -> None:
    fake = FakeUpstream()
    fake.default = httpx.Response(200, json={"choices": [
        {"message": {"content": "first"}},
        {"message": {"content": "second"}},
    ]})

    result = await make_client(fake).complete("model-x", MESSAGES, stream=False)

    assert result == BufferedCompletion("first")
    assert fake.payloads[0] == {"model": "model-x", "messages": MESSAGES, "stream": False}


@pytest.mark.asyncio
async def test_retries_can_be_disabled() -> None:
    fake = FakeUpstream()
    fake.responses = [httpx.Response(500), httpx.Response(200, json=completion("late"))]

    with pytest.raises(UpstreamRejected) as excinfo:
        await make_client(fake, upstream_retries=0).complete("model-x", MESSAGES)

    assert excinfo.value.status == 500
    assert len(fake.requests) == 1


@pytest.mark.asyncio
async def test_transport_failure_after_retry_is_unavailable() -> None:
    fake = FakeUpstream()
    fake.responses = [httpx.ReadTimeout("slow"), httpx.ReadTimeout("slow")]

    with pytest.raises(UpstreamUnavailable):
        await make_client(fake).complete("model-x", MESSAGES)

    assert len(fake.requests) == 2


@pytest.mark.asyncio
async def test_missing_service_key_is_unavailable() -> None:
    fake = FakeUpstream()
    client = UpstreamClient(Settings(upstream_api_key=None), transport=httpx.MockTransport(fake.handler))

    with pytest.raises(UpstreamUnavailable) as excinfo:
        await client.complete("model-x", MESSAGES)

    assert "not configured" in excinfo.value.detail
    assert fake.requests == []
