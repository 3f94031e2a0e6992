import logging
from dataclasses import dataclass

import httpx

from shared.errors import UpstreamRejected, UpstreamUnavailable

logger = logging.getLogger(__name__)


@dataclass
class BufferedCompletion:
    text: str


class StreamedCompletion:
    """An open upstream event stream, relayed byte for byte."""

    def __init__(self, response: httpx.Response, client: httpx.AsyncClient):
        self.response = response
        self._client = client

    async def chunks(self):
        try:
            async for chunk in self.response.aiter_raw():
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self):
        await self.response.aclose()
        await self._client.aclose()


class UpstreamClient:
    """Forwards chat-completion calls with the gateway's own credential."""

    def __init__(self, settings, transport=None):
        self.settings = settings
        self.transport = transport

    def _headers(self):
        if not self.settings.upstream_api_key:
            raise UpstreamUnavailable("UPSTREAM_API_KEY is not configured")
        return {
            "Authorization": f"Bearer {self.settings.upstream_api_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.settings.upstream_timeout, transport=self.transport)

    async def _send(self, client, payload) -> httpx.Response:
        headers = self._headers()
        attempts = 1 + max(0, self.settings.upstream_retries)
        for attempt in range(1, attempts + 1):
            request = client.build_request("POST", self.settings.upstream_url, json=payload, headers=headers)
            try:
                response = await client.send(request, stream=True)
            except httpx.TransportError as e:
                if attempt < attempts:
                    logger.warning("Upstream unreachable (%s), retrying", e)
                    continue
                raise UpstreamUnavailable(f"upstream unreachable: {e}") from e

            if response.status_code >= 500 and attempt < attempts:
                await response.aclose()
                logger.warning("Upstream returned %s, retrying", response.status_code)
                continue
            return response

    async def _check(self, response):
        if response.is_success:
            return
        await response.aread()
        await response.aclose()
        logger.error("AI gateway error: %s %s", response.status_code, response.text)
        raise UpstreamRejected(response.status_code, response.text)

    async def complete(self, model, messages, **options) -> BufferedCompletion:
        payload = {"model": model, "messages": messages, **options}
        async with self._client() as client:
            response = await self._send(client, payload)
            await self._check(response)
            try:
                await response.aread()
            finally:
                await response.aclose()
        data = response.json()
        return BufferedCompletion(data["choices"][0]["message"]["content"])

    async def stream(self, model, messages) -> StreamedCompletion:
        payload = {"model": model, "messages": messages, "stream": True}
        client = self._client()
        try:
            response = await self._send(client, payload)
            await self._check(response)
        except BaseException:
            await client.aclose()
            raise
        return StreamedCompletion(response, client)
