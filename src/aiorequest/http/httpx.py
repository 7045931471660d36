from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from ..errors import TransportError
from ..types import Seconds
from .types import HttpClient, Request, Response, reason_phrase


class HTTPXResponse(Response):
    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.status = response.status_code
        self.reason = reason_phrase(response.status_code, response.reason_phrase)

    async def read(self) -> bytes:
        return await self.response.aread()


class HTTPX(HttpClient):
    """
    Engine backed by ``httpx.AsyncClient``. A client passed in is shared and
    left open by ``close``; otherwise one is created on first use and owned.
    Closing drops an owned client, the next call creates a new one.
    """

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self.owns_client = client is None
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def close(self) -> None:
        if self.owns_client and self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    @asynccontextmanager
    async def send(self, request: Request, timeout: Seconds) -> AsyncIterator[Response]:
        try:
            async with self.client.stream(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
                timeout=timeout,
            ) as response:
                yield HTTPXResponse(response)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(exc) from exc
