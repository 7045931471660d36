import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from ..errors import TransportError
from ..types import Seconds
from .types import HttpClient, Request, Response, reason_phrase


class AIOHTTPResponse(Response):
    def __init__(self, response: aiohttp.ClientResponse) -> None:
        self.response = response
        self.status = response.status
        self.reason = reason_phrase(response.status, response.reason)

    async def read(self) -> bytes:
        return await self.response.read()


class AIOHTTP(HttpClient):
    """
    Engine backed by ``aiohttp.ClientSession``. Without an injected session,
    one is created on first use (inside the running loop) and owned. Closing
    drops an owned session, the next call creates a new one.
    """

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        self.owns_session = session is None
        self._session = session

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        if self.owns_session and self._session is not None:
            session, self._session = self._session, None
            await session.close()

    @asynccontextmanager
    async def send(self, request: Request, timeout: Seconds) -> AsyncIterator[Response]:
        try:
            async with self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                yield AIOHTTPResponse(response)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(exc) from exc
