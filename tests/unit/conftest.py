from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest

from aiorequest.http.types import HttpClient, Request, Response
from aiorequest.types import Seconds


class FakeResponse(Response):
    def __init__(self, status: int, reason: str, body: bytes | Exception) -> None:
        self.status = status
        self.reason = reason
        self.body = body

    async def read(self) -> bytes:
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


class FakeClient(HttpClient):
    def __init__(
        self,
        status: int = 200,
        body: bytes | Exception = b"",
        reason: str = "OK",
        error: Exception | None = None,
    ) -> None:
        self.status = status
        self.body = body
        self.reason = reason
        self.error = error
        self.sent: list[tuple[Request, Seconds]] = []
        self.closed = False

    @asynccontextmanager
    async def send(self, request: Request, timeout: Seconds) -> AsyncIterator[Response]:
        self.sent.append((request, timeout))
        if self.error is not None:
            raise self.error
        yield FakeResponse(self.status, self.reason, self.body)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client() -> type[FakeClient]:
    return FakeClient
