from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass
from typing import TypeVar

from .codec import Codec
from .config import RequestConfiguration
from .decoders import DecodeStrategy, resolve
from .errors import (
    BodyRetrievalError,
    DecodingError,
    HttpError,
    RequestError,
    TransportError,
    UnknownError,
)
from .http.httpx import HTTPX
from .http.types import HttpClient, Response
from .types import Headers, Params, Sanitizer

logger = logging.getLogger(__name__)

T = TypeVar("T")

Call = Callable[[HttpClient], AbstractAsyncContextManager[Response]]


@dataclass(frozen=True)
class RawResponse:
    status: int
    reason: str
    body: bytes


@asynccontextmanager
async def engine_scope(client: HttpClient | None) -> AsyncIterator[HttpClient]:
    """
    Yields ``client`` untouched, or a fresh engine that is closed when the
    scope exits, however it exits.
    """
    if client is not None:
        yield client
        return
    async with HTTPX() as owned:
        yield owned


async def fetch(call: Call, client: HttpClient | None = None) -> RawResponse:
    async with engine_scope(client) as engine:
        try:
            async with call(engine) as response:
                try:
                    body = await response.read()
                except Exception as exc:
                    raise BodyRetrievalError(exc) from exc
                raw = RawResponse(response.status, response.reason, body)
        except RequestError:
            raise
        except Exception as exc:
            raise TransportError(exc) from exc
    logger.debug("response %d %s, %d bytes", raw.status, raw.reason, len(raw.body))
    return raw


def handle(
    decoder: DecodeStrategy[T], raw: RawResponse, sanitizer: Sanitizer | None = None
) -> T:
    body = raw.body
    if sanitizer is not None:
        try:
            body = sanitizer(body)
        except Exception as exc:
            raise UnknownError(exc) from exc
    if raw.status >= 400:
        logger.debug("request failed with status %d", raw.status)
        raise HttpError(raw.status, raw.reason, body)
    try:
        return resolve(decoder)(body)
    except RequestError:
        raise
    except Exception as exc:
        logger.debug("could not decode response body", exc_info=True)
        raise DecodingError(exc) from exc


async def perform(
    decoder: DecodeStrategy[T],
    call: Call,
    *,
    sanitizer: Sanitizer | None = None,
    client: HttpClient | None = None,
) -> T:
    return handle(decoder, await fetch(call, client), sanitizer)


async def get(
    decoder: DecodeStrategy[T],
    url: str,
    params: Params | None = None,
    *,
    headers: Headers | None = None,
    sanitizer: Sanitizer | None = None,
    config: RequestConfiguration | None = None,
    client: HttpClient | None = None,
) -> T:
    logger.debug("GET %s", url)
    return await perform(
        decoder,
        lambda engine: engine.get(url, params, headers=headers, config=config),
        sanitizer=sanitizer,
        client=client,
    )


async def post(
    decoder: DecodeStrategy[T],
    url: str,
    params: Params | None = None,
    *,
    headers: Headers | None = None,
    sanitizer: Sanitizer | None = None,
    config: RequestConfiguration | None = None,
    client: HttpClient | None = None,
) -> T:
    logger.debug("POST %s (form)", url)
    return await perform(
        decoder,
        lambda engine: engine.post(url, params, headers=headers, config=config),
        sanitizer=sanitizer,
        client=client,
    )


async def post_json(
    decoder: DecodeStrategy[T],
    url: str,
    value: object,
    *,
    codec: Codec | None = None,
    headers: Headers | None = None,
    sanitizer: Sanitizer | None = None,
    config: RequestConfiguration | None = None,
    client: HttpClient | None = None,
) -> T:
    logger.debug("POST %s (json)", url)
    return await perform(
        decoder,
        lambda engine: engine.post_json(
            url, value, codec=codec, headers=headers, config=config
        ),
        sanitizer=sanitizer,
        client=client,
    )


async def upload(
    decoder: DecodeStrategy[T],
    url: str,
    data: bytes,
    *,
    filename: str,
    key: str = "file",
    params: Params | None = None,
    headers: Headers | None = None,
    sanitizer: Sanitizer | None = None,
    config: RequestConfiguration | None = None,
    client: HttpClient | None = None,
) -> T:
    logger.debug("POST %s (upload %s, %d bytes)", url, filename, len(data))
    return await perform(
        decoder,
        lambda engine: engine.upload(
            url,
            data,
            filename=filename,
            key=key,
            params=params,
            headers=headers,
            config=config,
        ),
        sanitizer=sanitizer,
        client=client,
    )
