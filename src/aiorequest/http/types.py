from __future__ import annotations

import abc
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from http import HTTPStatus
from types import TracebackType
from typing import Literal

from ..body import Body, form_body, json_body, multipart_body
from ..codec import Codec
from ..config import RequestConfiguration
from ..types import Headers, Params, Seconds
from ..url import build_url


@dataclass(frozen=True)
class Request:
    method: Literal["GET"] | Literal["POST"]
    url: str
    headers: dict[str, str]
    body: bytes | None


class Response(metaclass=abc.ABCMeta):
    status: int
    reason: str

    @abc.abstractmethod
    async def read(self) -> bytes:
        """
        Returns the complete response body. May fail independently of the
        status code, for example when the connection drops mid-body.
        """
        raise NotImplementedError()


def reason_phrase(status: int, reason: str | None = None) -> str:
    if reason:
        return reason
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def merge_headers(*sources: Headers | None) -> dict[str, str]:
    """
    Applies each source in order with replace-or-add semantics: a later
    source replaces an earlier header of the same (case-insensitive) name.
    """
    merged: dict[str, tuple[str, str]] = {}
    for source in sources:
        for name, value in (source or {}).items():
            merged[name.lower()] = (name, value)
    return dict(merged.values())


def make_request(
    method: Literal["GET"] | Literal["POST"],
    url: str,
    body: Body | None,
    headers: Headers | None,
    config: RequestConfiguration,
) -> Request:
    return Request(
        method=method,
        url=url,
        headers=merge_headers(
            config.headers, body.headers if body else None, headers
        ),
        body=body.content if body else None,
    )


class HttpClient(metaclass=abc.ABCMeta):
    """
    An HTTP engine. Implementations only provide ``send``; building URLs,
    bodies and headers is shared. Instances must not keep per-call state so
    one instance can serve concurrent calls.
    """

    @abc.abstractmethod
    def send(
        self, request: Request, timeout: Seconds
    ) -> AbstractAsyncContextManager[Response]:
        """
        Performs ``request``. Failures before a response is available must be
        raised as TransportError. The response is only valid inside the
        context.
        """
        raise NotImplementedError()

    async def close(self) -> None:
        pass

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    def get(
        self,
        url: str,
        params: Params | None = None,
        *,
        headers: Headers | None = None,
        config: RequestConfiguration | None = None,
    ) -> AbstractAsyncContextManager[Response]:
        config = config or RequestConfiguration.default()
        request = make_request("GET", build_url(url, params), None, headers, config)
        return self.send(request, config.resolved_timeout)

    def post(
        self,
        url: str,
        params: Params | None = None,
        *,
        headers: Headers | None = None,
        config: RequestConfiguration | None = None,
    ) -> AbstractAsyncContextManager[Response]:
        config = config or RequestConfiguration.default()
        request = make_request(
            "POST", build_url(url), form_body(params), headers, config
        )
        return self.send(request, config.resolved_timeout)

    def post_json(
        self,
        url: str,
        value: object,
        *,
        codec: Codec | None = None,
        headers: Headers | None = None,
        config: RequestConfiguration | None = None,
    ) -> AbstractAsyncContextManager[Response]:
        config = config or RequestConfiguration.default()
        request = make_request(
            "POST", build_url(url), json_body(value, codec), headers, config
        )
        return self.send(request, config.resolved_timeout)

    def upload(
        self,
        url: str,
        data: bytes,
        *,
        filename: str,
        key: str = "file",
        params: Params | None = None,
        headers: Headers | None = None,
        config: RequestConfiguration | None = None,
    ) -> AbstractAsyncContextManager[Response]:
        config = config or RequestConfiguration.default()
        body = multipart_body(data, filename=filename, key=key, params=params)
        request = make_request("POST", build_url(url), body, headers, config)
        return self.send(request, config.resolved_timeout)
