"""
Runs the same calls through every engine binding against a real local
server; results must not depend on the engine.
"""

import asyncio
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import pytest
from aiohttp import test_utils, web

import aiorequest
from aiorequest.config import RequestConfiguration
from aiorequest.decoders import BytesDecoder, EmptyDecoder, JsonDecoder
from aiorequest.errors import HttpError, TransportError
from aiorequest.http.aiohttp import AIOHTTP
from aiorequest.http.httpx import HTTPX
from aiorequest.http.types import HttpClient

pytestmark = [
    pytest.mark.asyncio,
    pytest.mark.parametrize("engine_kind", ["httpx", "aiohttp"]),
]


async def echo(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "method": request.method,
            "query": dict(request.query),
            "trace": request.headers.get("X-Trace"),
            "content_type": request.headers.get("Content-Type"),
        }
    )


async def form(request: web.Request) -> web.Response:
    data = await request.post()
    return web.json_response({key: str(value) for key, value in data.items()})


async def json_echo(request: web.Request) -> web.Response:
    return web.json_response({"received": await request.json()}, status=201)


async def upload(request: web.Request) -> web.Response:
    fields = {}
    files = {}
    for key, value in (await request.post()).items():
        if isinstance(value, web.FileField):
            files[key] = {
                "filename": value.filename,
                "content_type": value.content_type,
                "data": value.file.read().hex(),
            }
        else:
            fields[key] = value
    return web.json_response({"fields": fields, "files": files})


async def status(request: web.Request) -> web.Response:
    code = int(request.match_info["code"])
    return web.Response(status=code, body=b"XXXX" + f"status {code}".encode())


async def slow(request: web.Request) -> web.Response:
    await asyncio.sleep(1)
    return web.Response(body=b"late")


async def item(request: web.Request) -> web.Response:
    await asyncio.sleep(random.random() / 50)
    return web.json_response({"id": int(request.match_info["id"])})


def make_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/echo", echo)
    app.router.add_post("/form", form)
    app.router.add_post("/json", json_echo)
    app.router.add_post("/upload", upload)
    app.router.add_get("/status/{code}", status)
    app.router.add_get("/slow", slow)
    app.router.add_get("/items/{id}", item)
    return app


@asynccontextmanager
async def running(
    engine_kind: str,
) -> AsyncIterator[tuple[test_utils.TestServer, HttpClient]]:
    async with test_utils.TestServer(make_app()) as server:
        if engine_kind == "httpx":
            async with httpx.AsyncClient(trust_env=False) as client:
                yield server, HTTPX(client)
        else:
            async with AIOHTTP() as engine:
                yield server, engine


async def test_get(engine_kind: str) -> None:
    async with running(engine_kind) as (server, engine):
        result = await aiorequest.get(
            JsonDecoder(),
            str(server.make_url("/echo")),
            {"q": "a b&c", "n": "1"},
            headers={"X-Trace": "t-1"},
            client=engine,
        )
    assert result == {
        "method": "GET",
        "query": {"q": "a b&c", "n": "1"},
        "trace": "t-1",
        "content_type": None,
    }


async def test_post_form(engine_kind: str) -> None:
    async with running(engine_kind) as (server, engine):
        result = await aiorequest.post(
            JsonDecoder(),
            str(server.make_url("/form")),
            {"name": "Zoë", "expr": "1+1=2"},
            client=engine,
        )
    assert result == {"name": "Zoë", "expr": "1+1=2"}


async def test_post_json(engine_kind: str) -> None:
    async with running(engine_kind) as (server, engine):
        result = await aiorequest.post_json(
            JsonDecoder(),
            str(server.make_url("/json")),
            {"items": [1, 2], "label": "ü"},
            client=engine,
        )
    assert result == {"received": {"items": [1, 2], "label": "ü"}}


async def test_upload(engine_kind: str) -> None:
    async with running(engine_kind) as (server, engine):
        result = await aiorequest.upload(
            JsonDecoder(),
            str(server.make_url("/upload")),
            bytes([0x01, 0x02]),
            filename="x.bin",
            params={"a": "1"},
            client=engine,
        )
    assert result == {
        "fields": {"a": "1"},
        "files": {
            "file": {
                "filename": "x.bin",
                "content_type": "application/octet-stream",
                "data": "0102",
            }
        },
    }


@pytest.mark.parametrize("code", [404, 503])
async def test_http_error_with_sanitizer(engine_kind: str, code: int) -> None:
    async with running(engine_kind) as (server, engine):
        with pytest.raises(HttpError) as exc_info:
            await aiorequest.get(
                EmptyDecoder(),
                str(server.make_url(f"/status/{code}")),
                sanitizer=lambda data: data[4:],
                client=engine,
            )
    assert exc_info.value.status == code
    assert exc_info.value.reason in {"Not Found", "Service Unavailable"}
    assert exc_info.value.body == f"status {code}".encode()


async def test_success_status_is_decoded(engine_kind: str) -> None:
    async with running(engine_kind) as (server, engine):
        result = await aiorequest.get(
            BytesDecoder(), str(server.make_url("/status/202")), client=engine
        )
    assert result == b"XXXXstatus 202"


async def test_timeout(engine_kind: str) -> None:
    async with running(engine_kind) as (server, engine):
        with pytest.raises(TransportError):
            await aiorequest.get(
                BytesDecoder(),
                str(server.make_url("/slow")),
                config=RequestConfiguration(timeout=0.2),
                client=engine,
            )


async def test_connection_refused(engine_kind: str) -> None:
    async with running(engine_kind) as (_, engine):
        with pytest.raises(TransportError):
            await aiorequest.get(BytesDecoder(), "http://127.0.0.1:1/", client=engine)


async def test_fifty_concurrent_calls(engine_kind: str) -> None:
    async with running(engine_kind) as (server, engine):
        results = await asyncio.gather(
            *(
                aiorequest.get(
                    JsonDecoder(), str(server.make_url(f"/items/{i}")), client=engine
                )
                for i in range(50)
            )
        )
    assert results == [{"id": i} for i in range(50)]
