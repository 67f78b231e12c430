"""Tests for the aiohttp host surface."""
from __future__ import annotations

import aiohttp
import pytest
from aiohttp import test_utils

from telegram_service.adapters.http.client import AiohttpClient
from telegram_service.adapters.web.server import WebServer
from telegram_service.core.registry import ServiceRegistry
from telegram_service.core.service import SERVICE_NAME, register
from telegram_service.errors import HttpRequestError

from conftest import TOKEN, BodyError, FakeHttpClient


def _server(http_client: FakeHttpClient) -> WebServer:
    registry = ServiceRegistry()
    register(registry, http_client)
    service = registry.create(SERVICE_NAME, {"botToken": TOKEN})
    return WebServer(service, registry, SERVICE_NAME)


class TestWebServer:
    @pytest.mark.asyncio
    async def test_describe(self, http_client: FakeHttpClient):
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.get("/")
            assert resp.status == 200
            doc = await resp.json()
        assert doc["operations"][0]["name"] == "Send Message"

    @pytest.mark.asyncio
    async def test_send_message(self, http_client: FakeHttpClient):
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.post("/send-message", json={"chatId": "123", "text": "Hello"})
            assert resp.status == 200
            assert await resp.json() == {"ok": True, "result": {"message_id": 1}}
        assert http_client.calls[0]["body"] == {"chat_id": "123", "text": "Hello"}

    @pytest.mark.asyncio
    async def test_telegram_error(self):
        body = {"ok": False, "error_code": 400, "description": "Bad Request: chat not found"}
        http_client = FakeHttpClient(error=BodyError(body))
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.post("/send-message", json={"chatId": "1", "text": "x"})
            assert resp.status == 400
            data = await resp.json()
        assert data == {
            "message": "Telegram Error: [400] Bad Request: chat not found",
            "httpStatusCode": None,
            "data": body,
        }

    @pytest.mark.asyncio
    async def test_missing_required_param(self, http_client: FakeHttpClient):
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.post("/send-message", json={"text": "x"})
            assert resp.status == 400
            assert "chatId" in (await resp.json())["error"]
        assert http_client.calls == []

    @pytest.mark.asyncio
    async def test_non_json_body(self, http_client: FakeHttpClient):
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.post("/send-message", data="not json")
            assert resp.status == 400

    @pytest.mark.asyncio
    async def test_non_object_body(self, http_client: FakeHttpClient):
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.post("/send-message", json=["chatId"])
            assert resp.status == 400

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        http_client = FakeHttpClient(error=aiohttp.ClientConnectionError("down"))
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.post("/send-message", json={"chatId": "1", "text": "x"})
            assert resp.status == 502

    @pytest.mark.asyncio
    async def test_non_json_upstream_error(self):
        http_client = FakeHttpClient(error=HttpRequestError(502, "Bad Gateway"))
        async with test_utils.TestClient(test_utils.TestServer(_server(http_client).app)) as client:
            resp = await client.post("/send-message", json={"chatId": "1", "text": "x"})
            assert resp.status == 502

    @pytest.mark.asyncio
    async def test_invalid_base_url_is_upstream_failure(self):
        async with aiohttp.ClientSession() as session:
            registry = ServiceRegistry()
            register(registry, AiohttpClient(session), api_base_url="api.telegram.org")
            service = registry.create(SERVICE_NAME, {"botToken": TOKEN})
            server = WebServer(service, registry, SERVICE_NAME)
            async with test_utils.TestClient(test_utils.TestServer(server.app)) as client:
                resp = await client.post("/send-message", json={"chatId": "1", "text": "x"})
                assert resp.status == 502
                text = await resp.text()
        assert TOKEN not in text
