from __future__ import annotations

from typing import Any

import pytest

from telegram_service.core.service import TelegramService

TOKEN = "123456:ABC-test-token"


class FakeHttpClient:
    """Records requests and replays a canned result or error."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[dict] = []

    async def request(self, method, url, *, query=None, body=None):
        self.calls.append({"method": method, "url": url, "query": query, "body": body})
        if self.error is not None:
            raise self.error
        return self.result


class BodyError(Exception):
    """Transport error carrying a decoded body, like the host client raises."""

    def __init__(self, body: Any) -> None:
        super().__init__("request failed")
        self.body = body


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient(result={"ok": True, "result": {"message_id": 1}})


@pytest.fixture
def service(http_client: FakeHttpClient) -> TelegramService:
    return TelegramService(TOKEN, http_client)
