"""Error types shared by the service, its HTTP client and the web surface."""
from __future__ import annotations

from typing import Any


class ResponseError(Exception):
    """Telegram API failure normalized into a message plus the raw error body."""

    def __init__(
        self, message: str, http_status_code: int | None = None, data: Any = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status_code = http_status_code
        self.data = data

    def to_json(self) -> dict:
        return {
            "message": self.message,
            "httpStatusCode": self.http_status_code,
            "data": self.data,
        }


class HttpRequestError(Exception):
    """Non-2xx HTTP response. body is decoded JSON when the server sent JSON."""

    def __init__(self, status: int, body: Any) -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.body = body
