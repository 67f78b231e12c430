"""aiohttp-backed implementation of HttpClientPort."""
from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp

from telegram_service.errors import HttpRequestError

logger = logging.getLogger(__name__)


async def _decode(resp: aiohttp.ClientResponse) -> Any:
    """Decode a response body as JSON when possible, raw text otherwise."""
    text = await resp.text()
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


class AiohttpClient:
    """HttpClientPort over a shared aiohttp.ClientSession.

    The session is owned by the caller; this class never closes it.
    """

    def __init__(self, session: aiohttp.ClientSession, *, timeout: float = 30.0) -> None:
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def request(
        self,
        method: str,
        url: str,
        *,
        query: dict | None = None,
        body: Any = None,
    ) -> Any:
        async with self._session.request(
            method.upper(),
            url,
            params=query or None,
            json=body,
            timeout=self._timeout,
        ) as resp:
            data = await _decode(resp)
            if resp.status >= 400:
                logger.debug("HTTP %d for %s request", resp.status, method.upper())
                raise HttpRequestError(resp.status, data)
            return data
