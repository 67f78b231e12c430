"""HTTP client port: the transport the Telegram service is given by its host.

The service depends only on this protocol. Timeouts, cancellation and
connection pooling belong to the implementation.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HttpClientPort(Protocol):
    """Abstract interface for an async HTTP client."""

    async def request(
        self,
        method: str,
        url: str,
        *,
        query: dict | None = None,
        body: Any = None,
    ) -> Any:
        """Send a request and return the decoded response body.

        Failed responses raise an exception whose ``body`` attribute holds
        the decoded error body, when one is available.
        """
        ...
