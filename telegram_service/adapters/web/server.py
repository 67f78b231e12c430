"""Web host surface: exposes registered service operations over HTTP.

Each operation is mounted on its declared route and takes a JSON object of
host params. GET / returns the service description.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import aiohttp
from aiohttp import web

from telegram_service.core.registry import OperationDef, ServiceRegistry, invoke
from telegram_service.errors import HttpRequestError, ResponseError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Route handlers
# ---------------------------------------------------------------------------

async def _handle_describe(request: web.Request) -> web.Response:
    """GET / returns service metadata for the host UI."""
    registry: ServiceRegistry = request.app["registry"]
    return web.json_response(registry.describe(request.app["service_name"]))


def _make_operation_handler(
    op: OperationDef,
) -> Callable[[web.Request], Awaitable[web.Response]]:
    async def handler(request: web.Request) -> web.Response:
        service: Any = request.app["service"]
        try:
            params = await request.json()
        except json.JSONDecodeError:
            return web.json_response({"error": "request body must be JSON"}, status=400)
        if not isinstance(params, dict):
            return web.json_response({"error": "request body must be an object"}, status=400)

        try:
            result = await invoke(service, op, params)
        except ResponseError as e:
            return web.json_response(e.to_json(), status=e.http_status_code or 400)
        # aiohttp.InvalidURL is also a ValueError; keep this branch first
        except (HttpRequestError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning("%s: upstream failure: %s", op.method_name, type(e).__name__)
            return web.json_response({"error": "upstream request failed"}, status=502)
        except ValueError as e:
            return web.json_response({"error": str(e)}, status=400)
        return web.json_response(result)

    return handler


# ---------------------------------------------------------------------------
# App factory & server class
# ---------------------------------------------------------------------------

def _build_app(service: Any, registry: ServiceRegistry, service_name: str) -> web.Application:
    app = web.Application()
    app["service"] = service
    app["registry"] = registry
    app["service_name"] = service_name

    app.router.add_get("/", _handle_describe)
    for op in registry.get(service_name).operations:
        app.router.add_route(op.http_method, op.path, _make_operation_handler(op))

    return app


class WebServer:
    """aiohttp server hosting one registered service."""

    def __init__(
        self,
        service: Any,
        registry: ServiceRegistry,
        service_name: str,
        host: str = "127.0.0.1",
        port: int = 8080,
    ) -> None:
        self._app = _build_app(service, registry, service_name)
        self._host = host
        self._port = port
        self._runner: web.AppRunner | None = None

    @property
    def app(self) -> web.Application:
        return self._app

    async def start(self) -> None:
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._host, self._port)
        await site.start()
        logger.info("Service running at http://%s:%d", self._host, self._port)

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
            logger.info("Service stopped")
