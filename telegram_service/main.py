from __future__ import annotations

import asyncio
import logging
import signal

import aiohttp

from telegram_service.adapters.http.client import AiohttpClient
from telegram_service.adapters.web.server import WebServer
from telegram_service.config import ServiceConfig
from telegram_service.core.registry import ServiceRegistry
from telegram_service.core.service import SERVICE_NAME, register

logger = logging.getLogger("telegram_service")


def setup_logging(log_file: str = "") -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        handlers=handlers,
    )


async def main() -> None:
    config = ServiceConfig.from_env()
    setup_logging(config.log_file)
    logger.info("Telegram service starting...")

    async with aiohttp.ClientSession() as session:
        http_client = AiohttpClient(session, timeout=config.http_timeout)

        registry = ServiceRegistry()
        register(registry, http_client, api_base_url=config.api_base_url)
        service = registry.create(SERVICE_NAME, {"botToken": config.bot_token})

        server = WebServer(
            service, registry, SERVICE_NAME, host=config.host, port=config.port,
        )

        stop_event = asyncio.Event()

        def handle_signal() -> None:
            logger.info("Shutdown signal received")
            stop_event.set()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, handle_signal)

        await server.start()
        await stop_event.wait()

        logger.info("Shutting down...")
        await server.stop()
    logger.info("Telegram service stopped.")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
