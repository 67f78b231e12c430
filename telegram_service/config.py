from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "https://api.telegram.org"


def _check_base_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"TELEGRAM_API_BASE_URL must be an http(s) URL, got {url!r}")
    return url


@dataclass(frozen=True)
class ServiceConfig:
    bot_token: str
    api_base_url: str = DEFAULT_API_BASE_URL
    host: str = "127.0.0.1"
    port: int = 8080
    http_timeout: float = 30.0
    log_file: str = ""

    @classmethod
    def from_env(cls) -> ServiceConfig:
        load_dotenv()
        token = os.environ.get("TELEGRAM_BOT_TOKEN", "")
        if not token:
            raise ValueError("TELEGRAM_BOT_TOKEN is required")
        return cls(
            bot_token=token,
            api_base_url=_check_base_url(
                os.environ.get("TELEGRAM_API_BASE_URL", "") or DEFAULT_API_BASE_URL
            ),
            host=os.environ.get("TELEGRAM_SERVICE_HOST", "127.0.0.1"),
            port=int(os.environ.get("TELEGRAM_SERVICE_PORT", "8080")),
            http_timeout=float(os.environ.get("TELEGRAM_HTTP_TIMEOUT", "30")),
            log_file=os.environ.get("TELEGRAM_SERVICE_LOG_FILE", ""),
        )
