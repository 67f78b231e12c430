"""Telegram Bot API service: sends messages through an injected HTTP client."""
from __future__ import annotations

import json
import logging
from typing import Any

from telegram_service.config import DEFAULT_API_BASE_URL
from telegram_service.core.payload import ParseMode, build_message_payload, cleanup_object
from telegram_service.core.registry import ConfigItem, OperationDef, ParamDef, ServiceRegistry
from telegram_service.errors import ResponseError
from telegram_service.ports.http_client import HttpClientPort

logger = logging.getLogger(__name__)


class TelegramService:
    """Single-operation Telegram Bot API adapter.

    Holds only the bot token and the HTTP client, so calls may run
    concurrently without coordination.
    """

    def __init__(
        self,
        bot_token: str,
        http_client: HttpClientPort,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
    ) -> None:
        if not bot_token:
            raise ValueError("bot_token is required")
        self._bot_token = bot_token
        self._http = http_client
        self._api_base_url = api_base_url.rstrip("/")

    @property
    def bot_token(self) -> str:
        return self._bot_token

    def _method_url(self, method_name: str) -> str:
        return f"{self._api_base_url}/bot{self._bot_token}/{method_name}"

    def _redact(self, text: str) -> str:
        return text.replace(self._bot_token, "***")

    async def _api_request(
        self,
        url: str,
        *,
        method: str = "get",
        body: Any = None,
        query: dict | None = None,
        log_tag: str = "",
    ) -> Any:
        query = cleanup_object(query)

        try:
            logger.debug(
                "%s - api request: [%s::%s] q=[%s]",
                log_tag, method, self._redact(url), json.dumps(query),
            )
            return await self._http.request(method, url, query=query, body=body)
        except Exception as e:
            error: Exception = e
            body_data = getattr(e, "body", None)
            if isinstance(body_data, dict):
                error = ResponseError(
                    f"Telegram Error: [{body_data.get('error_code')}] "
                    f"{body_data.get('description')}",
                    None,
                    body_data,
                )

            logger.error("%s - error: %s", log_tag, self._redact(str(error)))

            if error is e:
                raise
            raise error from e

    async def send_message(
        self,
        chat_id: str | int,
        text: str,
        parse_mode: ParseMode | str | None = None,
        disable_web_page_preview: bool | None = None,
        disable_notification: bool | None = None,
        reply_to_message_id: int | None = None,
    ) -> Any:
        """Send a text message to a chat, group or channel.

        Returns the decoded Telegram response body unchanged. Raises
        ResponseError when Telegram answers with an error body.
        """
        payload = build_message_payload(
            chat_id,
            text,
            parse_mode=parse_mode,
            disable_web_page_preview=disable_web_page_preview,
            disable_notification=disable_notification,
            reply_to_message_id=reply_to_message_id,
        )
        return await self._api_request(
            self._method_url("sendMessage"),
            method="post",
            body=payload,
            log_tag="sendMessage",
        )


# ---------------------------------------------------------------------------
# Telegram service definition
# ---------------------------------------------------------------------------

BOT_TOKEN_ITEM = ConfigItem(
    name="botToken",
    display_name="Bot Token",
    type="STRING",
    required=True,
    hint="Your Telegram Bot Token. Get it from @BotFather on Telegram by creating a new bot.",
)

SEND_MESSAGE = OperationDef(
    name="Send Message",
    method_name="send_message",
    route="POST /send-message",
    category="Messaging",
    description="Sends a text message to a specified chat, group, or channel.",
    appearance_color=("#0088CC", "#54A9EB"),
    params=(
        ParamDef(
            name="chatId", label="Chat ID", type="String", arg="chat_id",
            required=True,
            description="Unique identifier for the target chat, group, or channel.",
        ),
        ParamDef(
            name="text", label="Message Text", type="String", arg="text",
            required=True,
            ui_component={"type": "MULTI_LINE_TEXT"},
            description="Text of the message to be sent.",
        ),
        ParamDef(
            name="parseMode", label="Parse Mode", type="String", arg="parse_mode",
            ui_component={
                "type": "DROPDOWN",
                "options": {"values": ["", "Markdown", "MarkdownV2", "HTML"]},
            },
            description="Mode for parsing entities in the message text.",
        ),
        ParamDef(
            name="disableWebPagePreview", label="Disable Web Page Preview",
            type="Boolean", arg="disable_web_page_preview",
            ui_component={"type": "TOGGLE"},
            description="Disables link previews for links in this message.",
        ),
        ParamDef(
            name="disableNotification", label="Disable Notification",
            type="Boolean", arg="disable_notification",
            ui_component={"type": "TOGGLE"},
            description="Sends the message silently without notification.",
        ),
        ParamDef(
            name="replyToMessageId", label="Reply to Message ID", type="Number",
            arg="reply_to_message_id",
            description="If the message is a reply, ID of the original message.",
        ),
    ),
    sample_result={
        "message_id": 123,
        "from": {"id": 123456789, "is_bot": True, "first_name": "BotName"},
        "chat": {"id": -1001234567890, "title": "Test Group", "type": "supergroup"},
        "date": 1642781234,
        "text": "Hello from Telegram!",
    },
)


SERVICE_NAME = "Telegram"


def register(
    registry: ServiceRegistry,
    http_client: HttpClientPort,
    *,
    api_base_url: str = DEFAULT_API_BASE_URL,
) -> None:
    """Register the Telegram service and its operations with *registry*."""
    registry.add_service(
        SERVICE_NAME,
        lambda config: TelegramService(
            config["botToken"], http_client, api_base_url=api_base_url,
        ),
        [BOT_TOKEN_ITEM],
        [SEND_MESSAGE],
    )
