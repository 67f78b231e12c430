"""Pure request-payload construction for the sendMessage operation."""
from __future__ import annotations

from enum import Enum


class ParseMode(Enum):
    """Telegram text-formatting mode. NONE sends plain text."""
    NONE = ""
    MARKDOWN = "Markdown"
    MARKDOWN_V2 = "MarkdownV2"
    HTML = "HTML"


def cleanup_object(data: dict | None) -> dict | None:
    """Drop keys whose value is None, in place. Falsy input returns None."""
    if not data:
        return None
    for key in [k for k, v in data.items() if v is None]:
        del data[key]
    return data


def _coerce_parse_mode(parse_mode: ParseMode | str | None) -> str | None:
    if parse_mode is None:
        return None
    if isinstance(parse_mode, ParseMode):
        return parse_mode.value
    try:
        return ParseMode(parse_mode).value
    except ValueError:
        raise ValueError(f"Unsupported parse mode: {parse_mode!r}") from None


def build_message_payload(
    chat_id: str | int,
    text: str,
    parse_mode: ParseMode | str | None = None,
    disable_web_page_preview: bool | None = None,
    disable_notification: bool | None = None,
    reply_to_message_id: int | None = None,
) -> dict:
    """Build the sendMessage body.

    Optional fields are added only when truthy, so False flags, a zero
    reply id and an empty parse mode never reach the wire.
    """
    if chat_id is None or chat_id == "":
        raise ValueError("chat_id is required")
    if text is None or text == "":
        raise ValueError("text is required")

    payload: dict = {"chat_id": chat_id, "text": text}

    mode = _coerce_parse_mode(parse_mode)
    if mode:
        payload["parse_mode"] = mode
    if disable_web_page_preview:
        payload["disable_web_page_preview"] = disable_web_page_preview
    if disable_notification:
        payload["disable_notification"] = disable_notification
    if reply_to_message_id:
        payload["reply_to_message_id"] = reply_to_message_id
    return payload
