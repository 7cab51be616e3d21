"""Relay one article into the configured Telegram channel.

The dispatcher is stateless: every call validates its own payload, reads the
immutable relay settings, and performs at most one ``sendMessage`` request.
Failures never raise out of :func:`relay`; they come back as an
``ErrorOutcome`` whose ``kind`` tells the caller whether the user, the
deployment, or the delivery is at fault. Nothing is retried here.
"""

from __future__ import annotations

import html
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError

from ingestion.utils.logging import get_logger
from publish.models import (
    SOURCE_MAX_CHARS,
    SUMMARY_MAX_CHARS,
    TITLE_MAX_CHARS,
    ErrorOutcome,
    SharePayload,
    ShareOutcome,
    SuccessOutcome,
)
from publish.settings import RelaySettings, get_relay_settings


logger = get_logger(__name__)

DELIVERED_MESSAGE = "Delivered to Telegram"
FALLBACK_DELIVERY_MESSAGE = "Telegram API responded with an error."
INVALID_CONFIG_MESSAGE = (
    "Telegram relay settings are invalid (check TELEGRAM_API_BASE and TELEGRAM_TIMEOUT_SECONDS). "
    "Fix your deployment configuration."
)


class RelayError(Exception):
    """Base relay error."""


class RelayConfigError(RelayError):
    """Required Telegram setting is absent from the deployment configuration."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"Missing environment variable {variable}. Add it to your deployment configuration.")
        self.variable = variable


class DeliveryError(RelayError):
    """Telegram did not accept the message; the caller may resubmit."""


_FIELD_MESSAGES: Dict[str, Dict[str, str]] = {
    "title": {
        "string_too_long": f"Article title must be at most {TITLE_MAX_CHARS} characters.",
        "default": "Article title is required.",
    },
    "url": {
        "default": "Article URL must be an absolute http(s) URL.",
    },
    "source": {
        "string_too_long": f"Article source must be at most {SOURCE_MAX_CHARS} characters.",
        "default": "Article source is required.",
    },
    "summary": {
        "string_too_long": f"Article summary must be at most {SUMMARY_MAX_CHARS} characters.",
        "default": "Article summary must be text.",
    },
}


def describe_validation_error(exc: ValidationError) -> str:
    """Turn a pydantic error into one short sentence per offending field."""
    messages: list[str] = []
    seen: set[str] = set()
    for error in exc.errors():
        field = str(error["loc"][0]) if error.get("loc") else ""
        if field in seen:
            continue
        seen.add(field)
        table = _FIELD_MESSAGES.get(field)
        if table is None:
            messages.append("Share request must provide title, url and source.")
            continue
        messages.append(table.get(error["type"], table["default"]))
    return " ".join(messages) or "Share request is invalid."


def _credentials(cfg: RelaySettings) -> Tuple[str, str]:
    token = cfg.telegram_bot_token.get_secret_value().strip() if cfg.telegram_bot_token else ""
    if not token:
        raise RelayConfigError("TELEGRAM_BOT_TOKEN")
    if not cfg.telegram_chat_id:
        raise RelayConfigError("TELEGRAM_CHAT_ID")
    return token, cfg.telegram_chat_id


def format_message(payload: SharePayload) -> str:
    """HTML parse-mode message: bold title, underlined source, optional summary, link."""
    parts = [
        f"<b>{html.escape(payload.title, quote=False)}</b>\n<u>{html.escape(payload.source, quote=False)}</u>",
    ]
    if payload.summary:
        parts.append(html.escape(payload.summary, quote=False))
    parts.append(html.escape(payload.url, quote=False))
    return "\n\n".join(parts)


def _error_text(resp: httpx.Response) -> str:
    text = resp.text.strip()
    return text or FALLBACK_DELIVERY_MESSAGE


def send_message(
    cfg: RelaySettings,
    token: str,
    chat_id: str,
    text: str,
    *,
    client: Optional[httpx.Client] = None,
) -> None:
    """POST one sendMessage call; raise DeliveryError on any non-success."""
    url = f"{cfg.telegram_api_base}/bot{token}/sendMessage"
    body = {
        "chat_id": chat_id,
        "text": text,
        "parse_mode": "HTML",
        "disable_web_page_preview": False,
    }
    timeout = float(cfg.telegram_timeout_seconds)
    try:
        if client is not None:
            resp = client.post(url, json=body, timeout=timeout)
        else:
            resp = httpx.post(url, json=body, timeout=timeout)
    except httpx.TimeoutException as exc:
        raise DeliveryError("Telegram API request timed out.") from exc
    except httpx.HTTPError as exc:
        # exception text may embed the request URL, which carries the token
        raise DeliveryError(f"Could not reach Telegram API ({exc.__class__.__name__}).") from exc

    if not resp.is_success:
        raise DeliveryError(_error_text(resp))

    try:
        data: Any = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("ok") is False:
        raise DeliveryError(str(data.get("description") or FALLBACK_DELIVERY_MESSAGE))


def relay(
    payload: Any,
    *,
    settings: Optional[RelaySettings] = None,
    client: Optional[httpx.Client] = None,
) -> ShareOutcome:
    """Validate raw share fields and deliver them to Telegram."""
    try:
        share = SharePayload.model_validate(payload)
    except ValidationError as exc:
        message = describe_validation_error(exc)
        logger.info("relay.validation_failed", extra={"reason": message})
        return ErrorOutcome(kind="validation", message=message)

    try:
        cfg = settings or get_relay_settings()
    except RuntimeError as exc:
        # pydantic error text echoes raw input values
        logger.error("relay.config_invalid", extra={"reason": exc.__class__.__name__})
        return ErrorOutcome(kind="configuration", message=INVALID_CONFIG_MESSAGE)

    try:
        token, chat_id = _credentials(cfg)
    except RelayConfigError as exc:
        logger.error("relay.config_missing", extra={"variable": exc.variable})
        return ErrorOutcome(kind="configuration", message=str(exc))

    try:
        send_message(cfg, token, chat_id, format_message(share), client=client)
    except DeliveryError as exc:
        logger.warning(
            "relay.delivery_failed",
            extra={"url": share.url, "source": share.source, "reason": str(exc)},
        )
        return ErrorOutcome(kind="delivery", message=str(exc))

    logger.info("relay.delivered", extra={"url": share.url, "source": share.source})
    return SuccessOutcome(message=DELIVERED_MESSAGE)
