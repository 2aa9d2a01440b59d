"""Serialization helpers for websocket traffic with the UI layer."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Callable


class UIMessageError(ValueError):
    """Raised when an inbound UI message cannot be decoded."""


def make_event(
    event_type: str,
    *,
    now_fn: Callable[[], datetime] | None = None,
    **payload: Any,
) -> str:
    """Serialize an event payload with type and timestamp for websocket delivery."""
    now = now_fn() if now_fn is not None else datetime.now(timezone.utc)
    return json.dumps(
        {
            "type": event_type,
            "timestamp": now.isoformat(),
            **payload,
        }
    )


def decode_message(raw: str | bytes) -> tuple[str, dict[str, Any]]:
    """Split an inbound JSON message into its type and remaining fields."""
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError) as error:
        raise UIMessageError(f"Message is not valid JSON: {error}") from error

    if not isinstance(decoded, dict):
        raise UIMessageError("Message must be a JSON object")

    message_type = decoded.pop("type", None)
    if not isinstance(message_type, str) or not message_type:
        raise UIMessageError("Message is missing a string 'type' field")
    return message_type, decoded
