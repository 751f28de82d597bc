"""Webhook processing - one notification in, at most one conversion event out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pixelrelay.connectors import TikTokConfig, TikTokEventsClient
from pixelrelay.conversions import WebhookNormalizer

logger = logging.getLogger(__name__)


@dataclass
class WebhookResult:
    """Response reported to the upstream platform.

    success is always True once the body was processed; delivery failures
    are logged, not reported.
    """

    event_sent: bool = False
    event: str | None = None
    event_id: str | None = None
    value: float | None = None
    success: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "event_sent": self.event_sent,
            "event": self.event,
            "event_id": self.event_id,
            "value": self.value,
        }


async def process_notification(
    payload: dict[str, Any],
    config: TikTokConfig,
    client: TikTokEventsClient | None = None,
    topic: str | None = None,
    normalizer: WebhookNormalizer | None = None,
) -> WebhookResult:
    """Translate a webhook notification and forward it to TikTok.

    Delivery is awaited only so its outcome can be logged; it never changes
    the returned result.

    Args:
        payload: Parsed webhook body.
        config: TikTok credentials used when no client is supplied.
        client: Optional delivery client (injected in tests).
        topic: Event type from request headers, used when the body has none.
        normalizer: Optional normalizer with custom classification rules.

    Returns:
        WebhookResult for the upstream response.

    Raises:
        ValueError: If the payload is not a JSON object.
    """
    normalizer = normalizer or WebhookNormalizer()
    event = normalizer.normalize(payload, topic=topic)
    if event is None:
        return WebhookResult()

    client = client or TikTokEventsClient(config)
    delivery = await client.send(event)
    if delivery.success:
        logger.info(
            f"Delivered {delivery.event_name} ({delivery.event_id}) "
            f"(HTTP {delivery.status_code})"
        )
    else:
        logger.warning(
            f"Delivery of {delivery.event_name} ({delivery.event_id}) failed: {delivery.error}"
        )

    return WebhookResult(
        event_sent=True,
        event=event.kind.value,
        event_id=event.event_id,
        value=float(event.value),
    )
