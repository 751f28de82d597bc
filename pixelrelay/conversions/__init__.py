"""
pixelrelay Conversions - canonical conversion events from webhook notifications.

Provides:
- Canonical conversion event schema
- Data-driven event classification
- Value, currency and content normalization

Usage:
    from pixelrelay.conversions import WebhookNormalizer

    normalizer = WebhookNormalizer()
    event = normalizer.normalize(webhook_body)
    if event is not None:
        ...
"""

from pixelrelay.conversions.classifier import (
    EVENT_RULES,
    classify_event,
)
from pixelrelay.conversions.normalizer import (
    WebhookNormalizer,
    extract_value,
    map_contents,
    resolve_currency,
)
from pixelrelay.conversions.schema import (
    ContentItem,
    ConversionEvent,
    ConversionKind,
    UserIdentity,
    WebhookNotification,
)

__all__ = [
    # Schema
    "ConversionEvent",
    "ConversionKind",
    "ContentItem",
    "UserIdentity",
    "WebhookNotification",
    # Classification
    "EVENT_RULES",
    "classify_event",
    # Normalization
    "WebhookNormalizer",
    "extract_value",
    "map_contents",
    "resolve_currency",
]
