"""
Conversion normalizer - transform webhook notifications into ConversionEvents.

Steps, in order:
- Classify the event type (see classifier)
- Resolve value and currency from minor-unit totals
- Map line items into content descriptors
- Hash customer identifiers
"""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pixelrelay.connectors.identity import hash_email, hash_phone
from pixelrelay.conversions.classifier import EVENT_RULES, classify_event
from pixelrelay.conversions.schema import (
    ContentItem,
    ConversionEvent,
    ConversionKind,
    LineItem,
    UserIdentity,
    WebhookNotification,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"
MINOR_UNITS = Decimal(100)
CENTS = Decimal("0.01")
INTEGER_STRING = re.compile(r"^[+-]?\d+$")


def _to_decimal(amount: Any) -> Decimal | None:
    """Parse a JSON number or an integer string. Booleans are rejected.

    Strings must hold whole minor units; "25.99" is ambiguous with a
    major-unit amount and is rejected.
    """
    if isinstance(amount, bool) or amount is None:
        return None
    if isinstance(amount, str):
        amount = amount.strip()
        if not INTEGER_STRING.match(amount):
            return None
    if isinstance(amount, int | float | str):
        try:
            parsed = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            return None
        return parsed if parsed.is_finite() else None
    return None


def minor_to_major(amount: Decimal) -> Decimal | None:
    """Convert minor units to major units, rounded half-up to two places.

    Returns None when the result exceeds the decimal context precision.
    """
    try:
        return (amount / MINOR_UNITS).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.warning(f"Amount {amount} out of range, ignoring")
        return None


def extract_value(amount: Any) -> Decimal | None:
    """
    Resolve a conversion value from a minor-unit amount.

    Args:
        amount: Total in minor units (e.g. 2599 cents)

    Returns:
        Value in major units (e.g. Decimal("25.99")), or None when the amount
        is absent, not numeric, or not positive

    Example:
        >>> extract_value(2599)
        Decimal('25.99')
        >>> extract_value(0) is None
        True
    """
    parsed = _to_decimal(amount)
    if parsed is None or parsed <= 0:
        return None
    return minor_to_major(parsed)


def resolve_currency(code: Any) -> str:
    """Return the currency code, defaulting to USD when absent or empty."""
    if isinstance(code, str) and code.strip():
        return code.strip()
    return DEFAULT_CURRENCY


def format_unit_price(price: Any) -> str:
    """Format a minor-unit price as a major-unit string with two decimals."""
    parsed = _to_decimal(price)
    major = minor_to_major(parsed) if parsed is not None else None
    if major is None:
        return "0.00"
    return f"{major:.2f}"


def map_contents(line_items: list[Any] | None) -> list[ContentItem]:
    """
    Project line items into content descriptors.

    Order follows the input. Missing product IDs map to None rather than
    raising; entries that are not objects are skipped.

    Args:
        line_items: Raw line items from the notification

    Returns:
        List of ContentItem, empty when there are no line items
    """
    if not line_items:
        return []

    contents = []
    for raw in line_items:
        if not isinstance(raw, dict):
            logger.debug(f"Skipping non-object line item: {raw!r}")
            continue

        item = LineItem.from_dict(raw)
        contents.append(
            ContentItem(
                content_id=str(item.product_id) if item.product_id is not None else None,
                quantity=item.quantity,
                price=format_unit_price(item.price),
            )
        )

    return contents


def build_identity(notification: WebhookNotification) -> UserIdentity:
    """Hash customer identifiers and attach raw network metadata."""
    return UserIdentity(
        email_hash=hash_email(notification.email),
        phone_hash=hash_phone(notification.phone),
        ip=notification.browser_ip,
        user_agent=notification.user_agent,
        callback=notification.ttclid,
    )


class WebhookNormalizer:
    """
    Normalize e-commerce webhook notifications to ConversionEvents.

    An event is produced only when the event type is recognized AND the
    total resolves to a positive value; anything else yields None.

    Example:
        normalizer = WebhookNormalizer()
        event = normalizer.normalize({
            "event": "orders/create",
            "total_price": 5000,
            "currency": "EUR",
        })
        # event.kind == ConversionKind.PURCHASE, event.value == Decimal("50.00")
    """

    def __init__(
        self,
        rules: tuple[tuple[str, ConversionKind], ...] = EVENT_RULES,
    ):
        """
        Initialize normalizer.

        Args:
            rules: Ordered (keyword, kind) classification rules
        """
        self.rules = rules

    def normalize(
        self,
        data: WebhookNotification | dict[str, Any],
        topic: str | None = None,
    ) -> ConversionEvent | None:
        """
        Normalize a notification into a ConversionEvent.

        Args:
            data: Parsed webhook body or an already-built notification
            topic: Event type from request headers, used when the body has none

        Returns:
            ConversionEvent, or None when no tracked event applies

        Raises:
            ValueError: If a raw body is not a JSON object
        """
        notification = (
            data
            if isinstance(data, WebhookNotification)
            else WebhookNotification.from_dict(data, topic=topic)
        )

        kind = classify_event(notification.event, self.rules)
        if kind is None:
            logger.info(f"No conversion mapped for event type {notification.event!r}")
            return None

        value = extract_value(notification.total_price)
        if value is None:
            logger.info(f"Skipping {kind.value}: no usable total_price")
            return None

        return ConversionEvent(
            kind=kind,
            value=value,
            currency=resolve_currency(notification.currency),
            contents=map_contents(notification.line_items),
            identity=build_identity(notification),
        )
