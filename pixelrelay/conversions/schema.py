"""
Conversion schema - webhook notification and canonical conversion event models.

The inbound side models an e-commerce platform webhook (Shopify-style):
- Monetary amounts in minor currency units (cents)
- Optional line items, customer record and client network details

The outbound side is the canonical conversion event forwarded to the
advertising platform:
- Exactly one kind (AddToCart, InitiateCheckout, Purchase)
- Value in major currency units
- Hashed identity, never raw email or phone
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import uuid4


class ConversionKind(str, Enum):
    """Conversion event names understood by the TikTok Events API."""

    ADD_TO_CART = "AddToCart"
    INITIATE_CHECKOUT = "InitiateCheckout"
    PURCHASE = "Purchase"


def generate_event_id() -> str:
    """Return a fresh event identifier (``shopify_<epoch-ms>_<random>``)."""
    return f"shopify_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


def _utc_now_seconds() -> datetime:
    return datetime.now(UTC).replace(microsecond=0)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class LineItem:
    """A single line item from the upstream notification."""

    product_id: Any = None
    quantity: Any = None
    price: Any = None  # Minor units

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineItem:
        return cls(
            product_id=data.get("product_id"),
            quantity=data.get("quantity"),
            price=data.get("price"),
        )


@dataclass(frozen=True)
class WebhookNotification:
    """
    Inbound e-commerce webhook notification.

    Only the fields the pipeline reads are kept; everything else in the
    payload is ignored. Sub-records of the wrong type are treated as absent.

    Example:
        notification = WebhookNotification.from_dict({
            "event": "orders/create",
            "total_price": 5000,
            "currency": "EUR",
            "line_items": [{"product_id": 111, "quantity": 2, "price": 2500}],
        })
    """

    event: str | None = None
    total_price: Any = None  # Minor units
    currency: str | None = None
    line_items: list[dict[str, Any]] | None = None

    # Customer
    email: str | None = None
    phone: str | None = None

    # Client network metadata
    browser_ip: str | None = None
    user_agent: str | None = None

    # TikTok click ID, forwarded as the ad callback
    ttclid: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], topic: str | None = None) -> WebhookNotification:
        """Create a notification from a parsed JSON body.

        Args:
            data: Parsed webhook body.
            topic: Event type taken from the request headers, used when the
                body carries no ``event`` field.

        Returns:
            WebhookNotification instance.

        Raises:
            ValueError: If the body is not a JSON object.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Webhook body must be a JSON object, got {type(data).__name__}")

        customer = _as_dict(data.get("customer"))
        client_details = _as_dict(data.get("client_details"))
        line_items = data.get("line_items")

        return cls(
            event=_as_str(data.get("event")) or _as_str(topic),
            total_price=data.get("total_price"),
            currency=_as_str(data.get("currency")),
            line_items=line_items if isinstance(line_items, list) else None,
            email=_as_str(customer.get("email")),
            phone=_as_str(customer.get("phone")),
            browser_ip=_as_str(client_details.get("browser_ip")),
            user_agent=_as_str(client_details.get("user_agent")),
            ttclid=_as_str(data.get("ttclid")),
        )


@dataclass(frozen=True)
class ContentItem:
    """Content descriptor in the advertiser's schema."""

    content_id: str | None
    quantity: Any
    price: str  # Major units, two decimals

    def to_dict(self) -> dict[str, Any]:
        return {
            "content_id": self.content_id,
            "quantity": self.quantity,
            "price": self.price,
        }


@dataclass(frozen=True)
class UserIdentity:
    """Identity context: hashed email/phone plus raw network metadata."""

    email_hash: str | None = None
    phone_hash: str | None = None
    ip: str | None = None
    user_agent: str | None = None
    callback: str | None = None


@dataclass
class ConversionEvent:
    """
    Canonical conversion event forwarded to the advertising platform.

    Only built once both the kind and a positive value are known.

    Example:
        event = ConversionEvent(
            kind=ConversionKind.PURCHASE,
            value=Decimal("50.00"),
            currency="EUR",
        )
    """

    kind: ConversionKind
    value: Decimal
    currency: str = "USD"
    contents: list[ContentItem] = field(default_factory=list)
    identity: UserIdentity = field(default_factory=UserIdentity)
    event_id: str = field(default_factory=generate_event_id)
    timestamp: datetime = field(default_factory=_utc_now_seconds)

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"Conversion value must be non-negative, got {self.value}")

    @property
    def timestamp_iso(self) -> str:
        """ISO-8601 UTC timestamp truncated to whole seconds."""
        return self.timestamp.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
