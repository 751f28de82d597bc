"""
Event classification - map upstream webhook topics to conversion kinds.

Rules are checked in order and the first keyword contained in the event type
wins. "order" is checked before "checkout" and "cart" so that order topics are
never mistaken for cart activity.
"""

from __future__ import annotations

from typing import Any

from pixelrelay.conversions.schema import ConversionKind

EVENT_RULES: tuple[tuple[str, ConversionKind], ...] = (
    ("order", ConversionKind.PURCHASE),
    ("checkout", ConversionKind.INITIATE_CHECKOUT),
    ("cart", ConversionKind.ADD_TO_CART),
)


def classify_event(
    event_type: Any,
    rules: tuple[tuple[str, ConversionKind], ...] = EVENT_RULES,
) -> ConversionKind | None:
    """
    Classify a webhook event type.

    Matching is case-sensitive keyword containment.

    Args:
        event_type: Event-type string from the notification (e.g. "orders/create")
        rules: Ordered (keyword, kind) pairs

    Returns:
        Matching ConversionKind, or None when no rule applies

    Example:
        >>> classify_event("orders/create")
        <ConversionKind.PURCHASE: 'Purchase'>
        >>> classify_event("products/update") is None
        True
    """
    if not isinstance(event_type, str) or not event_type:
        return None

    for keyword, kind in rules:
        if keyword in event_type:
            return kind
    return None
