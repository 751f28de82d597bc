"""pixelrelay Connectors.

This package delivers conversion events to advertising platforms:
- Identity hashing (email, phone) for privacy-preserving matching
- TikTok Events API delivery client
- Connector configuration and delivery results

Example:
    from pixelrelay.connectors import TikTokConfig, TikTokEventsClient

    config = TikTokConfig.from_env()
    client = TikTokEventsClient(config)
    result = await client.send(event)
    print(f"Delivered: {result.success}")
"""

from pixelrelay.connectors.adapters import TikTokEventsClient
from pixelrelay.connectors.config import (
    TIKTOK_TRACK_URL,
    DeliveryResult,
    TikTokConfig,
)
from pixelrelay.connectors.exceptions import (
    ConfigurationError,
    ConnectorError,
    DeliveryError,
)
from pixelrelay.connectors.identity import (
    IdentityType,
    hash_email,
    hash_phone,
)

__all__ = [
    # Config
    "TIKTOK_TRACK_URL",
    "TikTokConfig",
    "DeliveryResult",
    # Exceptions
    "ConnectorError",
    "ConfigurationError",
    "DeliveryError",
    # Identity
    "IdentityType",
    "hash_email",
    "hash_phone",
    # Adapters
    "TikTokEventsClient",
]
