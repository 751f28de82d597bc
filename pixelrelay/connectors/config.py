"""Configuration models for the TikTok Events API connector."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

TIKTOK_TRACK_URL = "https://business-api.tiktok.com/open_api/v1.3/pixel/track/"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class TikTokConfig:
    """Credentials and endpoint settings for event delivery.

    Built explicitly and passed to the delivery client so business logic
    never reads the environment itself.

    Attributes:
        pixel_id: TikTok pixel code routing events to the ad account.
        access_token: Events API access token.
        endpoint: Track endpoint URL.
        timeout_seconds: Per-request timeout for the outbound call.
        test_event_code: Optional code routing events to the Test Events tool.
    """

    pixel_id: str = ""
    # repr=False to prevent credential exposure in logs
    access_token: str = field(default="", repr=False)
    endpoint: str = TIKTOK_TRACK_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    test_event_code: str | None = None

    @classmethod
    def from_env(cls) -> TikTokConfig:
        """Create configuration from environment variables.

        Uses TIKTOK_PIXEL_ID and TIKTOK_ACCESS_TOKEN for credentials.
        Uses TIKTOK_API_URL, TIKTOK_TIMEOUT_SECONDS and TIKTOK_TEST_EVENT_CODE
        when set (optional).

        Missing credentials do not raise here; call validate() to list them.

        Returns:
            TikTokConfig instance.
        """
        raw_timeout = os.getenv("TIKTOK_TIMEOUT_SECONDS", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
        except ValueError:
            logger.warning(
                f"Invalid TIKTOK_TIMEOUT_SECONDS {raw_timeout!r}, "
                f"using {DEFAULT_TIMEOUT_SECONDS}"
            )
            timeout = DEFAULT_TIMEOUT_SECONDS

        return cls(
            pixel_id=os.getenv("TIKTOK_PIXEL_ID", ""),
            access_token=os.getenv("TIKTOK_ACCESS_TOKEN", ""),
            endpoint=os.getenv("TIKTOK_API_URL") or TIKTOK_TRACK_URL,
            timeout_seconds=timeout,
            test_event_code=os.getenv("TIKTOK_TEST_EVENT_CODE") or None,
        )

    def validate(self) -> list[str]:
        """Return a list of missing required settings (empty when valid)."""
        errors: list[str] = []
        if not self.pixel_id:
            errors.append("TIKTOK_PIXEL_ID not configured")
        if not self.access_token:
            errors.append("TIKTOK_ACCESS_TOKEN not configured")
        return errors


@dataclass
class DeliveryResult:
    """Outcome of a single delivery attempt.

    Consumed only for logging; it never changes the webhook response.
    """

    event_name: str
    event_id: str
    started_at: datetime
    completed_at: datetime | None = None

    success: bool = False
    status_code: int | None = None
    response_body: Any = None
    error: str | None = None

    @property
    def duration_seconds(self) -> float | None:
        """Return delivery duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None
