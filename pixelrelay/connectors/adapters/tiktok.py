"""TikTok Events API connector."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx

from pixelrelay.connectors.config import DeliveryResult, TikTokConfig
from pixelrelay.connectors.exceptions import (
    ConfigurationError,
    ConnectorError,
    DeliveryError,
)

if TYPE_CHECKING:
    from pixelrelay.conversions import ConversionEvent

logger = logging.getLogger(__name__)


class TikTokEventsClient:
    """Client for the TikTok Events API (server-side pixel tracking).

    Sends one conversion event per call. Every failure (missing settings,
    network errors, non-2xx statuses, API error codes) is returned as a failed
    DeliveryResult; send() never raises.

    Example:
        config = TikTokConfig(pixel_id="C123", access_token="xxx")
        client = TikTokEventsClient(config)
        result = await client.send(event)
        if not result.success:
            print(result.error)
    """

    def __init__(
        self,
        config: TikTokConfig,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize TikTok client.

        Args:
            config: Pixel credentials and endpoint settings.
            http_client: Optional shared client. When omitted a client is
                created and closed for each send.
        """
        self.config = config
        self._http_client = http_client

    def _headers(self) -> dict[str, str]:
        return {
            "Access-Token": self.config.access_token,
            "Content-Type": "application/json",
        }

    def build_payload(self, event: ConversionEvent) -> dict[str, Any]:
        """Build the Events API request body for a conversion event.

        Identity fields that are absent are omitted rather than sent as null.

        Args:
            event: Conversion event to send.

        Returns:
            JSON-serializable request body.
        """
        identity = event.identity

        user: dict[str, str] = {}
        if identity.email_hash:
            user["email"] = identity.email_hash
        if identity.phone_hash:
            user["phone"] = identity.phone_hash

        context: dict[str, Any] = {"user": user}
        if identity.callback:
            context["ad"] = {"callback": identity.callback}
        if identity.ip:
            context["ip"] = identity.ip
        if identity.user_agent:
            context["user_agent"] = identity.user_agent

        payload: dict[str, Any] = {
            "pixel_code": self.config.pixel_id,
            "event": event.kind.value,
            "event_id": event.event_id,
            "timestamp": event.timestamp_iso,
            "properties": {
                "value": float(event.value),
                "currency": event.currency,
                "contents": [item.to_dict() for item in event.contents],
            },
            "context": context,
        }
        if self.config.test_event_code:
            payload["test_event_code"] = self.config.test_event_code
        return payload

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(
                self.config.endpoint,
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout_seconds,
            )

        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            return await client.post(
                self.config.endpoint,
                json=payload,
                headers=self._headers(),
            )

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    async def send(self, event: ConversionEvent) -> DeliveryResult:
        """Send a conversion event to TikTok.

        Args:
            event: Conversion event to send.

        Returns:
            DeliveryResult describing the outcome.
        """
        result = DeliveryResult(
            event_name=event.kind.value,
            event_id=event.event_id,
            started_at=datetime.now(UTC),
        )

        try:
            errors = self.config.validate()
            if errors:
                raise ConfigurationError(f"configuration error: {'; '.join(errors)}")

            payload = self.build_payload(event)
            logger.info(
                f"Sending {result.event_name} ({result.event_id}) to TikTok, "
                f"value {event.value} {event.currency}"
            )
            response = await self._post(payload)

            result.status_code = response.status_code
            result.response_body = self._parse_body(response)

            if not response.is_success:
                raise DeliveryError(
                    f"TikTok API returned HTTP {response.status_code}",
                    status_code=response.status_code,
                    body=result.response_body,
                )

            # The API reports business errors as HTTP 200 with a non-zero code
            body = result.response_body
            if isinstance(body, dict) and body.get("code", 0) != 0:
                raise DeliveryError(
                    f"TikTok API error {body.get('code')}: {body.get('message', '')}",
                    status_code=response.status_code,
                    body=body,
                )

            result.success = True
            logger.info(f"TikTok API response for {result.event_id}: {result.response_body}")

        except ConnectorError as e:
            result.error = str(e)
            logger.warning(
                f"TikTok delivery failed for {result.event_id}: {e} "
                f"(response: {result.response_body!r})"
            )
        except httpx.HTTPError as e:
            result.error = f"{type(e).__name__}: {e}"
            logger.warning(f"TikTok delivery failed for {result.event_id}: {result.error}")
        except Exception as e:
            result.error = f"{type(e).__name__}: {e}"
            logger.exception(f"Unexpected error delivering {result.event_id} to TikTok")
        finally:
            result.completed_at = datetime.now(UTC)

        return result
