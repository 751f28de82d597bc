"""FastAPI application exposing the e-commerce webhook endpoint.

Endpoints:
- POST /api/tiktok-webhook: receive cart/checkout/order notifications
- any other method on the same path: 405

Responses:
- 200 once the body parsed, whether or not an event was sent
- 400 for an unparseable or non-object JSON body
- 500 for any other processing error

Usage:
    uvicorn pixelrelay.webhook.app:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

import httpx
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse

from pixelrelay.connectors import TikTokConfig, TikTokEventsClient
from pixelrelay.webhook.handler import process_notification

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/tiktok-webhook"
TOPIC_HEADER = "X-Shopify-Topic"

router = APIRouter()


@router.post(WEBHOOK_PATH)
async def receive_webhook(request: Request) -> JSONResponse:
    """Receive a webhook notification and forward a conversion event."""
    raw_body = await request.body()
    try:
        payload = json.loads(raw_body)
    except ValueError as e:
        logger.warning(f"Rejected webhook with invalid JSON: {e}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid JSON body", "detail": str(e)},
        )

    if not isinstance(payload, dict):
        logger.warning(f"Rejected webhook with {type(payload).__name__} body")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid JSON body",
                "detail": f"expected a JSON object, got {type(payload).__name__}",
            },
        )

    topic = request.headers.get(TOPIC_HEADER)
    logger.info(f"Webhook received: {payload.get('event') or topic}")

    try:
        config: TikTokConfig = request.app.state.config_factory()
        client = TikTokEventsClient(config, http_client=request.app.state.http_client)
        result = await process_notification(payload, config, client=client, topic=topic)
    except Exception as e:
        logger.exception("Webhook processing failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e) or type(e).__name__},
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=result.to_dict())


@router.api_route(WEBHOOK_PATH, methods=["GET", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def method_not_allowed() -> JSONResponse:
    """Reject anything but POST."""
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST"},
    )


def create_app(
    config_factory: Callable[[], TikTokConfig] = TikTokConfig.from_env,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Create the webhook application.

    Args:
        config_factory: Called once per request to load TikTok settings.
        http_client: Optional shared outbound client (e.g. a mock transport
            in tests). When None, each delivery opens its own client.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title="pixelrelay")
    app.state.config_factory = config_factory
    app.state.http_client = http_client
    app.include_router(router)
    return app


app = create_app()
