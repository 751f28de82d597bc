"""Shared pytest fixtures for pixelrelay."""

import httpx
import pytest

from pixelrelay.connectors import TikTokConfig


@pytest.fixture
def tiktok_config():
    """TikTok configuration with test credentials."""
    return TikTokConfig(pixel_id="TEST_PIXEL_123", access_token="test-access-token")


@pytest.fixture
def captured_requests():
    """Requests seen by the mock TikTok transport."""
    return []


@pytest.fixture
def tiktok_response():
    """Response returned by the mock TikTok transport (mutable per test)."""
    return {"status_code": 200, "json": {"code": 0, "message": "OK", "data": {}}}


@pytest.fixture
def mock_http_client(captured_requests, tiktok_response):
    """httpx.AsyncClient backed by a MockTransport that records requests."""

    def handler(request: httpx.Request) -> httpx.Response:
        captured_requests.append(request)
        return httpx.Response(tiktok_response["status_code"], json=tiktok_response["json"])

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def sample_order_payload():
    """Sample orders/create webhook body."""
    return {
        "event": "orders/create",
        "total_price": 5000,
        "currency": "EUR",
        "line_items": [
            {"product_id": 111, "quantity": 2, "price": 2500},
        ],
        "customer": {
            "email": "Test@Example.com",
            "phone": "+1 (555) 123-4567",
        },
        "client_details": {
            "browser_ip": "203.0.113.7",
            "user_agent": "Mozilla/5.0",
        },
    }
