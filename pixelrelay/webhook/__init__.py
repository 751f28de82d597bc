"""pixelrelay Webhook - HTTP entry point for e-commerce notifications.

Example:
    from pixelrelay.webhook import create_app

    app = create_app()
"""

from pixelrelay.webhook.app import create_app
from pixelrelay.webhook.handler import WebhookResult, process_notification

__all__ = [
    "create_app",
    "process_notification",
    "WebhookResult",
]
