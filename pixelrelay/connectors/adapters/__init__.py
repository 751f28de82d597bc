"""Advertising platform adapters.

Each adapter delivers ConversionEvents to one platform's server-side API.
"""

from pixelrelay.connectors.adapters.tiktok import TikTokEventsClient

__all__ = ["TikTokEventsClient"]
