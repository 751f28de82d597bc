"""Custom exceptions for connectors."""

from __future__ import annotations


class ConnectorError(Exception):
    """Base exception for connector errors."""

    pass


class ConfigurationError(ConnectorError):
    """Raised when required connector settings are missing."""

    pass


class DeliveryError(ConnectorError):
    """Raised when the advertiser API rejects or fails an event."""

    def __init__(self, message: str, status_code: int | None = None, body: object = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
