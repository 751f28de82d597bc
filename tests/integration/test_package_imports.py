"""Integration tests for package imports."""


class TestAllPackagesImportable:
    """Test that all pixelrelay packages can be imported together."""

    def test_conversions_package_imports(self):
        """Conversions package classes should be importable."""
        from pixelrelay.conversions import ConversionEvent
        from pixelrelay.conversions import ConversionKind
        from pixelrelay.conversions import WebhookNormalizer
        from pixelrelay.conversions import classify_event

        assert ConversionEvent is not None
        assert ConversionKind is not None
        assert WebhookNormalizer is not None
        assert classify_event is not None

    def test_connectors_package_imports(self):
        """Connectors package classes should be importable."""
        from pixelrelay.connectors import TikTokConfig
        from pixelrelay.connectors import TikTokEventsClient
        from pixelrelay.connectors import DeliveryResult
        from pixelrelay.connectors import hash_email

        assert TikTokConfig is not None
        assert TikTokEventsClient is not None
        assert DeliveryResult is not None
        assert hash_email is not None

    def test_webhook_package_imports(self):
        """Webhook package should be importable."""
        from pixelrelay.webhook import create_app
        from pixelrelay.webhook import process_notification

        assert create_app is not None
        assert process_notification is not None


class TestCrossPackageIntegration:
    """Test cross-package functionality."""

    def test_normalizer_hashes_with_connector_identity(self):
        """Conversions should hash identity through the connectors package."""
        from pixelrelay.connectors import hash_email
        from pixelrelay.conversions import WebhookNormalizer

        event = WebhookNormalizer().normalize({
            "event": "orders/create",
            "total_price": 100,
            "customer": {"email": "Buyer@Shop.com"},
        })

        assert event.identity.email_hash == hash_email("buyer@shop.com")

    def test_all_exports_defined(self):
        """Each package __all__ should only list defined names."""
        import pixelrelay.connectors as connectors
        import pixelrelay.conversions as conversions
        import pixelrelay.webhook as webhook

        for module in (connectors, conversions, webhook):
            for name in module.__all__:
                assert hasattr(module, name), f"{module.__name__} missing {name}"
