"""Tests for identity hashing."""

import base64
import hashlib
import re

from pixelrelay.connectors.identity import (
    IdentityType,
    hash_email,
    hash_identity,
    hash_phone,
    normalize_email,
    normalize_phone,
)

HEX_DIGEST = re.compile(r"^[0-9a-f]{64}$")


class TestNormalization:
    """Test identifier normalization."""

    def test_normalize_email(self):
        """Emails are stripped and lowercased."""
        assert normalize_email("  John.Doe@Example.COM ") == "john.doe@example.com"

    def test_normalize_phone(self):
        """Phones keep digits only."""
        assert normalize_phone(" +1 (555) 123-4567 ") == "15551234567"

    def test_non_string(self):
        """Non-string input normalizes to empty."""
        assert normalize_email(None) == ""
        assert normalize_phone(5551234567) == ""


class TestHashEmail:
    """Test hash_email."""

    def test_sha256_of_normalized(self):
        """Digest is SHA-256 of the normalized email."""
        expected = hashlib.sha256(b"test@example.com").hexdigest()

        assert hash_email("Test@Example.com") == expected

    def test_case_and_whitespace_insensitive(self):
        """Inputs differing only in case or surrounding whitespace hash identically."""
        assert hash_email("A@B.com") == hash_email(" a@b.com ")

    def test_deterministic_fixed_length_hex(self):
        """Same input gives the same 64-char lowercase hex digest."""
        first = hash_email("user@example.com")
        second = hash_email("user@example.com")

        assert first == second
        assert HEX_DIGEST.match(first)

    def test_different_emails_differ(self):
        """Different emails produce different digests."""
        assert hash_email("a@example.com") != hash_email("b@example.com")

    def test_not_reversible_encoding(self):
        """Digest is not a base64 encoding of the email."""
        encoded = base64.b64encode(b"test@example.com").decode().rstrip("=")

        assert hash_email("test@example.com") != encoded

    def test_absent(self):
        """Absent or blank emails yield None."""
        assert hash_email(None) is None
        assert hash_email("") is None
        assert hash_email("   ") is None


class TestHashPhone:
    """Test hash_phone."""

    def test_formatting_ignored(self):
        """Formatting characters do not change the digest."""
        assert hash_phone("+1 (555) 123-4567") == hash_phone("15551234567")
        assert hash_phone("15551234567") == hashlib.sha256(b"15551234567").hexdigest()

    def test_no_digits(self):
        """Phones with no digits yield None."""
        assert hash_phone("n/a") is None
        assert hash_phone(None) is None


class TestHashIdentity:
    """Test hash_identity dispatch."""

    def test_dispatch(self):
        """Identity type selects the normalization rules."""
        assert hash_identity(IdentityType.EMAIL, "X@Y.io") == hash_email("x@y.io")
        assert hash_identity(IdentityType.PHONE, "555-0000") == hash_phone("5550000")
