"""Identity hashing for advertiser user matching.

This module normalizes and one-way hashes customer identifiers (email, phone)
before they are sent to an advertising platform.

Example:
    >>> from pixelrelay.connectors.identity import hash_email
    >>> hash_email("Test@Example.com") == hash_email("test@example.com")
    True
"""

from pixelrelay.connectors.identity.hashing import (
    IdentityType,
    hash_email,
    hash_identity,
    hash_phone,
    normalize_email,
    normalize_phone,
    sha256_hex,
)

__all__ = [
    "IdentityType",
    "hash_email",
    "hash_identity",
    "hash_phone",
    "normalize_email",
    "normalize_phone",
    "sha256_hex",
]
