"""Identity hashing for privacy-preserving advertiser matching.

The TikTok Events API matches users on SHA-256 digests of normalized
identifiers. Raw email addresses and phone numbers never leave this module.

Normalization rules:
    - Email: strip surrounding whitespace, lowercase
    - Phone: strip surrounding whitespace, remove every non-digit character

Examples:
    >>> hash_email(" Test@Example.com ") == hash_email("test@example.com")
    True
    >>> len(hash_phone("+1 (555) 123-4567"))
    64
    >>> hash_email(None) is None
    True
"""

from __future__ import annotations

import hashlib
import re
from enum import Enum
from typing import Any

NON_DIGIT_PATTERN = re.compile(r"\D")


class IdentityType(str, Enum):
    """Identifier types the advertiser accepts in hashed form."""

    EMAIL = "email"
    """Email address, normalized to lowercase"""

    PHONE = "phone"
    """Phone number, normalized to digits only"""


def normalize_email(email: Any) -> str:
    """Normalize an email address for hashing.

    Args:
        email: Raw email value.

    Returns:
        Lowercased, stripped email or empty string if absent.
    """
    if isinstance(email, str):
        return email.strip().lower()
    return ""


def normalize_phone(phone: Any) -> str:
    """Normalize a phone number for hashing.

    No length check or country handling is applied;
    the advertiser hashes whatever digits were supplied.

    Args:
        phone: Raw phone value.

    Returns:
        Digits only, or empty string if absent.
    """
    if isinstance(phone, str):
        return NON_DIGIT_PATTERN.sub("", phone.strip())
    return ""


def sha256_hex(value: str) -> str:
    """Return the lowercase hexadecimal SHA-256 digest of a UTF-8 string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


_NORMALIZERS = {
    IdentityType.EMAIL: normalize_email,
    IdentityType.PHONE: normalize_phone,
}


def hash_identity(identity_type: IdentityType, value: Any) -> str | None:
    """Normalize and hash an identifier.

    Args:
        identity_type: Which normalization rules to apply.
        value: Raw identifier.

    Returns:
        64-character hex digest, or None when nothing is left to hash.
    """
    normalized = _NORMALIZERS[identity_type](value)
    if not normalized:
        return None
    return sha256_hex(normalized)


def hash_email(email: Any) -> str | None:
    """Hash an email address. See :func:`hash_identity`."""
    return hash_identity(IdentityType.EMAIL, email)


def hash_phone(phone: Any) -> str | None:
    """Hash a phone number. See :func:`hash_identity`."""
    return hash_identity(IdentityType.PHONE, phone)
