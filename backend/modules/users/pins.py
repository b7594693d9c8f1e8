"""
PIN hashing and format rules.

PINs are hashed with Argon2 (salted, adaptive cost) through passlib.
New PINs must be exactly 6 digits; 4-digit PINs are accepted for
verification only, so legacy accounts can still log in and upgrade.
"""

import re

from passlib.context import CryptContext

pin_context = CryptContext(schemes=["argon2"], deprecated="auto")

NEW_PIN_LENGTH = 6
LEGACY_PIN_LENGTH = 4

_NEW_PIN = re.compile(r"^\d{6}$")
_ANY_PIN = re.compile(r"^(\d{4}|\d{6})$")


def hash_pin(pin: str) -> str:
    """Hash a PIN for storage."""
    return pin_context.hash(pin)


def verify_pin(pin: str, pin_hash: str) -> bool:
    """Check a PIN against a stored hash. Malformed hashes never match."""
    try:
        return pin_context.verify(pin, pin_hash)
    except ValueError:
        return False


def is_valid_new_pin(pin: str) -> bool:
    """A PIN that may be stored: exactly six digits."""
    return bool(pin) and _NEW_PIN.match(pin) is not None


def is_acceptable_pin(pin: str) -> bool:
    """A PIN that may be checked: four (legacy) or six digits."""
    return bool(pin) and _ANY_PIN.match(pin) is not None


def is_legacy_pin(pin: str) -> bool:
    """Whether a PIN is in the legacy 4-digit format."""
    return is_acceptable_pin(pin) and len(pin) == LEGACY_PIN_LENGTH
