"""
Phone number canonicalization.

Every phone comparison and lookup in the system goes through normalize_phone;
raw user input is never compared against stored phones.
"""

import re
from typing import Optional

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number to its canonical digits-only form.

    Strips everything but the ASCII digits 0-9, then drops a leading US country
    code when the result is 11 digits starting with "1".

    Returns:
        The canonical phone, or None if no digits remain.
    """
    if not phone:
        return None

    digits = _NON_DIGITS.sub("", phone)

    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]

    return digits or None


def mask_phone(phone: Optional[str]) -> str:
    """Mask a phone for log output, keeping the last four digits."""
    if not phone:
        return "<none>"
    return f"***{phone[-4:]}"
