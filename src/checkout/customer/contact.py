"""Contact detail checks applied at checkout."""

import re

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# Romanian numbers: +40 or a leading 0, then 9-10 digits.
_PHONE_RE = re.compile(r"(\+40|0)[0-9]{9,10}")
_PHONE_PUNCTUATION_RE = re.compile(r"[\s\-]")


def is_valid_email(email: str | None) -> bool:
    return bool(email) and _EMAIL_RE.fullmatch(email) is not None


def normalize_phone(phone: str) -> str:
    """Strip spaces and hyphens, e.g. ``0722 123-456`` -> ``0722123456``."""
    return _PHONE_PUNCTUATION_RE.sub("", phone)


def is_valid_phone(phone: str | None) -> bool:
    if not phone:
        return False
    return _PHONE_RE.fullmatch(normalize_phone(phone)) is not None
