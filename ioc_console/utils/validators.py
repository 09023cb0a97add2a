"""Input validation for indicator values and reporter details.

Each ``validate_*`` helper returns the cleaned value or raises ``ValueError``
with a message suitable for showing next to the offending input.
``collect_ioc_errors`` runs every rule over a create payload and returns all
violations at once, keyed by field name.
"""

import re
from urllib.parse import urlparse

from ..models.ioc import IoCCreate

# IPv4 dotted quad, each octet 0-255
_IPV4_RE = re.compile(
    r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
)

# RFC 1035-ish hostname: dot-separated labels of 1-63 chars, no leading/trailing hyphen
_DOMAIN_RE = re.compile(
    r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)*"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?$"
)

# MD5 through SHA-512
_HASH_RE = re.compile(r"^[a-fA-F0-9]{32,128}$")

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CONFIDENCE_MIN = 0
CONFIDENCE_MAX = 100


def validate_ipv4(value: str) -> str:
    if not _IPV4_RE.match(value):
        raise ValueError("Invalid IP format (e.g. 192.168.1.1)")
    return value


def validate_domain(value: str) -> str:
    if len(value) > 253 or not _DOMAIN_RE.match(value):
        raise ValueError("Invalid domain format (e.g. example.com)")
    return value


def validate_url(value: str) -> str:
    """A URL needs a scheme and a network location (``https://example.com``)."""
    try:
        parsed = urlparse(value)
    except ValueError:
        raise ValueError("Invalid URL format (e.g. https://example.com)")
    if not parsed.scheme or not parsed.netloc or any(c.isspace() for c in value):
        raise ValueError("Invalid URL format (e.g. https://example.com)")
    return value


def validate_hash(value: str) -> str:
    if not _HASH_RE.match(value):
        raise ValueError("Invalid hash format (MD5, SHA1, SHA256, etc.)")
    return value


def validate_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise ValueError("Invalid email format")
    return value


def validate_confidence(value: int) -> int:
    if not CONFIDENCE_MIN <= value <= CONFIDENCE_MAX:
        raise ValueError(f"Confidence must be between {CONFIDENCE_MIN} and {CONFIDENCE_MAX}")
    return value


VALUE_VALIDATORS = {
    "ip": validate_ipv4,
    "domain": validate_domain,
    "url": validate_url,
    "hash": validate_hash,
}


def validate_ioc_value(ioc_type: str, value: str) -> str:
    """Check ``value`` against the syntax required by ``ioc_type``."""
    validator = VALUE_VALIDATORS.get(ioc_type)
    if validator is None:
        raise ValueError(f"Unknown IoC type: {ioc_type!r}")
    return validator(value)


def collect_ioc_errors(payload: IoCCreate) -> dict[str, str]:
    """Return every field violation in a create payload (empty dict when valid)."""
    errors: dict[str, str] = {}

    value = payload.value.strip()
    if not value:
        errors["value"] = "This field is required"
    else:
        try:
            validate_ioc_value(payload.ioc_type, value)
        except ValueError as exc:
            errors["value"] = str(exc)

    for field in ("description", "source", "reporter"):
        if not getattr(payload, field).strip():
            errors[field] = f"{field.capitalize()} is required"

    email = payload.reporter_email.strip()
    if not email:
        errors["reporter_email"] = "Reporter email is required"
    else:
        try:
            validate_email(email)
        except ValueError as exc:
            errors["reporter_email"] = str(exc)

    try:
        validate_confidence(payload.confidence)
    except ValueError as exc:
        errors["confidence"] = str(exc)

    return errors
