"""Normalisation and validation of custom domain names."""
from __future__ import annotations

import re

VALID_TLDS = frozenset(
    {
        "com", "org", "net", "edu", "gov", "mil", "int",
        "co", "io", "ai", "app", "dev", "tech", "info",
        "biz", "name", "pro", "us", "uk", "ca", "au",
        "de", "fr", "jp", "br", "in", "cn", "ru",
    }
)

MAX_DOMAIN_LENGTH = 253

_PROTOCOL = re.compile(r"^https?://")
_IPV4 = re.compile(r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$")
_DOMAIN = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?(\.[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?)*$")


class DomainValidationError(ValueError):
    """Raised when a domain cannot be used as a custom domain."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


def normalize_domain(domain: str) -> str:
    """Lowercase ``domain`` and strip the protocol, ``www.`` prefix and trailing slash."""

    if not domain or not isinstance(domain, str):
        raise DomainValidationError("Domain must be a non-empty string", "INVALID_INPUT")

    normalized = _PROTOCOL.sub("", domain.lower().strip())
    if normalized.startswith("www."):
        normalized = normalized[4:]
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized.strip()


def validate_domain_format(domain: str) -> None:
    _check_format(normalize_domain(domain))


def validate_tld(domain: str) -> None:
    _check_tld(normalize_domain(domain))


def validate_domain(domain: str) -> str:
    """Return the normalized domain or raise :class:`DomainValidationError`.

    The checks run on exactly the value that is returned.
    """

    normalized = normalize_domain(domain)
    _check_format(normalized)
    _check_tld(normalized)
    return normalized


def is_valid_domain(domain: str) -> bool:
    try:
        validate_domain(domain)
    except DomainValidationError:
        return False
    return True


def _check_format(normalized: str) -> None:
    if not normalized:
        raise DomainValidationError("Domain cannot be empty", "EMPTY_DOMAIN")
    if "*" in normalized:
        raise DomainValidationError("Wildcard domains are not allowed", "WILDCARD_NOT_ALLOWED")
    if _IPV4.fullmatch(normalized):
        raise DomainValidationError("IP addresses are not allowed as domains", "IP_NOT_ALLOWED")
    if len(normalized) > MAX_DOMAIN_LENGTH:
        raise DomainValidationError(f"Domain name too long (max {MAX_DOMAIN_LENGTH} characters)", "TOO_LONG")
    if ".." in normalized:
        raise DomainValidationError("Domain cannot contain consecutive dots", "CONSECUTIVE_DOTS")
    if normalized[0] in ".-" or normalized[-1] in ".-":
        raise DomainValidationError("Domain cannot start or end with dots or hyphens", "INVALID_BOUNDARIES")
    if not _DOMAIN.fullmatch(normalized):
        raise DomainValidationError("Invalid domain format", "INVALID_FORMAT")


def _check_tld(normalized: str) -> None:
    parts = normalized.split(".")
    if len(parts) < 2:
        raise DomainValidationError("Domain must have at least one dot (e.g., example.com)", "MISSING_TLD")

    tld = parts[-1]
    if tld not in VALID_TLDS:
        raise DomainValidationError(f"TLD '{tld}' is not supported", "UNSUPPORTED_TLD")


__all__ = [
    "DomainValidationError",
    "VALID_TLDS",
    "is_valid_domain",
    "normalize_domain",
    "validate_domain",
    "validate_domain_format",
    "validate_tld",
]
