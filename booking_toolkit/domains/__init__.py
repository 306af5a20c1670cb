"""Custom domain validation and DNS based ownership verification."""

from .resolver import DnsLookupError, DnsPythonResolver, ResolverProtocol
from .validation import DomainValidationError, is_valid_domain, normalize_domain, validate_domain
from .verifier import DomainVerifier, verification_record_name
from .workflow import (
    DomainVerificationWorkflow,
    generate_dns_records,
    generate_verification_token,
)

__all__ = [
    "DnsLookupError",
    "DnsPythonResolver",
    "DomainValidationError",
    "DomainVerificationWorkflow",
    "DomainVerifier",
    "ResolverProtocol",
    "generate_dns_records",
    "generate_verification_token",
    "is_valid_domain",
    "normalize_domain",
    "validate_domain",
    "verification_record_name",
]
