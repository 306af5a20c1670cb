"""Verification workflow that tracks attempts for custom domain configurations."""
from __future__ import annotations

import logging
import secrets
import string
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..models import DnsRecordInstruction, DomainConfiguration, VerificationLogEntry, VerificationResult
from .validation import validate_domain
from .verifier import DomainVerifier, verification_record_name

LOGGER = logging.getLogger(__name__)

DEFAULT_CNAME_TARGET = "scheduled-platform.com"
TOKEN_PREFIX = "verify-domain-"
TOKEN_LENGTH = 26
RECORD_TTL = 300

METHOD_DNS_TXT = "DNS_TXT"
METHOD_CNAME = "CNAME"
SUPPORTED_METHODS = (METHOD_DNS_TXT, METHOD_CNAME)

_TOKEN_ALPHABET = string.ascii_lowercase + string.digits


def generate_verification_token() -> str:
    return TOKEN_PREFIX + "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def generate_dns_records(
    domain: str,
    token: str,
    cname_target: str = DEFAULT_CNAME_TARGET,
) -> List[DnsRecordInstruction]:
    """Return the records a domain owner has to publish for either method."""

    return [
        DnsRecordInstruction(type="TXT", name=verification_record_name(domain), value=token, ttl=RECORD_TTL),
        DnsRecordInstruction(type="CNAME", name=domain, value=cname_target, ttl=RECORD_TTL),
    ]


class DomainVerificationWorkflow:
    """Registers custom domains and records every verification attempt.

    Storing the configurations is left to the caller; the workflow only
    mutates the :class:`DomainConfiguration` objects it is handed.
    """

    def __init__(
        self,
        verifier: Optional[DomainVerifier] = None,
        *,
        cname_target: str = DEFAULT_CNAME_TARGET,
    ) -> None:
        self._verifier = verifier or DomainVerifier()
        self._cname_target = cname_target

    @property
    def verifier(self) -> DomainVerifier:
        return self._verifier

    @property
    def cname_target(self) -> str:
        return self._cname_target

    def register(self, domain: str, method: str = METHOD_DNS_TXT) -> DomainConfiguration:
        """Validate ``domain`` and issue a fresh verification token for it."""

        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported verification method: {method}")
        normalized = validate_domain(domain)
        token = generate_verification_token()
        LOGGER.info("Registered %s for %s verification", normalized, method)
        return DomainConfiguration(
            domain=normalized,
            verification_token=token,
            verification_method=method,
            dns_records=generate_dns_records(normalized, token, self._cname_target),
        )

    def verify(self, config: DomainConfiguration) -> DomainConfiguration:
        """Run one verification attempt and update ``config`` with its outcome."""

        attempt = config.next_attempt()
        now = datetime.now(timezone.utc)

        try:
            result = self._run_method(config)
        except ValueError as exc:
            LOGGER.warning("Verification of %s could not run: %s", config.domain, exc)
            config.logs.append(
                VerificationLogEntry(
                    attempt=attempt,
                    method=config.verification_method or METHOD_DNS_TXT,
                    status="FAILED",
                    error_message=f"Verification error: {exc}",
                    verification_data={
                        "expected": config.verification_token,
                        "found": None,
                        "record_name": config.record_name,
                        "error": str(exc),
                    },
                    response_time_ms=0,
                )
            )
            config.verification_status = "FAILED"
            config.last_checked_at = now
            return config

        config.logs.append(
            VerificationLogEntry(
                attempt=attempt,
                method=config.verification_method,
                status="SUCCESS" if result.success else "FAILED",
                error_message=result.error_message,
                verification_data=result.verification_data.as_dict(),
                response_time_ms=result.response_time_ms,
            )
        )
        config.last_checked_at = now
        if result.success:
            config.verification_status = "VERIFIED"
            config.is_active = True
            config.verified_at = now
        else:
            config.verification_status = "FAILED"
        LOGGER.info("Attempt %s for %s: %s", attempt, config.domain, config.verification_status)
        return config

    def verify_all(
        self,
        configs: Sequence[DomainConfiguration],
        *,
        concurrent: bool = False,
        max_workers: Optional[int] = None,
    ) -> List[DomainConfiguration]:
        """Verify several configurations, preserving the input order."""

        if not concurrent or len(configs) <= 1:
            return [self.verify(config) for config in configs]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.verify, configs))

    def _run_method(self, config: DomainConfiguration) -> VerificationResult:
        if config.verification_method == METHOD_DNS_TXT:
            return self._verifier.verify_domain_via_dns(config.domain, config.verification_token or "")
        if config.verification_method == METHOD_CNAME:
            return self._verifier.verify_domain_via_cname(config.domain, self._cname_target)
        raise ValueError(f"Unsupported verification method: {config.verification_method}")


__all__ = [
    "DEFAULT_CNAME_TARGET",
    "DomainVerificationWorkflow",
    "METHOD_CNAME",
    "METHOD_DNS_TXT",
    "SUPPORTED_METHODS",
    "generate_dns_records",
    "generate_verification_token",
]
