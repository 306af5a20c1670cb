"""Domain ownership checks based on DNS records."""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from ..models import ConnectivityResult, VerificationData, VerificationRequest, VerificationResult
from .resolver import DnsPythonResolver, ResolverProtocol

LOGGER = logging.getLogger(__name__)

VERIFICATION_PREFIX = "_scheduled-verification"


def verification_record_name(domain: str) -> str:
    return f"{VERIFICATION_PREFIX}.{domain}"


def describe_txt_error(exc: Exception, record_name: str) -> str:
    """Translate a lookup failure into the message shown to the domain owner."""

    code = getattr(exc, "code", None)
    if code == "ENOTFOUND":
        return f"DNS TXT record not found for {record_name}"
    if code == "ENODATA":
        return f"No TXT records found for {record_name}"
    if code == "ETIMEOUT":
        return f"DNS lookup timeout for {record_name}"
    return f"DNS error: {_message(exc)}"


class DomainVerifier:
    """Proves control of a domain through published DNS records.

    None of the public methods raise: every lookup failure is returned as a
    result with ``success=False``. Timing covers the whole call, including
    failed lookups.
    """

    def __init__(
        self,
        resolver: Optional[ResolverProtocol] = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._resolver = resolver or DnsPythonResolver()
        self._clock = clock

    @property
    def resolver(self) -> ResolverProtocol:
        return self._resolver

    def verify(self, request: VerificationRequest) -> VerificationResult:
        return self.verify_domain_via_dns(request.domain, request.expected_token)

    def verify_domain_via_dns(self, domain: str, expected_token: str) -> VerificationResult:
        """Look for ``expected_token`` in the TXT records of the verification name."""

        started = self._clock()
        record_name = verification_record_name(domain)

        try:
            groups = self._resolver.resolve_txt(record_name)
            records = tuple(str(record) for group in groups for record in group)
        except Exception as exc:
            elapsed = self._elapsed_ms(started)
            LOGGER.warning("TXT verification lookup for %s failed: %s", record_name, _message(exc))
            return VerificationResult(
                success=False,
                error_message=describe_txt_error(exc, record_name),
                verification_data=VerificationData(expected=expected_token, found=None, record_name=record_name),
                response_time_ms=elapsed,
            )

        elapsed = self._elapsed_ms(started)
        if any(expected_token in record for record in records):
            LOGGER.info("Verified %s via TXT record in %sms", domain, elapsed)
            return VerificationResult(
                success=True,
                verification_data=VerificationData(expected=expected_token, found=records, record_name=record_name),
                response_time_ms=elapsed,
            )

        return VerificationResult(
            success=False,
            error_message=f"Verification token not found in DNS TXT records. Expected: {expected_token}",
            verification_data=VerificationData(
                expected=expected_token,
                found=records or None,
                record_name=record_name,
            ),
            response_time_ms=elapsed,
        )

    def verify_domain_via_cname(self, domain: str, expected_target: str) -> VerificationResult:
        """Require a CNAME on ``domain`` pointing exactly at ``expected_target``."""

        started = self._clock()

        try:
            records = tuple(str(target) for target in self._resolver.resolve_cname(domain))
        except Exception as exc:
            elapsed = self._elapsed_ms(started)
            LOGGER.warning("CNAME verification lookup for %s failed: %s", domain, _message(exc))
            return VerificationResult(
                success=False,
                error_message=f"CNAME lookup failed: {_message(exc)}",
                verification_data=VerificationData(expected=expected_target, found=None, record_name=domain),
                response_time_ms=elapsed,
            )

        elapsed = self._elapsed_ms(started)
        if expected_target in records:
            LOGGER.info("Verified %s via CNAME in %sms", domain, elapsed)
            return VerificationResult(
                success=True,
                verification_data=VerificationData(expected=expected_target, found=records, record_name=domain),
                response_time_ms=elapsed,
            )

        return VerificationResult(
            success=False,
            error_message=f"CNAME record does not match expected target: {expected_target}",
            verification_data=VerificationData(expected=expected_target, found=records or None, record_name=domain),
            response_time_ms=elapsed,
        )

    def check_domain_connectivity(self, domain: str) -> ConnectivityResult:
        started = self._clock()
        try:
            self._resolver.resolve_address(domain)
        except Exception as exc:
            LOGGER.warning("Connectivity check for %s failed: %s", domain, _message(exc))
            return ConnectivityResult(
                success=False,
                error_message=f"Domain connectivity check failed: {_message(exc)}",
                response_time_ms=self._elapsed_ms(started),
            )
        return ConnectivityResult(success=True, response_time_ms=self._elapsed_ms(started))

    def _elapsed_ms(self, started: float) -> int:
        return int(round((self._clock() - started) * 1000))


def _message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc) or exc.__class__.__name__


__all__ = ["DomainVerifier", "VERIFICATION_PREFIX", "describe_txt_error", "verification_record_name"]
