"""DNS lookups used by the domain verifier."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol

import dns.exception
import dns.resolver

LOGGER = logging.getLogger(__name__)


class DnsLookupError(Exception):
    """DNS failure carrying a resolver-independent error code.

    Codes: ``ENOTFOUND`` (no such name), ``ENODATA`` (name exists without
    records of the requested type), ``ETIMEOUT``, ``ESERVFAIL`` (no
    nameserver could answer) and ``EDNS`` for anything else.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class ResolverProtocol(Protocol):
    """Interface the verifier expects from a DNS client."""

    def resolve_txt(self, name: str) -> List[List[str]]:  # pragma: no cover - runtime protocol
        """Return TXT records, each as the list of its character strings."""

    def resolve_cname(self, name: str) -> List[str]:  # pragma: no cover - runtime protocol
        """Return CNAME targets without the trailing dot."""

    def resolve_address(self, name: str) -> List[str]:  # pragma: no cover - runtime protocol
        """Return the A records of ``name``."""


class DnsPythonResolver:
    """:class:`ResolverProtocol` implementation backed by dnspython."""

    def __init__(
        self,
        *,
        nameservers: Optional[Iterable[str]] = None,
        timeout: Optional[float] = None,
        lifetime: Optional[float] = None,
        resolver: Optional[dns.resolver.Resolver] = None,
    ) -> None:
        self._resolver = resolver or dns.resolver.Resolver()
        if nameservers:
            self._resolver.nameservers = list(nameservers)
        if timeout is not None:
            self._resolver.timeout = float(timeout)
        if lifetime is not None:
            self._resolver.lifetime = float(lifetime)

    def resolve_txt(self, name: str) -> List[List[str]]:
        answer = self._query(name, "TXT")
        return [[chunk.decode("utf-8", errors="replace") for chunk in rdata.strings] for rdata in answer]

    def resolve_cname(self, name: str) -> List[str]:
        answer = self._query(name, "CNAME")
        return [rdata.target.to_text(omit_final_dot=True) for rdata in answer]

    def resolve_address(self, name: str) -> List[str]:
        answer = self._query(name, "A")
        return [rdata.address for rdata in answer]

    def _query(self, name: str, record_type: str) -> dns.resolver.Answer:
        LOGGER.debug("Resolving %s record for %s", record_type, name)
        try:
            return self._resolver.resolve(name, record_type)
        except dns.resolver.NXDOMAIN as exc:
            raise DnsLookupError("ENOTFOUND", f"{name} does not exist") from exc
        except dns.resolver.NoAnswer as exc:
            raise DnsLookupError("ENODATA", f"{name} has no {record_type} records") from exc
        except dns.exception.Timeout as exc:
            raise DnsLookupError("ETIMEOUT", f"{record_type} lookup for {name} timed out") from exc
        except dns.resolver.NoNameservers as exc:
            raise DnsLookupError("ESERVFAIL", f"No nameserver answered for {name}") from exc
        except dns.exception.DNSException as exc:
            raise DnsLookupError("EDNS", str(exc) or exc.__class__.__name__) from exc


__all__ = ["DnsLookupError", "DnsPythonResolver", "ResolverProtocol"]
