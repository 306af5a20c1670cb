"""Unified data models for the appointment importer and the domain verifier."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

RawRow = List[str]
FieldMapping = Dict[str, int]

# Canonical order of the semantic appointment fields.
APPOINTMENT_FIELDS: Tuple[str, ...] = (
    "client_name",
    "client_email",
    "client_phone",
    "service_name",
    "date",
    "time",
    "duration",
    "price",
    "notes",
    "status",
)

REQUIRED_FIELDS: Tuple[str, ...] = ("client_name", "date", "time")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- Import Models ---

@dataclass(slots=True)
class ImportedAppointment:
    """Normalized appointment converted from a single row of an upload."""

    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    service_name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[int] = None
    price: Optional[float] = None
    notes: Optional[str] = None
    status: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """Return ``True`` when the client name, date and time are all present."""

        return all(getattr(self, name) for name in REQUIRED_FIELDS)

    def as_row(self) -> Dict[str, Any]:
        """Return the populated fields in canonical order."""

        row: Dict[str, Any] = {}
        for name in APPOINTMENT_FIELDS:
            value = getattr(self, name)
            if value is not None:
                row[name] = value
        return row


@dataclass(frozen=True, slots=True)
class ImportPreview:
    """Summary shown to the uploading user before the import is committed."""

    total: int
    preview: Tuple[ImportedAppointment, ...] = ()
    issues: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    """Appointments produced from one upload together with the mapping used."""

    appointments: List[ImportedAppointment]
    mapping: FieldMapping
    header: RawRow = field(default_factory=list)
    skipped_rows: int = 0


# --- Verification Models ---

@dataclass(frozen=True, slots=True)
class VerificationRequest:
    """Domain and token pair submitted for ownership verification."""

    domain: str
    expected_token: str


@dataclass(frozen=True, slots=True)
class VerificationData:
    """Diagnostic detail captured for a single verification attempt."""

    expected: str
    found: Optional[Tuple[str, ...]]
    record_name: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "expected": self.expected,
            "found": list(self.found) if self.found is not None else None,
            "record_name": self.record_name,
        }


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Structured verdict returned by the domain verifier."""

    success: bool
    verification_data: VerificationData
    response_time_ms: int
    error_message: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.success,
            "verification_data": self.verification_data.as_dict(),
            "response_time_ms": self.response_time_ms,
        }
        if self.error_message:
            payload["error_message"] = self.error_message
        return payload


@dataclass(frozen=True, slots=True)
class ConnectivityResult:
    """Outcome of a best-effort DNS reachability probe."""

    success: bool
    response_time_ms: int
    error_message: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success, "response_time_ms": self.response_time_ms}
        if self.error_message:
            payload["error_message"] = self.error_message
        return payload


# --- Domain Workflow Models ---

@dataclass(slots=True)
class DnsRecordInstruction:
    """A DNS record the domain owner is asked to publish."""

    type: str
    name: str
    value: str
    ttl: int = 300


@dataclass(slots=True)
class VerificationLogEntry:
    """One recorded verification attempt for a domain configuration."""

    attempt: int
    method: str
    status: str
    response_time_ms: int
    error_message: Optional[str] = None
    verification_data: Optional[Dict[str, Any]] = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass
class DomainConfiguration:
    """Custom domain awaiting (or holding) verified ownership."""

    domain: str
    verification_token: str
    verification_method: str = "DNS_TXT"
    verification_status: str = "PENDING"
    is_active: bool = False
    dns_records: List[DnsRecordInstruction] = field(default_factory=list)
    last_checked_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    logs: List[VerificationLogEntry] = field(default_factory=list)

    @property
    def record_name(self) -> str:
        return f"_scheduled-verification.{self.domain}"

    def next_attempt(self) -> int:
        return len(self.logs) + 1
