"""Top-level package for the appointment import and domain verification toolkit."""

from . import models  # noqa: F401
from .domains import DomainVerificationWorkflow, DomainVerifier  # noqa: F401
from .ingestion import AppointmentImporter  # noqa: F401
from .models import (
    ConnectivityResult,
    DomainConfiguration,
    ImportedAppointment,
    ImportPreview,
    VerificationData,
    VerificationRequest,
    VerificationResult,
)

__all__ = [
    "AppointmentImporter",
    "ConnectivityResult",
    "DomainConfiguration",
    "DomainVerificationWorkflow",
    "DomainVerifier",
    "ImportedAppointment",
    "ImportPreview",
    "VerificationData",
    "VerificationRequest",
    "VerificationResult",
    "domains",
    "ingestion",
]
