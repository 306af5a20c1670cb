"""Factory helpers for constructing importer and verifier components from configuration."""
from __future__ import annotations

import importlib
from typing import Any, Dict

from .config import ConfigurationError, get_section
from .domains.resolver import DnsPythonResolver, ResolverProtocol
from .domains.verifier import DomainVerifier
from .domains.workflow import DEFAULT_CNAME_TARGET, DomainVerificationWorkflow
from .ingestion.importer import DEFAULT_PREVIEW_LIMIT, AppointmentImporter
from .rate_limit import DelayPolicy, RateLimitedResolver, RateLimiter


def _load_class(path: str):
    module_name, _, attr = path.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Invalid resolver class path '{path}'")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError as exc:
        raise ConfigurationError(f"Module '{module_name}' does not define '{attr}'") from exc


def build_importer(config: Dict[str, Any]) -> AppointmentImporter:
    """Create an :class:`AppointmentImporter` from the ``importer`` section."""

    section = get_section(config, "importer")
    try:
        preview_limit = int(section.get("preview_limit", DEFAULT_PREVIEW_LIMIT))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("'importer.preview_limit' must be an integer") from exc

    return AppointmentImporter(
        field_synonyms=section.get("field_synonyms") or None,
        column_overrides=section.get("column_overrides") or None,
        preview_limit=preview_limit,
    )


def build_resolver(config: Dict[str, Any]) -> ResolverProtocol:
    """Instantiate the resolver described by the ``resolver`` section."""

    section = get_section(config, "resolver")
    class_path = section.get("class")
    options = section.get("options", {}) or {}

    resolver_cls = _load_class(class_path) if class_path else DnsPythonResolver
    resolver = resolver_cls(**options)

    delay_seconds = float(section.get("delay_seconds", 0) or 0)
    calls_per_minute = section.get("rate_limit_per_minute")
    if not delay_seconds and not calls_per_minute:
        return resolver

    rate_limiter = RateLimiter(float(calls_per_minute)) if calls_per_minute else RateLimiter(None)
    return RateLimitedResolver(
        resolver,
        delay_policy=DelayPolicy(delay_seconds=delay_seconds),
        rate_limiter=rate_limiter,
    )


def build_verifier(config: Dict[str, Any]) -> DomainVerifier:
    return DomainVerifier(build_resolver(config))


def build_workflow(config: Dict[str, Any]) -> DomainVerificationWorkflow:
    section = get_section(config, "verifier")
    return DomainVerificationWorkflow(
        build_verifier(config),
        cname_target=section.get("cname_target") or DEFAULT_CNAME_TARGET,
    )
