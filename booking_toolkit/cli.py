"""Command line interface for previewing imports and verifying custom domains."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

from .config import ConfigurationError, get_section, load_configuration
from .domains.validation import DomainValidationError, validate_domain
from .domains.workflow import DEFAULT_CNAME_TARGET, generate_dns_records, generate_verification_token
from .factory import build_importer, build_verifier
from .ingestion.exporters import export_appointments
from .ingestion.mapping import MissingColumnError


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Import appointment exports and verify custom booking domains",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    preview = subparsers.add_parser("preview", help="Show how an export would be imported")
    preview.add_argument("input", help="Path to the exported appointments (CSV, TSV or Excel)")
    preview.add_argument("--limit", type=int, default=None, help="Number of appointments to show")
    _add_common_options(preview)

    import_ = subparsers.add_parser("import", help="Normalise an export and write the appointments")
    import_.add_argument("input", help="Path to the exported appointments (CSV, TSV or Excel)")
    import_.add_argument("output", help="Path where the normalized appointments should be written")
    _add_common_options(import_)

    verify = subparsers.add_parser("verify", help="Verify domain ownership through DNS")
    verify.add_argument("domain", help="Custom domain to verify")
    verify.add_argument("token", help="Verification token (TXT) or expected target (CNAME)")
    verify.add_argument(
        "--method",
        choices=["txt", "cname"],
        default="txt",
        help="Which DNS record proves ownership",
    )
    _add_common_options(verify)

    check = subparsers.add_parser("check", help="Check that a domain resolves")
    check.add_argument("domain", help="Domain to resolve")
    _add_common_options(check)

    validate = subparsers.add_parser("validate", help="Validate a custom domain and list the records to publish")
    validate.add_argument("domain", help="Domain to validate")
    _add_common_options(validate)

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _print_json(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _run_preview(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    importer = build_importer(config)
    outcome = importer.import_file(args.input)
    preview = importer.generate_preview(outcome.appointments, args.limit)
    _print_json(
        {
            "mapping": {field: outcome.header[index] for field, index in outcome.mapping.items()},
            "total": preview.total,
            "skipped_rows": outcome.skipped_rows,
            "preview": [appointment.as_row() for appointment in preview.preview],
            "issues": list(preview.issues),
        }
    )
    return 0


def _run_import(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    importer = build_importer(config)
    outcome = importer.import_file(args.input)
    destination = export_appointments(outcome.appointments, args.output)
    logging.info("Imported %s appointments, skipped %s rows", len(outcome.appointments), outcome.skipped_rows)
    logging.info("Appointments written to %s", Path(destination).resolve())
    return 0


def _run_verify(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    verifier = build_verifier(config)
    if args.method == "cname":
        result = verifier.verify_domain_via_cname(args.domain, args.token)
    else:
        result = verifier.verify_domain_via_dns(args.domain, args.token)
    _print_json(result.as_dict())
    return 0 if result.success else 1


def _run_check(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    result = build_verifier(config).check_domain_connectivity(args.domain)
    _print_json(result.as_dict())
    return 0 if result.success else 1


def _run_validate(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    try:
        domain = validate_domain(args.domain)
    except DomainValidationError as exc:
        _print_json({"valid": False, "code": exc.code, "error_message": str(exc)})
        return 1

    cname_target = get_section(config, "verifier").get("cname_target") or DEFAULT_CNAME_TARGET
    token = generate_verification_token()
    records = generate_dns_records(domain, token, cname_target)
    _print_json({"valid": True, "domain": domain, "dns_records": [asdict(record) for record in records]})
    return 0


_COMMANDS = {
    "preview": _run_preview,
    "import": _run_import,
    "verify": _run_verify,
    "check": _run_check,
    "validate": _run_validate,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    try:
        config = load_configuration(args.config)
        return _COMMANDS[args.command](args, config)
    except (ConfigurationError, MissingColumnError, FileNotFoundError, ValueError) as exc:
        logging.error("%s", exc)
        return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
