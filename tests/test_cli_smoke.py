"""Smoke tests for the CLI entry point."""
from __future__ import annotations

import json

import pandas as pd
import pytest

from booking_toolkit import __main__, cli
from booking_toolkit.cli import main
from booking_toolkit.domains.verifier import DomainVerifier


def _read_json(capsys: pytest.CaptureFixture[str]):
    return json.loads(capsys.readouterr().out)


def test_preview_reports_mapping_rows_and_skips(tmp_path, sample_export, capsys) -> None:
    input_path = tmp_path / "export.csv"
    input_path.write_text(sample_export, encoding="utf-8")

    exit_code = main(["preview", str(input_path), "--limit", "1"])

    assert exit_code == 0
    payload = _read_json(capsys)
    assert payload["mapping"]["client_name"] == "Customer"
    assert payload["mapping"]["date"] == "Date"
    assert payload["total"] == 2
    assert payload["skipped_rows"] == 2
    assert payload["preview"] == [
        {
            "client_name": "Doe, Jane",
            "client_email": "jane@example.com",
            "client_phone": "555-0100",
            "service_name": "Haircut",
            "date": "2025-01-15",
            "time": "14:30",
            "duration": 45,
            "price": 40.0,
            "notes": "Prefers window seat, bring coffee",
            "status": "confirmed",
        }
    ]
    assert payload["issues"] == []


def test_import_writes_normalized_appointments(tmp_path, sample_export) -> None:
    input_path = tmp_path / "export.csv"
    input_path.write_text(sample_export, encoding="utf-8")
    output_path = tmp_path / "out" / "appointments.csv"

    exit_code = main(["import", str(input_path), str(output_path)])

    assert exit_code == 0
    frame = pd.read_csv(output_path)
    assert frame["client_name"].tolist() == ["Doe, Jane", "John Smith"]
    assert frame["time"].tolist() == ["14:30", "09:05"]


def test_unsupported_input_exits_with_usage_error(tmp_path) -> None:
    input_path = tmp_path / "export.pdf"
    input_path.write_text("not tabular", encoding="utf-8")

    assert main(["preview", str(input_path)]) == 2


def test_unsupported_output_exits_with_usage_error(tmp_path, sample_export) -> None:
    input_path = tmp_path / "export.csv"
    input_path.write_text(sample_export, encoding="utf-8")

    assert main(["import", str(input_path), str(tmp_path / "appointments.json")]) == 2


def test_legacy_excel_input_exits_with_usage_error(tmp_path) -> None:
    input_path = tmp_path / "export.xls"
    input_path.write_bytes(b"\xd0\xcf\x11\xe0")

    assert main(["preview", str(input_path)]) == 2


def test_missing_configuration_exits_with_usage_error(tmp_path) -> None:
    assert main(["validate", "example.com", "--config", str(tmp_path / "absent.yaml")]) == 2


def test_validate_lists_records_for_valid_domain(tmp_path, capsys) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("verifier:\n  cname_target: edge.example.net\n", encoding="utf-8")

    exit_code = main(["validate", "https://www.Example.com/", "--config", str(config_path)])

    assert exit_code == 0
    payload = _read_json(capsys)
    assert payload["valid"] is True
    assert payload["domain"] == "example.com"
    txt, cname = payload["dns_records"]
    assert txt["name"] == "_scheduled-verification.example.com"
    assert txt["value"].startswith("verify-domain-")
    assert cname == {"type": "CNAME", "name": "example.com", "value": "edge.example.net", "ttl": 300}


def test_validate_rejects_ip_addresses(capsys) -> None:
    exit_code = main(["validate", "10.0.0.1"])

    assert exit_code == 1
    payload = _read_json(capsys)
    assert payload["valid"] is False
    assert payload["code"] == "IP_NOT_ALLOWED"


def test_verify_and_check_use_configured_verifier(monkeypatch, stub_resolver, capsys) -> None:
    stub_resolver.txt["_scheduled-verification.example.com"] = [["verify-domain-abc"]]
    monkeypatch.setattr(cli, "build_verifier", lambda config: DomainVerifier(stub_resolver))

    assert main(["verify", "example.com", "verify-domain-abc"]) == 0
    payload = _read_json(capsys)
    assert payload["success"] is True
    assert payload["verification_data"]["found"] == ["verify-domain-abc"]

    assert main(["verify", "example.com", "edge.example.net", "--method", "cname"]) == 1
    payload = _read_json(capsys)
    assert payload["error_message"].startswith("CNAME lookup failed")

    assert main(["check", "example.com"]) == 1
    assert "connectivity check failed" in _read_json(capsys)["error_message"]


def test_module_entry_point_delegates_to_cli(capsys) -> None:
    exit_code = __main__.main(["validate", "example.com"])

    assert exit_code == 0
    assert _read_json(capsys)["domain"] == "example.com"


def test_module_entry_point_without_arguments_shows_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = __main__.main([])

    captured = capsys.readouterr()
    assert "python -m booking_toolkit" in captured.out
    assert exit_code == 2
