import pytest

from booking_toolkit.domains.validation import DomainValidationError
from booking_toolkit.domains.verifier import DomainVerifier
from booking_toolkit.domains.workflow import (
    DomainVerificationWorkflow,
    generate_dns_records,
    generate_verification_token,
)
from booking_toolkit.models import DomainConfiguration


@pytest.fixture()
def workflow(stub_resolver):
    return DomainVerificationWorkflow(DomainVerifier(stub_resolver))


def test_generated_tokens_are_unique_and_prefixed():
    first, second = generate_verification_token(), generate_verification_token()

    assert first != second
    assert first.startswith("verify-domain-")
    assert len(first) == len("verify-domain-") + 26


def test_generate_dns_records():
    txt, cname = generate_dns_records("example.com", "verify-domain-abc", "target.example.net")

    assert (txt.type, txt.name, txt.value, txt.ttl) == ("TXT", "_scheduled-verification.example.com", "verify-domain-abc", 300)
    assert (cname.type, cname.name, cname.value) == ("CNAME", "example.com", "target.example.net")


def test_register_normalises_domain_and_issues_token(workflow):
    config = workflow.register("https://www.Example.com/")

    assert config.domain == "example.com"
    assert config.verification_status == "PENDING"
    assert config.is_active is False
    assert config.dns_records[0].value == config.verification_token
    assert config.dns_records[1].value == "scheduled-platform.com"


def test_register_rejects_invalid_domains(workflow):
    with pytest.raises(DomainValidationError):
        workflow.register("192.168.0.1")


def test_successful_txt_verification_activates_domain(workflow, stub_resolver):
    config = workflow.register("example.com")
    stub_resolver.txt[config.record_name] = [[config.verification_token]]

    workflow.verify(config)

    assert config.verification_status == "VERIFIED"
    assert config.is_active is True
    assert config.verified_at is not None
    assert config.last_checked_at is not None
    (entry,) = config.logs
    assert entry.attempt == 1
    assert entry.status == "SUCCESS"
    assert entry.verification_data["found"] == [config.verification_token]


def test_failed_attempts_are_logged_with_increasing_numbers(workflow):
    config = workflow.register("example.com")

    workflow.verify(config)
    workflow.verify(config)

    assert config.verification_status == "FAILED"
    assert config.is_active is False
    assert [entry.attempt for entry in config.logs] == [1, 2]
    assert all(entry.status == "FAILED" for entry in config.logs)
    assert "not found" in config.logs[0].error_message


def test_cname_method_uses_configured_target(stub_resolver):
    workflow = DomainVerificationWorkflow(DomainVerifier(stub_resolver), cname_target="edge.example.net")
    config = workflow.register("book.example.com", method="CNAME")
    stub_resolver.cname["book.example.com"] = ["edge.example.net"]

    workflow.verify(config)

    assert config.verification_status == "VERIFIED"
    assert stub_resolver.queries == [("CNAME", "book.example.com")]


def test_register_rejects_unknown_methods(workflow):
    with pytest.raises(ValueError, match="FILE_UPLOAD"):
        workflow.register("example.com", method="FILE_UPLOAD")


def test_unsupported_method_is_recorded_as_failed_attempt(workflow, stub_resolver):
    config = DomainConfiguration(
        domain="example.com",
        verification_token="verify-domain-abc",
        verification_method="FILE_UPLOAD",
    )

    workflow.verify(config)

    (entry,) = config.logs
    assert entry.status == "FAILED"
    assert entry.error_message == "Verification error: Unsupported verification method: FILE_UPLOAD"
    assert entry.response_time_ms == 0
    assert config.verification_status == "FAILED"
    assert stub_resolver.queries == []


def test_verify_all_preserves_order_when_concurrent(workflow, stub_resolver):
    configs = [workflow.register(f"shop{index}.example.com") for index in range(4)]
    for config in configs[::2]:
        stub_resolver.txt[config.record_name] = [[config.verification_token]]

    results = workflow.verify_all(configs, concurrent=True, max_workers=4)

    assert [config.domain for config in results] == [config.domain for config in configs]
    assert [config.verification_status for config in results] == ["VERIFIED", "FAILED", "VERIFIED", "FAILED"]
