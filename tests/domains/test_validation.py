import pytest

from booking_toolkit.domains.validation import (
    DomainValidationError,
    is_valid_domain,
    normalize_domain,
    validate_domain,
)


def test_normalize_domain_strips_protocol_www_and_slash():
    assert normalize_domain("  HTTPS://www.Example.com/ ") == "example.com"


@pytest.mark.parametrize("domain", ["example.com", "book.my-salon.co", "https://www.studio.io/"])
def test_valid_domains(domain):
    assert is_valid_domain(domain)


def test_validate_domain_returns_normalized_value():
    assert validate_domain("http://Booking.Example.COM") == "booking.example.com"


@pytest.mark.parametrize(
    ("domain", "code"),
    [
        ("", "INVALID_INPUT"),
        ("https://", "EMPTY_DOMAIN"),
        ("*.example.com", "WILDCARD_NOT_ALLOWED"),
        ("192.168.1.1", "IP_NOT_ALLOWED"),
        ("a" * 250 + ".com", "TOO_LONG"),
        ("example..com", "CONSECUTIVE_DOTS"),
        ("-example.com", "INVALID_BOUNDARIES"),
        ("example.com.", "INVALID_BOUNDARIES"),
        ("exa_mple.com", "INVALID_FORMAT"),
        ("localhost", "MISSING_TLD"),
        ("example.xyz", "UNSUPPORTED_TLD"),
    ],
)
def test_invalid_domains_report_a_code(domain, code):
    with pytest.raises(DomainValidationError) as excinfo:
        validate_domain(domain)

    assert excinfo.value.code == code
    assert not is_valid_domain(domain)


@pytest.mark.parametrize(
    ("domain", "expected"),
    [("example.com\n/", "example.com"), ("www.www.example.com", "www.example.com"), (" example.com/ ", "example.com")],
)
def test_validate_domain_returns_the_value_it_checked(domain, expected):
    assert validate_domain(domain) == expected


def test_embedded_newline_is_rejected():
    with pytest.raises(DomainValidationError) as excinfo:
        validate_domain("exam\nple.com")

    assert excinfo.value.code == "INVALID_FORMAT"
