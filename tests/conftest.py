from __future__ import annotations

from typing import Dict, List, Tuple

import pytest

from booking_toolkit.domains.resolver import DnsLookupError


class StubResolver:
    """In-memory resolver answering from dictionaries keyed by record name."""

    def __init__(self) -> None:
        self.txt: Dict[str, List[List[str]]] = {}
        self.cname: Dict[str, List[str]] = {}
        self.addresses: Dict[str, List[str]] = {}
        self.errors: Dict[str, Exception] = {}
        self.queries: List[Tuple[str, str]] = []

    def resolve_txt(self, name: str) -> List[List[str]]:
        return self._lookup("TXT", name, self.txt)

    def resolve_cname(self, name: str) -> List[str]:
        return self._lookup("CNAME", name, self.cname)

    def resolve_address(self, name: str) -> List[str]:
        return self._lookup("A", name, self.addresses)

    def _lookup(self, record_type, name, table):
        self.queries.append((record_type, name))
        error = self.errors.get(record_type)
        if error is not None:
            raise error
        if name not in table:
            raise DnsLookupError("ENOTFOUND", f"{name} does not exist")
        return table[name]


@pytest.fixture()
def stub_resolver() -> StubResolver:
    return StubResolver()


@pytest.fixture()
def sample_export() -> str:
    return (
        "Customer,Email,Phone,Service,Date,Time,Duration,Price,Notes,Status\n"
        '"Doe, Jane",jane@example.com,555-0100,Haircut,01/15/2025,2:30 PM,45,$40.00,'
        '"Prefers window seat, bring coffee",confirmed\n'
        "John Smith,,,Shave,2025-01-16,9:05am,,,,\n"
        "\n"
        ",missing@example.com,,Color,2025-01-17,10:00,,,,\n"
        "Ann Lee,,,Trim,,11:00,,,,\n"
    )
