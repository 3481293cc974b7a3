"""Pytest configuration and fixtures."""

# pylint: disable=redefined-outer-name

import asyncio
import os
from dataclasses import dataclass, field

import dns.rdataclass
import dns.rdatatype
import dns.resolver
import pytest

# Set test environment variables before importing application code
os.environ.setdefault("NAMESERVERS", "192.0.2.53")
os.environ["SENTRY_DSN"] = ""

# pylint: disable=wrong-import-position
from hostlookup.core.config import Settings
from hostlookup.dns.records import ResourceRecord, Result
from hostlookup.dns.resolver import reset_resolver

Key = tuple[str, dns.rdatatype.RdataType]


@dataclass
class FakeResolver:
    """Fake resolver with predefined results, errors and delays per query."""

    results: dict[Key, Result] = field(default_factory=dict)
    errors: dict[Key, Exception] = field(default_factory=dict)
    delays: dict[Key, float] = field(default_factory=dict)
    calls: list[tuple] = field(default_factory=list)

    def add(
        self,
        name: str,
        rdtype: dns.rdatatype.RdataType,
        *records: ResourceRecord,
        canonical_name: str = "",
    ) -> None:
        self.results[(name, rdtype)] = Result(
            name=name, canonical_name=canonical_name, records=tuple(records), ttl=300
        )

    def fail(
        self, name: str, rdtype: dns.rdatatype.RdataType, error: Exception
    ) -> None:
        self.errors[(name, rdtype)] = error

    async def resolve(
        self,
        name: str,
        rdtype: dns.rdatatype.RdataType,
        rdclass: dns.rdataclass.RdataClass = dns.rdataclass.IN,
    ) -> Result:
        self.calls.append((name, rdtype, rdclass))
        key = (name, rdtype)

        if key in self.delays:
            await asyncio.sleep(self.delays[key])

        if key in self.errors:
            raise self.errors[key]

        if key in self.results:
            return self.results[key]

        raise dns.resolver.NXDOMAIN()


@pytest.fixture
def fake_resolver():
    """Create an empty fake resolver."""
    return FakeResolver()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for testing, not read from .env."""
    return Settings(
        nameservers="192.0.2.53 198.51.100.53",
        dns_timeout=1.0,
        dns_lifetime=2.0,
        sentry_dsn=None,
        _env_file=None,
    )


@pytest.fixture(autouse=True)
def clear_default_resolver():
    """Reset the module-level resolver before and after each test."""
    reset_resolver()
    yield
    reset_resolver()
