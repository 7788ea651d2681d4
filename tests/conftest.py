"""Shared test doubles for the discovery backend and the resolver."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import pytest

from slpquery.dns_cache import DnsReverseCache
from slpquery.errors import DiscoveryProviderError
from slpquery.models import RawDiscoveryRecord
from slpquery.service import SlpService


class FakeDiscoveryClient:
    """In-memory DiscoveryClient that records every call it receives."""

    def __init__(
        self,
        records: Optional[Sequence[RawDiscoveryRecord]] = None,
        attributes: Optional[Dict[str, Mapping[str, str]]] = None,
        service_types: Optional[Sequence[str]] = None,
    ):
        self.records = list(records or [])
        self.attributes = attributes or {}
        self.service_types = list(service_types or [])
        self.find_calls: List[Tuple[str, str]] = []
        self.type_calls: List[Tuple[str, str]] = []
        self.attribute_calls: List[Tuple[str, str]] = []
        self.fail_with: Optional[Exception] = None

    def find_services(self, service_type: str, scope: str) -> Sequence[RawDiscoveryRecord]:
        self.find_calls.append((service_type, scope))
        if self.fail_with:
            raise self.fail_with
        return list(self.records)

    def find_service_types(self, pattern: str, scope: str) -> Sequence[str]:
        self.type_calls.append((pattern, scope))
        return list(self.service_types)

    def get_attributes(self, url: str, ip: str) -> Mapping[str, str]:
        self.attribute_calls.append((url, ip))
        return dict(self.attributes.get(url, {}))


class CountingResolver:
    """Reverse lookup double that counts how often it is called."""

    def __init__(self, hosts: Optional[Dict[str, str]] = None, failing: Sequence[str] = ()):
        self.hosts = hosts or {}
        self.failing = set(failing)
        self.calls: List[str] = []

    def __call__(self, ip: str) -> str:
        self.calls.append(ip)
        if ip in self.failing:
            raise OSError(f"unknown host {ip}")
        return self.hosts.get(ip, f"host-{ip.replace('.', '-')}.example.net")


def make_record(ip: str, srv_type: str = "service:ldap", port: int = 389, lifetime: int = 65535) -> RawDiscoveryRecord:
    host_part = f"[{ip}]" if ':' in ip else ip
    return RawDiscoveryRecord(
        ip=ip,
        port=port,
        srv_type=srv_type,
        srv_url=f"{srv_type}://{host_part}:{port}",
        lifetime=lifetime,
    )


@pytest.fixture
def resolver() -> CountingResolver:
    return CountingResolver({"10.0.0.1": "backup.example.net", "10.0.0.2": "main.example.net"})


@pytest.fixture
def dns_cache(resolver: CountingResolver) -> DnsReverseCache:
    return DnsReverseCache(resolver=resolver)


@pytest.fixture
def ldap_client() -> FakeDiscoveryClient:
    backup, main = make_record("10.0.0.1"), make_record("10.0.0.2")
    return FakeDiscoveryClient(
        records=[backup, main],
        attributes={
            backup.srv_url: {"Description": "backup"},
            main.srv_url: {"Description": "Main LDAP server"},
        },
    )


@pytest.fixture
def slp(ldap_client: FakeDiscoveryClient, dns_cache: DnsReverseCache) -> SlpService:
    return SlpService(ldap_client, dns_cache=dns_cache)


@pytest.fixture
def provider_error() -> DiscoveryProviderError:
    return DiscoveryProviderError("slp daemon not running")
