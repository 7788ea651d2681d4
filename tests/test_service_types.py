"""Tests for building and parsing SLP service types."""
from __future__ import annotations

import pytest

from slpquery.errors import MalformedServiceType
from slpquery.models import TypeDescriptor
from slpquery.service_types import build, parse, protocol_of


class TestBuild:
    def test_name_only_gives_abstract_type(self) -> None:
        assert build("ldap") == "service:ldap"

    @pytest.mark.parametrize("name", ["ldap", "install.suse", "printer"])
    def test_protocol_equal_to_name_collapses(self, name: str) -> None:
        assert build(name, name) == f"service:{name}"

    def test_distinct_protocol_gives_concrete_type(self) -> None:
        assert build("install.suse", "ftp") == "service:install.suse:ftp"

    def test_empty_protocol_is_treated_as_absent(self) -> None:
        assert build("ldap", "") == "service:ldap"


class TestParse:
    def test_abstract_type(self) -> None:
        assert parse("service:ldap") == TypeDescriptor(name="ldap", protocol="ldap")

    def test_concrete_type(self) -> None:
        assert parse("service:install.suse:nfs") == TypeDescriptor(name="install.suse", protocol="nfs")

    @pytest.mark.parametrize("name,protocol", [("install.suse", "ftp"), ("printer", "lpr")])
    def test_parse_recovers_built_concrete_type(self, name: str, protocol: str) -> None:
        descriptor = parse(build(name, protocol))
        assert descriptor.name == name
        assert descriptor.protocol == protocol

    @pytest.mark.parametrize("bad", ["ldap", "service:a:b:c", "service:a:b:c:d"])
    def test_wrong_segment_count_raises(self, bad: str) -> None:
        with pytest.raises(MalformedServiceType) as excinfo:
            parse(bad)
        assert excinfo.value.service_type == bad

    def test_malformed_type_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse("nonsense")


def test_protocol_of_takes_last_segment() -> None:
    assert protocol_of("service:install.suse:ftp") == "ftp"
    assert protocol_of("service:ldap") == "ldap"
