"""Tests for matching service records against criteria."""
from __future__ import annotations

import re

import pytest

from slpquery.errors import InvalidMatchPattern
from slpquery.matching import compile_criteria, field_value, verify
from slpquery.models import AttributeMap, ServiceRecord


@pytest.fixture
def record() -> ServiceRecord:
    return ServiceRecord(
        name="ldap",
        ip="10.10.10.10",
        port=389,
        protocol="ldap",
        slp_type="service:ldap",
        slp_url="service:ldap://server.me:389",
        host="server.me",
        lifetime=65535,
        attributes=AttributeMap({"Description": "Main LDAP server", "machine": "x86_64"}),
    )


def test_intrinsic_match_is_case_insensitive(record: ServiceRecord) -> None:
    assert verify(record, {"name": "LDAP"})


def test_attribute_match_is_substring(record: ServiceRecord) -> None:
    assert verify(record, {"description": "Main"})
    assert verify(record, {"description": "ldap serv"})


def test_attribute_key_is_case_insensitive(record: ServiceRecord) -> None:
    assert verify(record, {"DESCRIPTION": "main"})


def test_unknown_key_is_ignored(record: ServiceRecord) -> None:
    assert verify(record, {"bogusKey": "x"})


def test_all_criteria_must_hold(record: ServiceRecord) -> None:
    assert verify(record, {"name": "ldap", "machine": "x86"})
    assert not verify(record, {"name": "ldap", "machine": "ppc"})


def test_non_string_values_are_compared_as_text(record: ServiceRecord) -> None:
    assert verify(record, {"port": 389})
    assert verify(record, {"lifetime": "^65535$"})
    assert not verify(record, {"port": 636})


def test_patterns_are_regular_expressions(record: ServiceRecord) -> None:
    assert verify(record, {"host": r"^server\.me$"})
    assert not verify(record, {"host": r"^me"})


def test_precompiled_pattern_gets_ignorecase(record: ServiceRecord) -> None:
    assert verify(record, {"slp_url": re.compile("SERVER.ME")})


def test_intrinsic_field_wins_over_attribute() -> None:
    record = ServiceRecord(
        name="ldap", ip="10.0.0.1", port=389, protocol="ldap", slp_type="service:ldap",
        slp_url="service:ldap://10.0.0.1:389", host="a.example.net", lifetime=10,
        attributes=AttributeMap({"name": "something else"}),
    )
    assert field_value(record, "name") == "ldap"
    assert verify(record, {"name": "^ldap$"})


def test_empty_criteria_verify(record: ServiceRecord) -> None:
    assert verify(record, {})


def test_invalid_pattern_raises() -> None:
    with pytest.raises(InvalidMatchPattern) as excinfo:
        compile_criteria({"description": "main("})
    assert excinfo.value.key == "description"


def test_record_verified_uses_stored_criteria(record: ServiceRecord) -> None:
    import dataclasses

    matching = dataclasses.replace(record, match_params={"machine": "x86"})
    failing = dataclasses.replace(record, match_params={"machine": "s390"})
    assert matching.verified()
    assert not failing.verified()
