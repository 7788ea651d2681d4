"""
Building and parsing of SLP service type strings.

A service type is either abstract (``service:ldap``) or concrete
(``service:install.suse:ftp``). See RFC 2608, Section 4.1.
"""
from __future__ import annotations
from typing import Optional

from .errors import MalformedServiceType
from .models import TypeDescriptor

SCHEME = 'service'
DELIMITER = ':'


def build(service_name: str, protocol: Optional[str] = None) -> str:
    """Returns the service type to query for a service name and optional protocol."""
    # A protocol equal to the name duplicates the abstract type and the
    # provider would answer nothing for it.
    if not protocol or protocol == service_name:
        return DELIMITER.join([SCHEME, service_name])
    return DELIMITER.join([SCHEME, service_name, protocol])


def parse(service_type: str) -> TypeDescriptor:
    """
    Parses a discovered service type into a TypeDescriptor.

    Raises MalformedServiceType unless the string has two or three parts.
    """
    type_parts = service_type.split(DELIMITER)
    if len(type_parts) == 2:
        name = protocol = type_parts[1]
    elif len(type_parts) == 3:
        name, protocol = type_parts[1], type_parts[2]
    else:
        raise MalformedServiceType(service_type)
    return TypeDescriptor(name=name, protocol=protocol)


def protocol_of(slp_type: str) -> str:
    """The last segment of a service type, e.g. 'ftp' for 'service:install.suse:ftp'."""
    return slp_type.rsplit(DELIMITER, 1)[-1]
