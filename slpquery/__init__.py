"""
Developer friendly querying of Service Location Protocol (SLP) services.

Builds service types, asks a discovery backend for replies and narrows them
down by service fields and attributes.
"""

from .dns_cache import DnsReverseCache, get_default_cache
from .errors import (
    DiscoveryProviderError,
    DnsResolutionFailure,
    InvalidMatchPattern,
    MalformedServiceType,
    SlpQueryError,
)
from .models import AttributeMap, RawDiscoveryRecord, ServiceRecord, TypeDescriptor
from .service import SlpService, find, find_all, get_default_service, types

__version__ = "0.1.0"

__all__ = [
    "AttributeMap",
    "DiscoveryProviderError",
    "DnsResolutionFailure",
    "DnsReverseCache",
    "InvalidMatchPattern",
    "MalformedServiceType",
    "RawDiscoveryRecord",
    "ServiceRecord",
    "SlpQueryError",
    "SlpService",
    "TypeDescriptor",
    "find",
    "find_all",
    "get_default_cache",
    "get_default_service",
    "types",
]
