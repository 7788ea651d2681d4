"""
Exception types raised by slpquery.
"""
from __future__ import annotations


class SlpQueryError(Exception):
    """Base class for all slpquery errors."""


class MalformedServiceType(SlpQueryError, ValueError):
    """A discovered service type is neither ``service:name`` nor ``service:name:protocol``."""

    def __init__(self, service_type: str):
        super().__init__(f"Incorrect slp service type: {service_type!r}")
        self.service_type = service_type


class DnsResolutionFailure(SlpQueryError):
    """Reverse lookup of a discovered address failed."""

    def __init__(self, ip: str, reason: object = None):
        message = f"Could not resolve host name for {ip}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.ip = ip


class DiscoveryProviderError(SlpQueryError):
    """The SLP discovery backend failed to answer a query."""


class InvalidMatchPattern(SlpQueryError, ValueError):
    """A match criterion is not a valid regular expression."""

    def __init__(self, key: str, pattern: str, reason: object):
        super().__init__(f"Invalid pattern for '{key}': {pattern!r} ({reason})")
        self.key = key
        self.pattern = pattern
