"""
Reverse DNS cache for discovered service addresses.
"""
from __future__ import annotations
import logging
import socket
import threading
from typing import Callable, Dict, Mapping, Optional

from .errors import DnsResolutionFailure

logger = logging.getLogger("slpquery.dns")
logger.addHandler(logging.NullHandler())


def _reverse_lookup(ip: str) -> str:
    """Resolves an address to its host name using the system resolver."""
    hostname, _aliases, _addresses = socket.gethostbyaddr(ip)
    return hostname


class DnsReverseCache:
    """
    Maps IP addresses to host names, resolving each address only once.

    Entries live as long as the cache object and are never evicted. Failed
    lookups are not remembered, so a transient resolver error does not
    poison later queries for the same address.
    """

    def __init__(self, resolver: Optional[Callable[[str], str]] = None):
        self._resolver = resolver or _reverse_lookup
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def resolve(self, ip: str) -> str:
        host = self.find(ip)
        if host is not None:
            logger.debug("DNS cache hit for %s: %s", ip, host)
            return host

        try:
            host = self._resolver(ip)
        except (OSError, UnicodeError) as e:
            logger.debug("Reverse lookup for %s failed: %s", ip, e)
            raise DnsResolutionFailure(ip, e) from e

        logger.debug("Resolved %s to %s", ip, host)
        self.update({ip: host})
        return host

    def find(self, ip: str) -> Optional[str]:
        """Returns the cached host name for an address without any lookup."""
        with self._lock:
            return self._entries.get(ip)

    def update(self, entries: Mapping[str, str]) -> None:
        """Adds or replaces cache entries."""
        with self._lock:
            self._entries.update(entries)

    @property
    def entries(self) -> Dict[str, str]:
        """A snapshot of all cached entries."""
        with self._lock:
            return dict(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, ip: object) -> bool:
        with self._lock:
            return ip in self._entries


_default_cache: Optional[DnsReverseCache] = None


def get_default_cache() -> DnsReverseCache:
    """Returns the process-wide cache shared by default facades."""
    global _default_cache
    if _default_cache is None:
        _default_cache = DnsReverseCache()
    return _default_cache
