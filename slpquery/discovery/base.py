from __future__ import annotations
from typing import Mapping, Protocol, Sequence

from ..models import RawDiscoveryRecord


class DiscoveryClient(Protocol):
    """
    Protocol for SLP discovery backends.

    Every call may block on network I/O; timeouts and retries are the
    backend's business. Failures are raised as DiscoveryProviderError.
    """

    def find_services(self, service_type: str, scope: str) -> Sequence[RawDiscoveryRecord]:
        """Returns the replies for a service type, in no particular order."""
        ...

    def find_service_types(self, pattern: str, scope: str) -> Sequence[str]:
        """Returns the service types matching a pattern ('*' for all)."""
        ...

    def get_attributes(self, url: str, ip: str) -> Mapping[str, str]:
        """Fetches the attributes of one service instance by unicast."""
        ...
