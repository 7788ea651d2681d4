"""
SLP discovery backends.

The facade only depends on the DiscoveryClient protocol; SlptoolClient is
the backend used when none is given.
"""

from .base import DiscoveryClient
from .slptool import SlptoolClient

__all__ = [
    "DiscoveryClient",
    "SlptoolClient",
]
