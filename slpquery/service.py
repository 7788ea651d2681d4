"""
Developer friendly queries for SLP services.

Wraps the discovery backend so that finding a service and narrowing the
results by its properties and attributes is a single call.

Find one ldap service, or all of them::

    service = find('ldap')           # a ServiceRecord or None
    services = find_all('ldap')      # a list, possibly empty

Query with scope and protocol::

    find_all('install.suse', scope='some-scope', protocol='ftp')

Narrow the results by service attributes::

    find_all('install.suse', machine='x86_64')

Read the properties of a found service::

    service = find('ldap', port=389, description='main')
    service.name        # 'ldap'
    service.ip          # '10.10.10.10'
    service.port        # 389
    service.slp_type    # 'service:ldap'
    service.slp_url     # 'service:ldap://server.me:389'
    service.protocol    # 'ldap'
    service.host        # 'server.me'
    service.lifetime    # 65535
    service.attributes.description  # 'Main LDAP server'

Matching is case-insensitive and criteria are regular expressions searched
anywhere in the value.

List the available service types::

    for service_type in types():
        print(service_type.name, service_type.protocol)
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Iterator, List, Optional

from .configuration import DEFAULT_CONFIG
from .discovery import DiscoveryClient, SlptoolClient
from .dns_cache import DnsReverseCache, get_default_cache
from .matching import compile_criteria
from .models import ServiceRecord, TypeDescriptor
from . import service_types

logger = logging.getLogger("slpquery.service")
logger.addHandler(logging.NullHandler())


class SlpService:
    """Queries an SLP discovery backend and filters the replies."""

    def __init__(
        self,
        client: DiscoveryClient,
        dns_cache: Optional[DnsReverseCache] = None,
        default_scope: str = '',
    ):
        self.client = client
        self.dns_cache = dns_cache if dns_cache is not None else DnsReverseCache()
        self.default_scope = default_scope

    @classmethod
    def from_config(cls, config: Dict[str, Any], dns_cache: Optional[DnsReverseCache] = None) -> SlpService:
        """Builds a facade backed by slptool using the given configuration."""
        client = SlptoolClient(
            command=config.get('slptool_command', DEFAULT_CONFIG['slptool_command']),
            timeout=config.get('discovery_timeout_seconds', DEFAULT_CONFIG['discovery_timeout_seconds']),
        )
        return cls(client, dns_cache=dns_cache, default_scope=config.get('default_scope') or '')

    def find(self, service_name: str, scope: Optional[str] = None, protocol: Optional[str] = None,
             **criteria: Any) -> Optional[ServiceRecord]:
        """
        Returns the first discovered service matching all criteria, or None.

        Replies after the first match are not looked at, so their attributes
        are never fetched.
        """
        for service in self._iter_verified(service_name, scope, protocol, criteria):
            return service
        return None

    def all(self, service_name: str, scope: Optional[str] = None, protocol: Optional[str] = None,
            **criteria: Any) -> List[ServiceRecord]:
        """Returns every discovered service matching all criteria, in discovery order."""
        return list(self._iter_verified(service_name, scope, protocol, criteria))

    def types(self) -> List[TypeDescriptor]:
        """Returns the service types known on the network."""
        discovered = self.client.find_service_types('*', '')
        if not discovered:
            return []
        return [service_types.parse(slp_type) for slp_type in discovered]

    def _iter_verified(self, service_name: str, scope: Optional[str], protocol: Optional[str],
                       criteria: Dict[str, Any]) -> Iterator[ServiceRecord]:
        match_params = dict(criteria)
        if protocol is not None:
            match_params['protocol'] = protocol
        # Fail on a broken pattern before any network traffic
        compile_criteria(match_params)

        service_type = service_types.build(service_name, protocol)
        scope = self.default_scope if scope is None else scope
        logger.debug("Discovering %s in scope '%s'", service_type, scope)

        for raw in self.client.find_services(service_type, scope):
            service = ServiceRecord.construct(service_name, raw, match_params, self.client, self.dns_cache)
            if service.verified():
                yield service
            else:
                logger.debug("Skipping %s, criteria not met", raw.srv_url)


_default_service: Optional[SlpService] = None


def get_default_service() -> SlpService:
    """Returns a shared slptool backed facade using the process-wide DNS cache."""
    global _default_service
    if _default_service is None:
        _default_service = SlpService.from_config(DEFAULT_CONFIG, dns_cache=get_default_cache())
    return _default_service


def find(service_name: str, **params: Any) -> Optional[ServiceRecord]:
    return get_default_service().find(service_name, **params)


def find_all(service_name: str, **params: Any) -> List[ServiceRecord]:
    return get_default_service().all(service_name, **params)


def types() -> List[TypeDescriptor]:
    return get_default_service().types()
