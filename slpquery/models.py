from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .discovery.base import DiscoveryClient
    from .dns_cache import DnsReverseCache


@dataclass(frozen=True)
class TypeDescriptor:
    """A service type as enumerated by the discovery provider."""
    name: str
    protocol: str


@dataclass(frozen=True)
class RawDiscoveryRecord:
    """One service reply exactly as the discovery provider returned it."""
    ip: str
    port: int
    srv_type: str
    srv_url: str
    lifetime: int

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RawDiscoveryRecord:
        """
        Builds a record from a provider dictionary.

        Accepts both the snake_case field names and the keys used by the
        libslp based agents ('pcPort', 'pcSrvType', 'srvurl'). Meant for
        DiscoveryClient implementations that receive replies as dictionaries;
        SlptoolClient parses text and builds records directly.
        """
        def pick(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return default

        return cls(
            ip=pick('ip', default=''),
            port=int(pick('port', 'pcPort', default=0)),
            srv_type=pick('srv_type', 'pcSrvType', default=''),
            srv_url=pick('srv_url', 'srvurl', default=''),
            lifetime=int(pick('lifetime', default=0)),
        )


class AttributeMap(Mapping[str, str]):
    """
    Read-only, case-insensitive view of a service's SLP attributes.

    Unknown attributes are not an error: ``attrs.get('missing')`` and
    ``attrs.missing`` both return None.

    Attribute-style access is a convenience only: attributes named like the
    mapping methods (get, has, keys, items, values) are hidden behind those
    methods, so ``attrs['keys']`` is the reliable form.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        normalized: Dict[str, str] = {}
        for key, value in (values or {}).items():
            normalized[str(key).lower()] = '' if value is None else str(value)
        object.__setattr__(self, '_values', normalized)

    def has(self, key: str) -> bool:
        return key.lower() in self._values

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:  # type: ignore[override]
        return self._values.get(key.lower(), default)

    def __getitem__(self, key: str) -> str:
        return self._values[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __getattr__(self, name: str) -> Optional[str]:
        if name.startswith('_'):
            raise AttributeError(name)
        return self._values.get(name.lower())

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("AttributeMap is read-only")

    def __repr__(self) -> str:
        return f"AttributeMap({self._values!r})"


@dataclass(frozen=True)
class ServiceRecord:
    """A discovered service decorated with its host name and attributes."""
    name: str
    ip: str
    port: int
    protocol: str
    slp_type: str
    slp_url: str
    host: str
    lifetime: int
    attributes: AttributeMap = field(default_factory=AttributeMap, hash=False)
    match_params: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def construct(
        cls,
        name: str,
        raw: RawDiscoveryRecord,
        match_params: Mapping[str, Any],
        client: DiscoveryClient,
        dns_cache: DnsReverseCache,
    ) -> ServiceRecord:
        """
        Builds a record from a raw reply.

        Resolves the host name and fetches the attribute list over the
        network before any matching takes place, since attributes may be
        match criteria themselves.
        """
        from .service_types import protocol_of

        host = dns_cache.resolve(raw.ip)
        attributes = AttributeMap(client.get_attributes(raw.srv_url, raw.ip))
        return cls(
            name=name,
            ip=raw.ip,
            port=raw.port,
            protocol=protocol_of(raw.srv_type),
            slp_type=raw.srv_type,
            slp_url=raw.srv_url,
            host=host,
            lifetime=raw.lifetime,
            attributes=attributes,
            match_params=dict(match_params),
        )

    def verified(self) -> bool:
        """True when the record satisfies every stored match criterion."""
        from .matching import verify
        return verify(self, self.match_params)
