"""
Parsing of SLP service URLs and attribute lists as printed by SLP tools.
"""
from __future__ import annotations
import ipaddress
import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

_ESCAPE_RE = re.compile(r'\\([0-9a-fA-F]{2})')


@dataclass(frozen=True)
class ServiceUrl:
    """The parts of a ``service:`` URL."""
    srv_type: str
    host: str
    port: int
    path: str = ''


def parse_service_url(url: str) -> ServiceUrl:
    """
    Splits a service URL such as 'service:ldap://server.me:389' into its parts.

    A missing port is reported as 0, as libslp does.
    """
    srv_type, sep, rest = url.partition('://')
    if not sep or not srv_type:
        raise ValueError(f"Not a service URL: '{url}'")

    slash = rest.find('/')
    hostport, path = (rest, '') if slash == -1 else (rest[:slash], rest[slash:])
    host, port = _split_host_port(hostport, url)
    return ServiceUrl(srv_type=srv_type, host=host, port=port, path=path)


def _split_host_port(hostport: str, url: str) -> Tuple[str, int]:
    if hostport.startswith('['):
        end = hostport.find(']')
        if end == -1:
            raise ValueError(f"Missing closing ']' in '{url}'")
        host = hostport[1:end]
        rest = hostport[end + 1:]
        if rest and not rest.startswith(':'):
            raise ValueError(f"Unexpected text after ']' in '{url}'")
        port_str = rest[1:]
    else:
        host, _, port_str = hostport.partition(':')

    if not port_str:
        return host, 0
    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Invalid port '{port_str}' in '{url}'")
    if not 0 <= port < 65536:
        raise ValueError(f"Port out of range in '{url}'")
    return host, port


def parse_service_reply(line: str) -> Tuple[str, int]:
    """Splits a 'url,lifetime' reply line. A reply without lifetime reads as 0."""
    url, sep, lifetime = line.strip().rpartition(',')
    if not sep:
        return line.strip(), 0
    try:
        return url, int(lifetime)
    except ValueError:
        # The comma belonged to the URL itself
        return line.strip(), 0


def unescape(value: str) -> str:
    """Replaces RFC 2608 '\\xx' escapes with the characters they stand for."""
    return _ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), value)


def parse_attribute_list(attr_list: str) -> Dict[str, str]:
    """
    Parses an attribute list like '(description=Main LDAP),(port=389),secure'.

    Keywords (attributes without a value) map to an empty string and
    multi-valued attributes keep their comma separated values.
    """
    attributes: Dict[str, str] = {}
    for item in _split_top_level(attr_list.strip()):
        item = item.strip()
        if not item:
            continue
        if item.startswith('(') and item.endswith(')'):
            tag, _, value = item[1:-1].partition('=')
            attributes[unescape(tag.strip())] = unescape(value.strip())
        else:
            attributes[unescape(item)] = ''
    return attributes


def _split_top_level(attr_list: str) -> List[str]:
    """Splits on commas that are not inside parentheses."""
    items: List[str] = []
    depth = 0
    current: List[str] = []
    for char in attr_list:
        if char == '(':
            depth += 1
        elif char == ')':
            depth = max(0, depth - 1)
        if char == ',' and depth == 0:
            items.append(''.join(current))
            current = []
            continue
        current.append(char)
    items.append(''.join(current))
    return items


def is_ip_literal(host: str) -> bool:
    """True if host is an IPv4 or IPv6 address rather than a name."""
    try:
        ipaddress.ip_address(host.split('%')[0])
        return True
    except ValueError:
        return False
