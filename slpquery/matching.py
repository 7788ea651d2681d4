"""
Matching of discovered services against caller criteria.

Criteria are regular expressions searched case-insensitively anywhere in the
field value, so ``description='main'`` matches "Main LDAP server". A key is
looked up among the record's own fields first, then among its SLP
attributes. Keys known to neither are ignored.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional, TYPE_CHECKING

from .errors import InvalidMatchPattern

if TYPE_CHECKING:
    from .models import ServiceRecord

logger = logging.getLogger("slpquery.matching")
logger.addHandler(logging.NullHandler())

INTRINSIC_FIELDS: Dict[str, Callable[[ServiceRecord], Any]] = {
    'name': lambda record: record.name,
    'ip': lambda record: record.ip,
    'host': lambda record: record.host,
    'protocol': lambda record: record.protocol,
    'port': lambda record: record.port,
    'slp_type': lambda record: record.slp_type,
    'slp_url': lambda record: record.slp_url,
    'lifetime': lambda record: record.lifetime,
}


def compile_criteria(criteria: Mapping[str, Any]) -> Dict[str, re.Pattern]:
    """Compiles every criterion into a case-insensitive pattern."""
    compiled: Dict[str, re.Pattern] = {}
    for key, value in criteria.items():
        if isinstance(value, re.Pattern):
            compiled[key] = re.compile(value.pattern, value.flags | re.IGNORECASE)
            continue
        try:
            compiled[key] = re.compile(str(value), re.IGNORECASE)
        except re.error as e:
            raise InvalidMatchPattern(key, str(value), e) from e
    return compiled


def field_value(record: ServiceRecord, key: str) -> Optional[str]:
    """
    Returns the string value a criterion key refers to, or None when the key
    is neither an intrinsic field nor an attribute of the record.
    """
    accessor = INTRINSIC_FIELDS.get(key)
    if accessor is not None:
        return str(accessor(record))
    if record.attributes.has(key):
        return record.attributes.get(key)
    return None


def verify(record: ServiceRecord, match_params: Mapping[str, Any]) -> bool:
    """True when every criterion matches the record."""
    for key, pattern in compile_criteria(match_params).items():
        value = field_value(record, key)
        if value is None:
            continue
        if not pattern.search(value):
            logger.debug("Rejected %s: %s=%r does not match %r", record.slp_url, key, value, pattern.pattern)
            return False
    return True
