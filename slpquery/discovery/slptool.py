"""
Discovery backend that drives OpenSLP's ``slptool`` command.
"""
from __future__ import annotations
import logging
import shutil
import socket
import subprocess
from typing import Dict, List, Optional, Sequence

from ..errors import DiscoveryProviderError
from ..models import RawDiscoveryRecord
from ..parsing import is_ip_literal, parse_attribute_list, parse_service_reply, parse_service_url

logger = logging.getLogger("slpquery.slptool")
logger.addHandler(logging.NullHandler())


class SlptoolClient:
    """
    DiscoveryClient implementation on top of the slptool command line utility.

    slptool talks to the local SLP daemon or multicasts the request itself;
    whatever it prints on stdout is parsed into discovery records.
    """

    def __init__(self, command: str = "slptool", timeout: Optional[float] = 10.0):
        self.command = command
        self.timeout = timeout

    def _run(self, args: List[str], scope: str = '') -> List[str]:
        """Runs slptool and returns the non-empty lines of its output."""
        executable = shutil.which(self.command) or self.command
        cmd = [executable]
        if scope:
            cmd += ['-s', scope]
        cmd += args
        logger.debug("Running %s", ' '.join(cmd))
        try:
            # Opaque attribute values may hold bytes that are not valid UTF-8
            result = subprocess.run(cmd, capture_output=True, text=True, errors='replace', check=True,
                                    timeout=self.timeout)
        except FileNotFoundError:
            raise DiscoveryProviderError(f"'{self.command}' command not found. Is OpenSLP installed?")
        except subprocess.TimeoutExpired:
            raise DiscoveryProviderError(f"'{' '.join(args)}' timed out after {self.timeout} seconds")
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or '').strip() or f"exit status {e.returncode}"
            raise DiscoveryProviderError(f"slptool {args[0]} failed: {detail}") from e
        except OSError as e:
            raise DiscoveryProviderError(f"Could not run '{self.command}': {e}") from e
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def find_services(self, service_type: str, scope: str) -> Sequence[RawDiscoveryRecord]:
        records = []
        for line in self._run(['findsrvs', service_type], scope):
            url, lifetime = parse_service_reply(line)
            try:
                parsed = parse_service_url(url)
            except ValueError as e:
                raise DiscoveryProviderError(f"Unexpected slptool reply '{line}': {e}") from e
            records.append(RawDiscoveryRecord(
                ip=self._address_of(parsed.host),
                port=parsed.port,
                srv_type=parsed.srv_type,
                srv_url=url,
                lifetime=lifetime,
            ))
        logger.debug("findsrvs %s returned %d services", service_type, len(records))
        return records

    def find_service_types(self, pattern: str, scope: str) -> Sequence[str]:
        types: List[str] = []
        for line in self._run(['findsrvtypes', pattern], scope):
            types.extend(t.strip() for t in line.split(',') if t.strip())
        return types

    def get_attributes(self, url: str, ip: str) -> Dict[str, str]:
        attributes: Dict[str, str] = {}
        for line in self._run(['unicastfindattrs', ip, url]):
            attributes.update(parse_attribute_list(line))
        return attributes

    @staticmethod
    def _address_of(host: str) -> str:
        if is_ip_literal(host):
            return host
        try:
            return socket.getaddrinfo(host, None)[0][4][0]
        except (OSError, IndexError) as e:
            raise DiscoveryProviderError(f"Could not resolve service host '{host}': {e}") from e
