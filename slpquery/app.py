"""
Command line front end for slpquery.

    python -m slpquery types
    python -m slpquery find ldap --match description=main
    python -m slpquery all install.suse --scope some-scope --protocol ftp
"""
from __future__ import annotations
import argparse
import logging
import sys
from typing import Dict, List, Optional

from . import configuration
from .errors import SlpQueryError
from .models import ServiceRecord
from .service import SlpService


def _parse_match(values: List[str]) -> Dict[str, str]:
    """Turns repeated KEY=PATTERN options into a criteria dictionary."""
    criteria: Dict[str, str] = {}
    for item in values:
        key, sep, pattern = item.partition('=')
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"Invalid --match '{item}'. Use KEY=PATTERN.")
        criteria[key.strip()] = pattern
    return criteria


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slpquery", description="Query SLP services on the network.")
    parser.add_argument("--config", help="Path to the YAML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("types", help="List the available service types")
    for command, text in (("find", "Show the first matching service"), ("all", "Show every matching service")):
        sub = subparsers.add_parser(command, help=text)
        sub.add_argument("service", help="Service name, e.g. ldap")
        sub.add_argument("--scope", help="SLP scope to search")
        sub.add_argument("--protocol", help="Concrete protocol of the service type, e.g. ftp")
        sub.add_argument("--match", action="append", default=[], metavar="KEY=PATTERN",
                         help="Filter on a service field or attribute (repeatable)")
    return parser


def format_service(service: ServiceRecord) -> str:
    lines = [
        service.slp_url,
        f"  name:     {service.name}",
        f"  protocol: {service.protocol}",
        f"  host:     {service.host} ({service.ip})",
        f"  port:     {service.port}",
        f"  lifetime: {service.lifetime}",
    ]
    for key, value in sorted(service.attributes.items()):
        lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """The main entry point for the command line."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = configuration.load_or_create_config(args.config)
    level = logging.DEBUG if args.verbose else str(config.get('log_level', 'WARNING')).upper()
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')

    slp = SlpService.from_config(config)
    try:
        if args.command == "types":
            for service_type in slp.types():
                print(f"{service_type.name}\t{service_type.protocol}")
            return 0

        try:
            criteria = _parse_match(args.match)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))

        if args.command == "find":
            service = slp.find(args.service, scope=args.scope, protocol=args.protocol, **criteria)
            if service is None:
                print(f"No '{args.service}' service found.", file=sys.stderr)
                return 1
            print(format_service(service))
            return 0

        for service in slp.all(args.service, scope=args.scope, protocol=args.protocol, **criteria):
            print(format_service(service))
        return 0
    except SlpQueryError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
