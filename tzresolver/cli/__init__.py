"""CLI module for tzresolver.

Exit codes: 0 on success, 1 when an identifier cannot be resolved, 2 on usage
errors (reported by argparse).
"""

import argparse
import logging
from typing import Optional

from ..config.settings import TzResolverSettings, get_settings
from ..timezone.local import resolve_local
from ..timezone.models import DateValue, ZoneNotFound
from ..timezone.offsets import convert
from ..timezone.resolver import ZoneResolver
from ..timezone.service import create_detector, create_resolver
from ..utils.logging import setup_logging
from .parser import create_parser, parse_identifier, parse_instant

logger = logging.getLogger(__name__)


def _report_not_found(result: ZoneNotFound) -> int:
    print(result.message)
    return 1


def run_resolve(resolver: ZoneResolver, args: argparse.Namespace) -> int:
    result = resolver.resolve(args.identifier, args.at)
    if isinstance(result, ZoneNotFound):
        return _report_not_found(result)
    print(result.model_dump_json(indent=2))
    return 0


def run_convert(resolver: ZoneResolver, args: argparse.Namespace) -> int:
    """Convert ``args.timestamp`` from ``args.source`` to ``args.target``.

    Both zones are resolved at the timestamp's wall-clock value.
    """
    source = resolver.resolve(args.source, args.timestamp)
    if isinstance(source, ZoneNotFound):
        return _report_not_found(source)

    target = resolver.resolve(args.target, args.timestamp)
    if isinstance(target, ZoneNotFound):
        return _report_not_found(target)

    converted = convert(DateValue.from_datetime(args.timestamp, source), target)
    print(f"{converted.to_datetime().isoformat()} {converted.timezone.abbreviation}")
    return 0


def run_local(
    resolver: ZoneResolver, settings: TzResolverSettings, args: argparse.Namespace
) -> int:
    result = resolve_local(resolver, create_detector(resolver, settings), args.at)
    if isinstance(result, ZoneNotFound):
        return _report_not_found(result)
    print(result.model_dump_json(indent=2))
    return 0


def run_abbreviations(resolver: ZoneResolver) -> int:
    for abbreviation in sorted(resolver.abbreviation_index):
        print(abbreviation)
    return 0


def main_entry(argv: Optional[list[str]] = None) -> int:
    """Main entry point with argument parsing.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.config:
        settings = TzResolverSettings.from_yaml(args.config)
    else:
        settings = get_settings()

    setup_logging(settings, log_level=args.log_level)
    resolver = create_resolver(settings)
    logger.debug("Running %s command", args.command)

    if args.command == "resolve":
        return run_resolve(resolver, args)
    if args.command == "convert":
        return run_convert(resolver, args)
    if args.command == "local":
        return run_local(resolver, settings, args)
    return run_abbreviations(resolver)


__all__ = [
    "create_parser",
    "main_entry",
    "parse_identifier",
    "parse_instant",
    "run_abbreviations",
    "run_convert",
    "run_local",
    "run_resolve",
]
