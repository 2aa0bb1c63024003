"""Command-line argument parsing for tzresolver."""

import argparse
import re
from datetime import datetime
from typing import Union

from dateutil import parser as date_parser

_BARE_HOURS_RE = re.compile(r"^\d+$")


def parse_instant(value: str) -> datetime:
    """Parse an ISO 8601 timestamp for command-line arguments.

    The wall-clock fields are used as given; any offset in the text is dropped.

    Raises:
        argparse.ArgumentTypeError: If the timestamp cannot be parsed
    """
    try:
        return date_parser.isoparse(value).replace(tzinfo=None)
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            f"Invalid timestamp: {value}. Use ISO 8601, e.g. 2024-01-15T12:00:00"
        ) from err


def parse_identifier(value: str) -> Union[str, int]:
    """Turn unsigned digit strings into hour offsets, keep everything else as text.

    Signed values such as ``-5`` or ``+0200`` stay strings and are handled as
    compact offsets by the resolver.
    """
    if _BARE_HOURS_RE.match(value):
        return int(value)
    return value


def create_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser.

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["resolve", "EST", "--at", "2024-01-15T12:00:00"])
    """
    parser = argparse.ArgumentParser(
        prog="tzresolver",
        description="tzresolver - resolve timezone identifiers and convert wall-clock times",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s resolve America/New_York --at 2024-01-15T12:00:00
  %(prog)s resolve +0530
  %(prog)s convert 2024-07-01T09:30:00 --from Europe/Paris --to America/Chicago
  %(prog)s local
  %(prog)s abbreviations
        """,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    parser.add_argument("--config", help="YAML settings file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve an identifier to a descriptor")
    resolve_parser.add_argument(
        "identifier",
        type=parse_identifier,
        help="Zone name, abbreviation, hour offset, ±HHMM offset, letter code, Z/UT/GMT",
    )
    resolve_parser.add_argument(
        "--at", type=parse_instant, help="Wall-clock instant (default: now, UTC)"
    )

    convert_parser = subparsers.add_parser(
        "convert", help="Convert a wall-clock time between zones"
    )
    convert_parser.add_argument("timestamp", type=parse_instant, help="Wall-clock time to convert")
    convert_parser.add_argument(
        "--from", dest="source", type=parse_identifier, default="UTC", help="Source zone"
    )
    convert_parser.add_argument(
        "--to", dest="target", type=parse_identifier, required=True, help="Target zone"
    )

    local_parser = subparsers.add_parser("local", help="Resolve the host's local zone")
    local_parser.add_argument(
        "--at", type=parse_instant, help="Wall-clock instant (default: now, UTC)"
    )

    subparsers.add_parser("abbreviations", help="List every known zone abbreviation")

    return parser


__all__ = ["create_parser", "parse_identifier", "parse_instant"]
