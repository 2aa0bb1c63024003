"""Parsing of zone identifiers into tagged zone queries.

Every identifier the resolver accepts is first turned into exactly one
query variant. Precedence, first match wins:

1. ``"Z"``, ``"UT"``, ``"GMT"``               -> UtcShortcut
2. ``0`` and the letters A, M, N, Y           -> LetterCode / NumericOffset(0)
3. integer hour offsets                       -> NumericOffset
4. ``"+HHMM"`` / ``"-H"`` style strings       -> CompactOffset
5. catalog zone names                         -> Named
6. indexed abbreviations                      -> Abbreviation
7. anything else                              -> Unresolvable
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

UTC_SHORTCUTS = frozenset({"Z", "UT", "GMT"})

# Military letter codes that alias fixed hour offsets
LETTER_CODES: dict[str, int] = {
    "A": 1,
    "M": 12,
    "N": -1,
    "Y": -12,
}

UTC_ZONE_NAME = "UTC"

# Leading digits only, as in "+0530" or "-5"; trailing text is ignored
COMPACT_OFFSET_RE = re.compile(r"^([+-])(\d+)")

# Magnitudes above this are read as HHMM and truncated to whole hours
COMPACT_HHMM_THRESHOLD = 100


@dataclass(frozen=True)
class UtcShortcut:
    token: str


@dataclass(frozen=True)
class LetterCode:
    letter: str
    hours: int


@dataclass(frozen=True)
class NumericOffset:
    hours: int


@dataclass(frozen=True)
class CompactOffset:
    token: str
    hours: int


@dataclass(frozen=True)
class Named:
    name: str


@dataclass(frozen=True)
class Abbreviation:
    abbreviation: str


@dataclass(frozen=True)
class Unresolvable:
    identifier: Any


ZoneQuery = Union[
    UtcShortcut, LetterCode, NumericOffset, CompactOffset, Named, Abbreviation, Unresolvable
]


def offset_zone_name(hours: int) -> str:
    """Synthesize the zone name for a whole-hour UTC offset.

    Zero maps to ``UTC``. Other offsets use POSIX ``Etc/GMT`` names, whose sign
    is inverted: UTC+5 is ``Etc/GMT-5``.
    """
    if hours == 0:
        return UTC_ZONE_NAME
    if hours > 0:
        return f"Etc/GMT-{hours}"
    return f"Etc/GMT+{-hours}"


def parse_compact_offset(token: str) -> Union[int, None]:
    """Parse a ``±HHMM`` or ``±H`` token into whole hours.

    Values above 100 keep only their leading hour digits, truncated toward
    zero, so ``+0530`` is 5 and ``+150`` is 1. The sign of the token is kept.

    Returns:
        Signed hours, or None when the token is not a sign followed by digits
    """
    match = COMPACT_OFFSET_RE.match(token)
    if match is None:
        return None

    sign, digits = match.groups()
    magnitude = int(digits)
    if magnitude > COMPACT_HHMM_THRESHOLD:
        magnitude //= 100
    return -magnitude if sign == "-" else magnitude


def _as_hours(identifier: Any) -> Union[int, None]:
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, int):
        return identifier
    if isinstance(identifier, float) and identifier.is_integer():
        return int(identifier)
    return None


def parse_zone_query(
    identifier: Any,
    is_zone: Callable[[str], bool],
    is_abbreviation: Callable[[str], bool],
) -> ZoneQuery:
    """Classify an identifier into a zone query.

    Args:
        identifier: Zone name, abbreviation, hour offset, compact offset or letter code
        is_zone: Predicate telling whether a string is a catalog zone name
        is_abbreviation: Predicate telling whether a string is an indexed abbreviation.
            Only consulted for strings that are not zone names.

    Returns:
        The matching ZoneQuery variant
    """
    hours = _as_hours(identifier)
    if hours is not None:
        return NumericOffset(hours)

    if not isinstance(identifier, str):
        return Unresolvable(identifier)

    if identifier in UTC_SHORTCUTS:
        return UtcShortcut(identifier)

    if identifier in LETTER_CODES:
        return LetterCode(identifier, LETTER_CODES[identifier])

    compact = parse_compact_offset(identifier)
    if compact is not None:
        return CompactOffset(identifier, compact)

    if is_zone(identifier):
        return Named(identifier)

    if is_abbreviation(identifier):
        return Abbreviation(identifier)

    return Unresolvable(identifier)
