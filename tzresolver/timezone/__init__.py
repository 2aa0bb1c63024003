"""
Timezone package for tzresolver.

Resolves zone identifiers (zone names, abbreviations, hour offsets, compact
``±HHMM`` offsets and military letter codes) at a point in time into
bounded-validity descriptors, and converts date values between them.

Example usage:
    >>> from datetime import datetime
    >>> from tzresolver.timezone import DateValue, convert, resolve
    >>>
    >>> winter = datetime(2024, 1, 15, 12, 0, 0)
    >>> eastern = resolve("America/New_York", winter)
    >>> eastern.abbreviation, eastern.offset_utc
    ('EST', -300)
    >>>
    >>> noon_utc = DateValue.from_datetime(winter)
    >>> convert(noon_utc, eastern).wall_clock
    datetime.datetime(2024, 1, 15, 7, 0)
"""

from .abbreviations import AbbreviationIndex
from .catalog import BaseZoneCatalog, InMemoryZoneCatalog, PytzZoneCatalog, ZoneCatalog
from .clock import Clock
from .dates import shift_by_minutes
from .exceptions import (
    CatalogIntegrityError,
    InvalidInstantError,
    TimezoneError,
    UnknownZoneError,
    ZoneNotFoundError,
)
from .local import LocalZoneDetector, resolve_local
from .models import (
    UTC_DESCRIPTOR,
    Bound,
    BoundaryDate,
    DateValue,
    RawPeriod,
    TimezoneDescriptor,
    Weekday,
    ZoneNotFound,
)
from .resolver import ZoneResolver, instant_to_wall_seconds, period_to_descriptor
from .search import AbbreviationMatch, find_by_abbreviation, find_period
from .service import (
    convert,
    create_detector,
    create_resolver,
    diff,
    exists,
    get_detector,
    get_resolver,
    local,
    reset_service,
    resolve,
)

__all__ = [
    "UTC_DESCRIPTOR",
    "AbbreviationIndex",
    "AbbreviationMatch",
    "BaseZoneCatalog",
    "Bound",
    "BoundaryDate",
    "CatalogIntegrityError",
    "Clock",
    "DateValue",
    "InMemoryZoneCatalog",
    "InvalidInstantError",
    "LocalZoneDetector",
    "PytzZoneCatalog",
    "RawPeriod",
    "TimezoneDescriptor",
    "TimezoneError",
    "UnknownZoneError",
    "Weekday",
    "ZoneCatalog",
    "ZoneNotFound",
    "ZoneNotFoundError",
    "ZoneResolver",
    "convert",
    "create_detector",
    "create_resolver",
    "diff",
    "exists",
    "find_by_abbreviation",
    "find_period",
    "get_detector",
    "get_resolver",
    "instant_to_wall_seconds",
    "local",
    "period_to_descriptor",
    "reset_service",
    "resolve",
    "shift_by_minutes",
]
