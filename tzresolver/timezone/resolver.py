"""Resolution of zone identifiers into bounded-validity timezone descriptors."""

import threading
from datetime import datetime
from typing import Any, Optional, Union

from ..utils.logging import get_logger
from .abbreviations import AbbreviationIndex
from .catalog import PytzZoneCatalog, ZoneCatalog
from .clock import Clock
from .exceptions import CatalogIntegrityError, InvalidInstantError, ZoneNotFoundError
from .models import (
    UTC_DESCRIPTOR,
    Bound,
    Boundary,
    BoundaryDate,
    DateValue,
    RawPeriod,
    TimezoneDescriptor,
    WallSeconds,
    ZoneNotFound,
    datetime_from_wall_seconds,
    wall_seconds,
)
from .query import (
    Abbreviation,
    CompactOffset,
    LetterCode,
    Named,
    NumericOffset,
    UtcShortcut,
    ZoneQuery,
    offset_zone_name,
    parse_zone_query,
)
from .search import AbbreviationMatch, find_by_abbreviation, find_period

logger = get_logger("timezone.resolver")

Instant = Union[datetime, DateValue, tuple]
Resolution = Union[TimezoneDescriptor, ZoneNotFound]


def instant_to_wall_seconds(instant: Instant) -> int:
    """Convert any accepted instant shape to wall seconds.

    Accepts a datetime (tzinfo ignored), a DateValue, or a
    ``((year, month, day), (hour, minute, second))`` tuple.

    Raises:
        InvalidInstantError: If the instant has another shape or invalid fields
    """
    if isinstance(instant, DateValue):
        return wall_seconds(instant.wall_clock)
    if isinstance(instant, datetime):
        return wall_seconds(instant)
    if isinstance(instant, tuple):
        try:
            (year, month, day), (hour, minute, second) = instant
            return wall_seconds(datetime(year, month, day, hour, minute, second))
        except (TypeError, ValueError) as e:
            raise InvalidInstantError(f"Invalid date/time tuple {instant!r}: {e}") from e
    raise InvalidInstantError(f"Unsupported instant type: {type(instant).__name__}")


def _boundary(secs: WallSeconds) -> Boundary:
    if isinstance(secs, Bound):
        return secs
    return BoundaryDate.from_datetime(datetime_from_wall_seconds(secs))


def _minutes(secs: int) -> int:
    # Truncate toward zero, not floor
    return int(secs / 60)


def period_to_descriptor(period: RawPeriod, zone_name: str) -> TimezoneDescriptor:
    """Normalize a catalog period of ``zone_name`` into a descriptor."""
    return TimezoneDescriptor(
        full_name=zone_name,
        abbreviation=period.abbreviation,
        offset_std=_minutes(period.std_offset),
        offset_utc=_minutes(period.utc_offset),
        valid_from=_boundary(period.from_wall),
        valid_until=_boundary(period.until_wall),
    )


class ZoneResolver:
    """Resolves zone identifiers at a point in time.

    The resolver owns its catalog and abbreviation index. The index is built at
    most once, either eagerly or on the first lookup that needs it, and is
    read-only afterwards; resolvers are safe to share between threads.
    """

    def __init__(
        self,
        catalog: Optional[ZoneCatalog] = None,
        abbreviation_index: Optional[AbbreviationIndex] = None,
        clock: Optional[Clock] = None,
        eager_index: bool = False,
    ) -> None:
        """Initialize the resolver.

        Args:
            catalog: Zone catalog to query. Defaults to the full pytz catalog.
            abbreviation_index: Prebuilt index. Built from the catalog when omitted.
            clock: Source of "now" for lookups without an explicit instant
            eager_index: Build the abbreviation index immediately
        """
        self.catalog: ZoneCatalog = catalog if catalog is not None else PytzZoneCatalog()
        self.clock = clock or Clock()
        self._abbreviation_index = abbreviation_index
        self._index_lock = threading.Lock()

        if eager_index:
            _ = self.abbreviation_index

    @property
    def abbreviation_index(self) -> AbbreviationIndex:
        """The catalog's abbreviation index, built on first access."""
        if self._abbreviation_index is None:
            with self._index_lock:
                if self._abbreviation_index is None:
                    self._abbreviation_index = AbbreviationIndex.build(self.catalog)
        return self._abbreviation_index

    def exists(self, identifier: Any) -> bool:
        """Check whether ``identifier`` is a catalog zone name or a known abbreviation."""
        if not isinstance(identifier, str):
            return False
        return self.catalog.zone_exists(identifier) or identifier in self.abbreviation_index

    def parse(self, identifier: Any) -> ZoneQuery:
        """Classify ``identifier`` against this resolver's catalog and index."""
        return parse_zone_query(
            identifier,
            is_zone=self.catalog.zone_exists,
            is_abbreviation=lambda abbr: abbr in self.abbreviation_index,
        )

    def resolve(self, identifier: Any, instant: Optional[Instant] = None) -> Resolution:
        """Resolve an identifier at a wall-clock instant.

        Args:
            identifier: Zone name, abbreviation, integer hour offset, ``±HHMM``
                string, military letter code, or one of Z / UT / GMT
            instant: datetime, DateValue or date/time tuple. Defaults to now (UTC).

        Returns:
            TimezoneDescriptor on success, or ZoneNotFound carrying ``identifier``

        Raises:
            InvalidInstantError: If ``instant`` has an unsupported shape
            CatalogIntegrityError: If a confirmed zone has no period for the instant
        """
        if instant is None:
            instant = self.clock.now_utc()
        secs = instant_to_wall_seconds(instant)

        result = self._resolve_query(self.parse(identifier), secs)
        if isinstance(result, ZoneNotFound):
            logger.verbose("No timezone found for %r", identifier)  # type: ignore[attr-defined]
            return ZoneNotFound(identifier=identifier)
        return result

    def resolve_or_raise(
        self, identifier: Any, instant: Optional[Instant] = None
    ) -> TimezoneDescriptor:
        """Resolve like :meth:`resolve` but raise ZoneNotFoundError on a miss."""
        result = self.resolve(identifier, instant)
        if isinstance(result, ZoneNotFound):
            raise ZoneNotFoundError(identifier)
        return result

    def _resolve_query(self, query: ZoneQuery, secs: int) -> Resolution:
        if isinstance(query, UtcShortcut):
            return UTC_DESCRIPTOR
        if isinstance(query, (LetterCode, NumericOffset, CompactOffset)):
            return self._lookup_zone(offset_zone_name(query.hours), secs)
        if isinstance(query, Named):
            return self._lookup_zone(query.name, secs)
        if isinstance(query, Abbreviation):
            return self._lookup_abbreviation(query.abbreviation, secs)
        return ZoneNotFound(identifier=query.identifier)

    def _lookup_zone(self, zone_name: str, secs: int) -> Resolution:
        if not self.catalog.zone_exists(zone_name):
            return ZoneNotFound(identifier=zone_name)

        period = find_period(self.catalog.periods_active_at(zone_name, secs), secs)
        if period is None:
            logger.error("Zone %s has no period covering wall second %d", zone_name, secs)
            raise CatalogIntegrityError(zone_name, secs)

        logger.debug("Resolved zone %s to period %s", zone_name, period.abbreviation)
        return period_to_descriptor(period, zone_name)

    def _lookup_abbreviation(self, abbreviation: str, secs: int) -> Resolution:
        match = find_by_abbreviation(self.catalog, abbreviation, secs)
        if isinstance(match, AbbreviationMatch):
            return period_to_descriptor(match.period, match.zone_name)
        return match
