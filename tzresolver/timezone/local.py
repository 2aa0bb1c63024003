"""Detection of the host's local timezone."""

import logging
import os
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Optional, Union

from .models import DateValue

if TYPE_CHECKING:
    from .resolver import Instant, Resolution, ZoneResolver

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_TIMEZONE = "UTC"

ETC_TIMEZONE = Path("/etc/timezone")
ETC_LOCALTIME = Path("/etc/localtime")

ZoneIdentifier = Union[str, int]


class LocalZoneDetector:
    """Detects the host timezone using multiple fallback strategies.

    Strategies, first hit wins: explicitly configured zone, the ``TZ``
    environment variable, ``/etc/timezone``, the ``/etc/localtime`` symlink,
    the system abbreviation, the system UTC offset in whole hours. When all
    fail the fallback zone is returned.
    """

    # System abbreviations that identify a single zone unambiguously enough
    TZ_ABBREV_MAP: ClassVar[dict[str, str]] = {
        "PST": "America/Los_Angeles",
        "PDT": "America/Los_Angeles",
        "EST": "America/New_York",
        "EDT": "America/New_York",
        "CST": "America/Chicago",
        "CDT": "America/Chicago",
        "MST": "America/Denver",
        "MDT": "America/Denver",
        "UTC": "UTC",
        "GMT": "UTC",
    }

    def __init__(
        self,
        configured_zone: Optional[str] = None,
        fallback_zone: str = DEFAULT_FALLBACK_TIMEZONE,
        zone_exists: Optional[Callable[[str], bool]] = None,
        etc_timezone: Path = ETC_TIMEZONE,
        etc_localtime: Path = ETC_LOCALTIME,
    ) -> None:
        """Initialize the detector.

        Args:
            configured_zone: Zone to report unconditionally when set
            fallback_zone: Zone reported when every strategy fails
            zone_exists: Validates detected zone names; all names pass when omitted
            etc_timezone: Path of the Debian-style timezone file
            etc_localtime: Path of the localtime symlink
        """
        self.configured_zone = configured_zone
        self.fallback_zone = fallback_zone
        self.zone_exists = zone_exists or (lambda name: True)
        self.etc_timezone = etc_timezone
        self.etc_localtime = etc_localtime

    def lookup_local(self, instant: Optional["Instant"] = None) -> ZoneIdentifier:
        """Return an identifier for the host zone in effect at ``instant``.

        The identifier is a zone name, or a whole-hour offset when only the
        system UTC offset is known.
        """
        if self.configured_zone:
            return self.configured_zone

        for strategy in (self._from_tz_env, self._from_etc_timezone, self._from_etc_localtime):
            name = strategy()
            if name and self.zone_exists(name):
                logger.debug("Detected local zone %s via %s", name, strategy.__name__)
                return name

        abbreviation = self._system_abbreviation()
        mapped = self.TZ_ABBREV_MAP.get(abbreviation)
        if mapped and self.zone_exists(mapped):
            return mapped

        offset_hours = self._system_offset_hours(instant)
        if offset_hours is not None:
            return offset_hours

        logger.warning(
            "Could not detect local timezone (abbreviation=%r), falling back to %s",
            abbreviation,
            self.fallback_zone,
        )
        return self.fallback_zone

    def _from_tz_env(self) -> Optional[str]:
        value = os.environ.get("TZ", "").strip().lstrip(":")
        if not value:
            return None
        if "zoneinfo/" in value:
            return value.split("zoneinfo/", 1)[1]
        return value

    def _from_etc_timezone(self) -> Optional[str]:
        try:
            return self.etc_timezone.read_text(encoding="utf-8").strip() or None
        except OSError:
            return None

    def _from_etc_localtime(self) -> Optional[str]:
        try:
            target = os.readlink(self.etc_localtime)
        except OSError:
            return None
        if "zoneinfo/" not in target:
            return None
        return target.split("zoneinfo/", 1)[1]

    def _system_abbreviation(self) -> str:
        return time.tzname[time.daylight] if time.daylight else time.tzname[0]

    def _system_offset_hours(self, instant: Optional["Instant"]) -> Optional[int]:
        if isinstance(instant, DateValue):
            moment = instant.wall_clock
        elif isinstance(instant, datetime):
            moment = instant.replace(tzinfo=None)
        else:
            moment = datetime.now()

        try:
            offset = moment.astimezone().utcoffset()
        except (OverflowError, OSError, ValueError):
            logger.debug("System offset unavailable for %s", moment, exc_info=True)
            return None
        if offset is None:
            return None

        seconds = int(offset.total_seconds())
        if seconds % 3600:
            return None
        return seconds // 3600


def resolve_local(
    resolver: "ZoneResolver",
    detector: LocalZoneDetector,
    instant: Optional["Instant"] = None,
) -> "Resolution":
    """Resolve the host zone at ``instant`` (default: now)."""
    if instant is None:
        instant = resolver.clock.now_utc()
    return resolver.resolve(detector.lookup_local(instant), instant)
