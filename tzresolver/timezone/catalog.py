"""Zone catalogs: the source of zone names and their period tables.

The resolver only talks to the ``ZoneCatalog`` protocol. ``PytzZoneCatalog``
serves the IANA database bundled with pytz; ``InMemoryZoneCatalog`` serves
fixed tables.
"""

import logging
import re
import threading
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta
from typing import Any, NamedTuple, Optional, Protocol

import pytz
from dateutil import tz as dateutil_tz

from .exceptions import UnknownZoneError
from .models import Bound, RawPeriod, WallSeconds, wall_seconds

logger = logging.getLogger(__name__)

ZONE_SETS = ("all", "common")

# Fixed whole-hour zones that hour offsets and letter codes resolve to
OFFSET_ZONE_RE = re.compile(r"^Etc/GMT[+-]\d+$")

# Last year for which transitions are generated from a zone's POSIX rule
RULE_HORIZON_YEAR = 2100

# POSIX rules quote abbreviations that are not purely alphabetic, e.g. <-03>
_QUOTED_ABBREVIATION_RE = re.compile(r"<([^>]*)>")


class ZoneCatalog(Protocol):
    """Read-only access to zones and their ordered period tables."""

    def zone_exists(self, name: str) -> bool: ...

    def periods_for(self, name: str) -> Sequence[RawPeriod]: ...

    def periods_active_at(self, name: str, instant_secs: int) -> list[RawPeriod]: ...

    def all_zone_names(self) -> Sequence[str]: ...


class BaseZoneCatalog:
    """Shared behaviour for catalogs that can list a zone's periods."""

    def zone_exists(self, name: str) -> bool:
        raise NotImplementedError

    def periods_for(self, name: str) -> Sequence[RawPeriod]:
        raise NotImplementedError

    def all_zone_names(self) -> Sequence[str]:
        raise NotImplementedError

    def periods_active_at(self, name: str, instant_secs: int) -> list[RawPeriod]:
        """Return every period of ``name`` whose window contains ``instant_secs``.

        Periods come back in catalog order. Well-formed tables yield exactly one.
        """
        return [period for period in self.periods_for(name) if period.contains(instant_secs)]


class InMemoryZoneCatalog(BaseZoneCatalog):
    """Catalog over a fixed mapping of zone name to period table.

    Zone enumeration follows the mapping's insertion order.
    """

    def __init__(self, zones: Mapping[str, Sequence[RawPeriod]]) -> None:
        self._zones: dict[str, tuple[RawPeriod, ...]] = {
            name: tuple(periods) for name, periods in zones.items()
        }

    def zone_exists(self, name: str) -> bool:
        return name in self._zones

    def periods_for(self, name: str) -> Sequence[RawPeriod]:
        try:
            return self._zones[name]
        except KeyError:
            raise UnknownZoneError(name) from None

    def all_zone_names(self) -> Sequence[str]:
        return tuple(self._zones)



class RuleTransition(NamedTuple):
    """A transition generated from a zone's recurring POSIX rule."""

    instant: datetime
    utcoffset: timedelta
    dst: timedelta
    abbreviation: str


def read_posix_rule(name: str) -> Optional[str]:
    """Return the POSIX TZ footer of the TZif file pytz ships for ``name``.

    Version 1 files carry no footer; an empty footer means the zone has no
    rule beyond its last transition. Both give None.
    """
    with pytz.open_resource(name) as f:
        data = f.read()

    if data[:4] != b"TZif" or data[4:5] not in (b"2", b"3", b"4"):
        return None
    if not data.endswith(b"\n"):
        return None

    body = data[:-1]
    rule = body[body.rfind(b"\n") + 1 :].decode("ascii", errors="replace")
    return rule or None


def rule_transitions(
    rule: str, after: datetime, end_year: int = RULE_HORIZON_YEAR
) -> list[RuleTransition]:
    """Generate the transitions a POSIX TZ rule implies after ``after``.

    Args:
        rule: POSIX TZ string such as ``EST5EDT,M3.2.0,M11.1.0``
        after: Naive UTC instant; only later transitions are returned
        end_year: Last calendar year to generate transitions for

    Returns:
        Transitions in UTC order. Empty for fixed-offset rules and for rules
        dateutil cannot parse.
    """
    if "," not in rule:
        return []

    names: dict[str, str] = {}

    def _alias(match: "re.Match[str]") -> str:
        # dateutil only accepts alphabetic abbreviations
        alias = "TZIF" + chr(ord("A") + len(names))
        names[alias] = match.group(1)
        return alias

    try:
        zone = dateutil_tz.tzstr(_QUOTED_ABBREVIATION_RE.sub(_alias, rule), posix_offset=True)
    except ValueError:
        logger.debug("Unsupported POSIX rule %r, keeping last period open-ended", rule)
        return []
    if not zone.hasdst:
        return []

    reference = datetime(after.year, 1, 1)
    std_offset = zone.utcoffset(reference) - zone.dst(reference)

    # transitions() reports both instants as standard-time wall clocks
    instants = sorted(
        moment - std_offset
        for year in range(after.year, end_year + 1)
        for moment in zone.transitions(year)
        if moment - std_offset > after
    )

    result = []
    for index, instant in enumerate(instants):
        if index + 1 < len(instants):
            following = instants[index + 1]
        else:
            following = instant + timedelta(days=60)
        probe = instant + (following - instant) / 2 + std_offset
        abbreviation = zone.tzname(probe)
        result.append(
            RuleTransition(
                instant=instant,
                utcoffset=zone.utcoffset(probe),
                dst=zone.dst(probe),
                abbreviation=names.get(abbreviation, abbreviation),
            )
        )
    return result


def _seconds(delta: Optional[timedelta]) -> int:
    if delta is None:
        return 0
    return delta // timedelta(seconds=1)


def build_periods(tz: Any, rule: Optional[str] = None) -> tuple[RawPeriod, ...]:
    """Convert a pytz timezone into an ordered, wall-clock partitioned period table.

    Each transition's wall boundary is the UTC transition instant expressed in
    the outgoing period's total offset, so consecutive periods share their
    boundary. Zones without transitions become a single unbounded period.

    pytz tables stop in 2037. When ``rule`` is given, transitions it implies
    are appended up to ``RULE_HORIZON_YEAR``.

    Args:
        tz: A timezone object returned by ``pytz.timezone``
        rule: The zone's POSIX TZ rule, see :func:`read_posix_rule`

    Returns:
        Tuple of RawPeriod covering all wall-clock time
    """
    transitions = list(getattr(tz, "_utc_transition_times", None) or ())
    infos = list(getattr(tz, "_transition_info", None) or ())

    if not transitions or not infos:
        reference = datetime(2000, 1, 1)
        total = _seconds(tz.utcoffset(reference))
        dst = _seconds(tz.dst(reference))
        return (
            RawPeriod(
                from_wall=Bound.MIN,
                until_wall=Bound.MAX,
                utc_offset=total - dst,
                std_offset=dst,
                abbreviation=tz.tzname(reference) or "",
            ),
        )

    if rule:
        for extra in rule_transitions(rule, transitions[-1]):
            transitions.append(extra.instant)
            infos.append((extra.utcoffset, extra.dst, extra.abbreviation))

    starts: list[WallSeconds] = [Bound.MIN]
    for index in range(1, len(transitions)):
        outgoing_total = _seconds(infos[index - 1][0])
        starts.append(wall_seconds(transitions[index]) + outgoing_total)

    periods = []
    for index, (utcoffset, dst, tzname) in enumerate(infos):
        until: WallSeconds = starts[index + 1] if index + 1 < len(starts) else Bound.MAX
        total = _seconds(utcoffset)
        dst_secs = _seconds(dst)
        periods.append(
            RawPeriod(
                from_wall=starts[index],
                until_wall=until,
                utc_offset=total - dst_secs,
                std_offset=dst_secs,
                abbreviation=tzname or "",
            )
        )
    return tuple(periods)


class PytzZoneCatalog(BaseZoneCatalog):
    """Catalog over the IANA timezone database shipped with pytz.

    Period tables are built on first access per zone and cached for the
    lifetime of the catalog. Transitions after 2037 come from each zone's
    POSIX rule.
    """

    def __init__(self, zone_set: str = "all") -> None:
        """Initialize the catalog.

        Args:
            zone_set: ``"all"`` for every zone and link pytz knows, ``"common"``
                for pytz's curated list of commonly used zones. The ``Etc/GMT±N``
                fixed-offset zones are resolvable under both sets but only
                enumerated under ``"all"``.

        Raises:
            ValueError: If zone_set is not recognized
        """
        if zone_set not in ZONE_SETS:
            raise ValueError(f"zone_set must be one of {ZONE_SETS}, got {zone_set!r}")

        self.zone_set = zone_set
        # pytz's *_set objects are lazy and copy as empty; build from the lists
        if zone_set == "common":
            listed = frozenset(pytz.common_timezones)
        else:
            listed = frozenset(pytz.all_timezones)
        offset_zones = frozenset(
            name for name in pytz.all_timezones if OFFSET_ZONE_RE.match(name)
        )
        self._names = listed | offset_zones
        self._ordered_names = tuple(sorted(listed))
        self._periods: dict[str, tuple[RawPeriod, ...]] = {}
        self._lock = threading.Lock()

        logger.debug(
            "Initialized pytz zone catalog (%s zones, set=%s, tzdata %s)",
            len(self._ordered_names),
            zone_set,
            pytz.OLSON_VERSION,
        )

    @property
    def version(self) -> str:
        """Version of the IANA database backing this catalog."""
        return str(pytz.OLSON_VERSION)

    def zone_exists(self, name: str) -> bool:
        return isinstance(name, str) and name in self._names

    def all_zone_names(self) -> Sequence[str]:
        return self._ordered_names

    def periods_for(self, name: str) -> Sequence[RawPeriod]:
        cached = self._periods.get(name)
        if cached is not None:
            return cached

        if not self.zone_exists(name):
            raise UnknownZoneError(name)

        with self._lock:
            cached = self._periods.get(name)
            if cached is None:
                cached = build_periods(pytz.timezone(name), read_posix_rule(name))
                self._periods[name] = cached
                logger.debug("Built %d periods for zone %s", len(cached), name)
        return cached
