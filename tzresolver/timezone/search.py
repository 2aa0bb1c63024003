"""Interval lookups over zone period tables."""

import logging
from collections.abc import Iterable
from typing import NamedTuple, Optional, Union

from .catalog import ZoneCatalog
from .models import RawPeriod, ZoneNotFound

logger = logging.getLogger(__name__)


class AbbreviationMatch(NamedTuple):
    """A zone together with its period that matched an abbreviation search."""

    zone_name: str
    period: RawPeriod


def find_period(periods: Iterable[RawPeriod], instant_secs: int) -> Optional[RawPeriod]:
    """Select the period whose ``[from, until)`` window contains ``instant_secs``.

    When several periods qualify the first one in table order wins.
    """
    for period in periods:
        if period.contains(instant_secs):
            return period
    return None


def find_by_abbreviation(
    catalog: ZoneCatalog, abbreviation: str, instant_secs: int
) -> Union[AbbreviationMatch, ZoneNotFound]:
    """Find the first zone, in catalog order, using ``abbreviation`` at ``instant_secs``.

    Zones sharing an abbreviation at the same instant are tie-broken purely by
    catalog enumeration order. The scan stops at the first match and nothing is
    cached between calls.

    Args:
        catalog: Catalog to scan
        abbreviation: Abbreviation to match exactly
        instant_secs: Wall-clock instant in wall seconds

    Returns:
        AbbreviationMatch for the first hit, or ZoneNotFound carrying the abbreviation
    """
    for zone_name in catalog.all_zone_names():
        for period in catalog.periods_for(zone_name):
            if period.abbreviation == abbreviation and period.contains(instant_secs):
                logger.debug("Abbreviation %s matched zone %s", abbreviation, zone_name)
                return AbbreviationMatch(zone_name, period)

    return ZoneNotFound(identifier=abbreviation)
