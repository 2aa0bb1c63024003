"""Process-wide resolver and convenience functions.

The default resolver is created lazily from the current settings and shared by
every caller; it holds no mutable state after its abbreviation index is built.
"""

import logging
from typing import Any, Optional

from ..config.settings import TzResolverSettings, get_settings
from .catalog import PytzZoneCatalog
from .clock import Clock
from .local import LocalZoneDetector, resolve_local
from .models import DateValue, TimezoneDescriptor
from .offsets import convert as _convert
from .offsets import diff as _diff
from .resolver import Instant, Resolution, ZoneResolver

logger = logging.getLogger(__name__)

_resolver: Optional[ZoneResolver] = None
_detector: Optional[LocalZoneDetector] = None


def create_resolver(settings: Optional[TzResolverSettings] = None) -> ZoneResolver:
    """Build a resolver wired from ``settings`` (defaults to the global settings)."""
    settings = settings or get_settings()
    resolver = ZoneResolver(
        catalog=PytzZoneCatalog(zone_set=settings.zone_set),
        clock=Clock(test_time=settings.test_time),
        eager_index=settings.eager_abbreviation_index,
    )
    logger.debug("Created zone resolver (zone_set=%s)", settings.zone_set)
    return resolver


def create_detector(
    resolver: ZoneResolver, settings: Optional[TzResolverSettings] = None
) -> LocalZoneDetector:
    """Build a local zone detector validating names against ``resolver``'s catalog."""
    settings = settings or get_settings()
    return LocalZoneDetector(
        configured_zone=settings.local_timezone,
        fallback_zone=settings.fallback_timezone,
        zone_exists=resolver.catalog.zone_exists,
    )


def get_resolver() -> ZoneResolver:
    """Get the shared resolver instance."""
    if "_resolver" not in globals() or globals()["_resolver"] is None:
        globals()["_resolver"] = create_resolver()
    return globals()["_resolver"]


def get_detector() -> LocalZoneDetector:
    """Get the shared local zone detector."""
    if "_detector" not in globals() or globals()["_detector"] is None:
        globals()["_detector"] = create_detector(get_resolver())
    return globals()["_detector"]


def reset_service() -> None:
    """Drop the shared resolver and detector so they are rebuilt on next use."""
    globals()["_resolver"] = None
    globals()["_detector"] = None


def resolve(identifier: Any, instant: Optional[Instant] = None) -> Resolution:
    """Resolve an identifier with the shared resolver."""
    return get_resolver().resolve(identifier, instant)


def exists(identifier: Any) -> bool:
    """Check a zone name or abbreviation with the shared resolver."""
    return get_resolver().exists(identifier)


def local(instant: Optional[Instant] = None) -> Resolution:
    """Resolve the host zone at ``instant`` (default: now)."""
    return resolve_local(get_resolver(), get_detector(), instant)


def diff(date: DateValue, target: TimezoneDescriptor) -> int:
    """Minutes needed to re-express ``date`` in ``target``."""
    return _diff(date, target)


def convert(date: DateValue, target: TimezoneDescriptor) -> DateValue:
    """Re-express ``date`` in ``target``."""
    return _convert(date, target)
