"""Wall-clock adjustment between two timezone descriptors."""

import logging

from .dates import shift_by_minutes
from .models import DateValue, TimezoneDescriptor

logger = logging.getLogger(__name__)


def diff(date: DateValue, target: TimezoneDescriptor) -> int:
    """Minutes to add to ``date``'s wall clock to express it in ``target``.

    Descriptors sharing a base UTC offset (one zone on either side of a DST
    change) differ only by their daylight-saving components. Otherwise the
    total offsets are compared.
    """
    origin = date.timezone
    if origin.offset_utc == target.offset_utc:
        return target.offset_std - origin.offset_std
    return (target.offset_utc + target.offset_std) - (origin.offset_utc + origin.offset_std)


def convert(date: DateValue, target: TimezoneDescriptor) -> DateValue:
    """Re-express ``date`` in ``target``.

    Returns a new DateValue with the wall clock shifted by :func:`diff`, the
    descriptor replaced by ``target`` and the sub-second part unchanged.
    """
    delta = diff(date, target)
    logger.debug(
        "Converting %s from %s to %s (%+d min)",
        date.wall_clock.isoformat(),
        date.timezone.full_name,
        target.full_name,
        delta,
    )
    shifted = shift_by_minutes(date, delta)
    return shifted.model_copy(update={"timezone": target, "subsecond": date.subsecond})
