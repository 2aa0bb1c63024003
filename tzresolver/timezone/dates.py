"""Date-value primitives used by the converter."""

from datetime import timedelta

from .exceptions import InvalidInstantError
from .models import DateValue


def shift_by_minutes(date: DateValue, minutes: int) -> DateValue:
    """Return a copy of ``date`` with its wall clock moved by ``minutes``.

    The descriptor and sub-second part are left untouched.

    Raises:
        InvalidInstantError: If the shifted wall clock falls outside the datetime range
    """
    if minutes == 0:
        return date
    try:
        shifted = date.wall_clock + timedelta(minutes=minutes)
    except OverflowError as e:
        raise InvalidInstantError(
            f"Shifting {date.wall_clock.isoformat()} by {minutes} minutes "
            "leaves the supported date range"
        ) from e
    return date.model_copy(update={"wall_clock": shifted})
