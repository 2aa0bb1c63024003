"""Data models for timezone resolution and conversion."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

# Wall seconds are counted from the start of the proleptic Gregorian calendar
WALL_EPOCH = datetime(1, 1, 1)


class Bound(str, Enum):
    """Sentinels for the open ends of a validity window."""

    MIN = "min"
    MAX = "max"


class Weekday(str, Enum):
    """ISO weekdays, Monday first."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_iso(cls, iso_weekday: int) -> "Weekday":
        """Map an ISO weekday number (1 = Monday) to its member."""
        return list(cls)[iso_weekday - 1]


WallSeconds = Union[int, Bound]


class BoundaryDate(BaseModel):
    """A concrete wall-clock boundary tagged with its day of week."""

    weekday: Weekday
    value: datetime

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_datetime(cls, value: datetime) -> "BoundaryDate":
        return cls(weekday=Weekday.from_iso(value.isoweekday()), value=value)


Boundary = Union[Bound, BoundaryDate]


class TimezoneDescriptor(BaseModel):
    """A resolved timezone, valid over a bounded wall-clock window.

    Offsets are in minutes. ``offset_utc`` is the zone's base UTC offset and
    ``offset_std`` the daylight-saving component on top of it; the total
    offset from UTC is their sum.
    """

    full_name: str = Field(..., description="Canonical zone name or synthesized pseudo-zone name")
    abbreviation: str = Field(..., description="Short display code, e.g. EST")
    offset_std: int = Field(default=0, description="Daylight-saving component in minutes")
    offset_utc: int = Field(default=0, description="Base UTC offset in minutes")
    valid_from: Boundary = Bound.MIN
    valid_until: Boundary = Bound.MAX

    model_config = ConfigDict(frozen=True)

    @field_validator("valid_from")
    @classmethod
    def _from_not_max(cls, value: Boundary) -> Boundary:
        if value is Bound.MAX:
            raise ValueError("valid_from cannot be the upper sentinel")
        return value

    @field_validator("valid_until")
    @classmethod
    def _until_after_from(cls, value: Boundary, info: ValidationInfo) -> Boundary:
        if value is Bound.MIN:
            raise ValueError("valid_until cannot be the lower sentinel")
        start = info.data.get("valid_from")
        if isinstance(start, BoundaryDate) and isinstance(value, BoundaryDate):
            if start.value >= value.value:
                raise ValueError("valid_from must precede valid_until")
        return value

    @property
    def total_offset(self) -> int:
        """Total offset from UTC in minutes."""
        return self.offset_utc + self.offset_std

    def contains(self, wall: datetime) -> bool:
        """Check whether a wall-clock time falls inside the validity window."""
        if isinstance(self.valid_from, BoundaryDate) and wall < self.valid_from.value:
            return False
        if isinstance(self.valid_until, BoundaryDate) and wall >= self.valid_until.value:
            return False
        return True


UTC_DESCRIPTOR = TimezoneDescriptor(full_name="UTC", abbreviation="UTC")


class ZoneNotFound(BaseModel):
    """Result of a lookup that matched no zone, period or abbreviation."""

    identifier: Any

    model_config = ConfigDict(frozen=True)

    @property
    def message(self) -> str:
        return f"No timezone found for: {self.identifier}"


@dataclass(frozen=True)
class RawPeriod:
    """One entry of a zone's period table as supplied by the catalog.

    Offsets are in seconds: ``utc_offset`` is the base offset and
    ``std_offset`` the daylight-saving component. The window is
    ``[from_wall, until_wall)`` in wall seconds.
    """

    from_wall: WallSeconds
    until_wall: WallSeconds
    utc_offset: int
    std_offset: int
    abbreviation: str

    @property
    def total_offset(self) -> int:
        return self.utc_offset + self.std_offset

    def contains(self, secs: int) -> bool:
        """Check whether the window contains a wall-seconds instant."""
        if self.from_wall is not Bound.MIN and secs < self.from_wall:
            return False
        if self.until_wall is not Bound.MAX and secs >= self.until_wall:
            return False
        return True


class DateValue(BaseModel):
    """Minimal timezone-tagged date value read and produced by the converter.

    ``wall_clock`` holds whole seconds; the sub-second part lives in
    ``subsecond`` (microseconds) so conversions can carry it over unchanged.
    """

    wall_clock: datetime
    subsecond: int = Field(default=0, ge=0, le=999_999)
    timezone: TimezoneDescriptor = UTC_DESCRIPTOR

    model_config = ConfigDict(frozen=True)

    @field_validator("wall_clock")
    @classmethod
    def _naive_whole_seconds(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            raise ValueError("wall_clock must be a naive wall-clock datetime")
        if value.microsecond:
            raise ValueError("wall_clock must not carry sub-second precision, use subsecond")
        return value

    @classmethod
    def from_datetime(
        cls, value: datetime, timezone: Optional[TimezoneDescriptor] = None
    ) -> "DateValue":
        """Split a datetime into wall clock and sub-second parts.

        Any tzinfo on ``value`` is dropped; the wall-clock fields are kept as-is.
        """
        wall = value.replace(tzinfo=None, microsecond=0)
        return cls(
            wall_clock=wall,
            subsecond=value.microsecond,
            timezone=timezone or UTC_DESCRIPTOR,
        )

    def to_datetime(self) -> datetime:
        """Join wall clock and sub-second parts back into a naive datetime."""
        return self.wall_clock.replace(microsecond=self.subsecond)


def wall_seconds(value: datetime) -> int:
    """Seconds from ``WALL_EPOCH`` to the wall-clock fields of ``value``."""
    naive = value.replace(tzinfo=None, microsecond=0)
    return (naive - WALL_EPOCH) // timedelta(seconds=1)


def datetime_from_wall_seconds(secs: int) -> datetime:
    return WALL_EPOCH + timedelta(seconds=secs)
