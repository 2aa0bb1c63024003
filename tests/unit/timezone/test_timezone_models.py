"""Unit tests for timezone data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from tzresolver.timezone.models import (
    UTC_DESCRIPTOR,
    Bound,
    BoundaryDate,
    DateValue,
    RawPeriod,
    TimezoneDescriptor,
    Weekday,
    ZoneNotFound,
    datetime_from_wall_seconds,
    wall_seconds,
)


class TestWallSeconds:
    """Test conversion between datetimes and wall seconds."""

    def test_wall_seconds_when_epoch_then_zero(self) -> None:
        assert wall_seconds(datetime(1, 1, 1)) == 0

    def test_wall_seconds_when_one_day_later_then_86400(self) -> None:
        assert wall_seconds(datetime(1, 1, 2)) == 86400

    def test_wall_seconds_when_aware_then_ignores_tzinfo(self) -> None:
        naive = datetime(2024, 1, 15, 12, 0, 0)
        aware = naive.replace(tzinfo=timezone.utc)

        assert wall_seconds(aware) == wall_seconds(naive)

    def test_wall_seconds_when_subsecond_then_truncated(self) -> None:
        base = datetime(2024, 1, 15, 12, 0, 0)

        assert wall_seconds(base.replace(microsecond=999_999)) == wall_seconds(base)

    def test_datetime_from_wall_seconds_when_round_trip_then_same_datetime(self) -> None:
        value = datetime(2024, 3, 10, 2, 0, 0)

        assert datetime_from_wall_seconds(wall_seconds(value)) == value


class TestWeekday:
    """Test ISO weekday mapping."""

    @pytest.mark.parametrize(
        ("iso", "expected"),
        [(1, Weekday.MONDAY), (4, Weekday.THURSDAY), (7, Weekday.SUNDAY)],
    )
    def test_from_iso_when_number_then_member(self, iso: int, expected: Weekday) -> None:
        assert Weekday.from_iso(iso) is expected

    def test_boundary_date_when_from_datetime_then_tags_weekday(self) -> None:
        boundary = BoundaryDate.from_datetime(datetime(2024, 3, 10, 2, 0, 0))

        assert boundary.weekday is Weekday.SUNDAY
        assert boundary.value == datetime(2024, 3, 10, 2, 0, 0)


class TestTimezoneDescriptor:
    """Test TimezoneDescriptor validation and helpers."""

    def test_utc_descriptor_when_default_then_unbounded_zero_offsets(self) -> None:
        assert UTC_DESCRIPTOR.full_name == "UTC"
        assert UTC_DESCRIPTOR.abbreviation == "UTC"
        assert UTC_DESCRIPTOR.offset_utc == 0
        assert UTC_DESCRIPTOR.offset_std == 0
        assert UTC_DESCRIPTOR.valid_from is Bound.MIN
        assert UTC_DESCRIPTOR.valid_until is Bound.MAX

    def test_descriptor_when_frozen_then_rejects_mutation(self) -> None:
        with pytest.raises(ValidationError):
            UTC_DESCRIPTOR.offset_utc = 60  # type: ignore[misc]

    def test_descriptor_when_equal_fields_then_equal_and_hashable(self) -> None:
        copy = TimezoneDescriptor(full_name="UTC", abbreviation="UTC")

        assert copy == UTC_DESCRIPTOR
        assert hash(copy) == hash(UTC_DESCRIPTOR)

    def test_descriptor_when_from_after_until_then_raises(self) -> None:
        with pytest.raises(ValidationError, match="must precede"):
            TimezoneDescriptor(
                full_name="Bad/Zone",
                abbreviation="BAD",
                valid_from=BoundaryDate.from_datetime(datetime(2024, 2, 1)),
                valid_until=BoundaryDate.from_datetime(datetime(2024, 1, 1)),
            )

    def test_descriptor_when_from_is_upper_sentinel_then_raises(self) -> None:
        with pytest.raises(ValidationError):
            TimezoneDescriptor(full_name="Bad/Zone", abbreviation="BAD", valid_from=Bound.MAX)

    def test_total_offset_when_dst_then_sums_components(self) -> None:
        edt = TimezoneDescriptor(
            full_name="America/New_York", abbreviation="EDT", offset_utc=-300, offset_std=60
        )

        assert edt.total_offset == -240

    def test_contains_when_bounded_then_half_open(self) -> None:
        start = datetime(2024, 3, 10, 2, 0, 0)
        end = datetime(2024, 11, 3, 2, 0, 0)
        descriptor = TimezoneDescriptor(
            full_name="America/New_York",
            abbreviation="EDT",
            offset_utc=-300,
            offset_std=60,
            valid_from=BoundaryDate.from_datetime(start),
            valid_until=BoundaryDate.from_datetime(end),
        )

        assert descriptor.contains(start)
        assert descriptor.contains(datetime(2024, 7, 1))
        assert not descriptor.contains(end)
        assert not descriptor.contains(datetime(2024, 1, 1))


class TestRawPeriod:
    """Test RawPeriod window semantics."""

    def test_contains_when_fully_unbounded_then_matches_everything(self) -> None:
        period = RawPeriod(Bound.MIN, Bound.MAX, 0, 0, "UTC")

        assert period.contains(0)
        assert period.contains(10**12)

    def test_contains_when_lower_unbounded_then_upper_exclusive(self) -> None:
        period = RawPeriod(Bound.MIN, 1000, 0, 0, "A")

        assert period.contains(999)
        assert not period.contains(1000)

    def test_contains_when_upper_unbounded_then_lower_inclusive(self) -> None:
        period = RawPeriod(1000, Bound.MAX, 0, 0, "A")

        assert period.contains(1000)
        assert not period.contains(999)

    def test_total_offset_when_dst_then_sums_seconds(self) -> None:
        assert RawPeriod(0, 1, -18000, 3600, "EDT").total_offset == -14400


class TestDateValue:
    """Test DateValue construction."""

    def test_from_datetime_when_microseconds_then_split_into_subsecond(self) -> None:
        value = DateValue.from_datetime(datetime(2024, 1, 15, 12, 30, 45, 123456))

        assert value.wall_clock == datetime(2024, 1, 15, 12, 30, 45)
        assert value.subsecond == 123456
        assert value.timezone == UTC_DESCRIPTOR

    def test_to_datetime_when_called_then_joins_parts(self) -> None:
        original = datetime(2024, 1, 15, 12, 30, 45, 500)

        assert DateValue.from_datetime(original).to_datetime() == original

    def test_date_value_when_aware_wall_clock_then_raises(self) -> None:
        with pytest.raises(ValidationError, match="naive"):
            DateValue(wall_clock=datetime(2024, 1, 15, tzinfo=timezone.utc))

    def test_date_value_when_wall_clock_has_microseconds_then_raises(self) -> None:
        with pytest.raises(ValidationError, match="sub-second"):
            DateValue(wall_clock=datetime(2024, 1, 15, 0, 0, 0, 1))

    def test_date_value_when_subsecond_out_of_range_then_raises(self) -> None:
        with pytest.raises(ValidationError):
            DateValue(wall_clock=datetime(2024, 1, 15), subsecond=1_000_000)


class TestZoneNotFound:
    """Test the not-found result value."""

    def test_message_when_created_then_names_identifier(self) -> None:
        not_found = ZoneNotFound(identifier="Nowhere/Zone")

        assert not_found.message == "No timezone found for: Nowhere/Zone"

    def test_not_found_when_same_identifier_then_equal(self) -> None:
        assert ZoneNotFound(identifier=15) == ZoneNotFound(identifier=15)
