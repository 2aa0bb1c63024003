"""Unit tests for host timezone detection."""

import logging
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from tzresolver.timezone.clock import Clock
from tzresolver.timezone.local import LocalZoneDetector, resolve_local
from tzresolver.timezone.models import UTC_DESCRIPTOR
from tzresolver.timezone.resolver import ZoneResolver

KNOWN_ZONES = {
    "America/Chicago",
    "America/Los_Angeles",
    "Asia/Tokyo",
    "Europe/Paris",
    "UTC",
}


@pytest.fixture
def detector(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> LocalZoneDetector:
    """Detector with no TZ variable and /etc files redirected to tmp_path."""
    monkeypatch.delenv("TZ", raising=False)
    return LocalZoneDetector(
        zone_exists=KNOWN_ZONES.__contains__,
        etc_timezone=tmp_path / "timezone",
        etc_localtime=tmp_path / "localtime",
    )


class TestLookupLocal:
    """Test the detection strategies in order."""

    def test_lookup_when_configured_zone_then_returned_without_detection(self) -> None:
        detector = LocalZoneDetector(configured_zone="Europe/Paris")

        with patch.object(LocalZoneDetector, "_from_tz_env") as mock_env:
            assert detector.lookup_local() == "Europe/Paris"

        mock_env.assert_not_called()

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("America/Chicago", "America/Chicago"),
            (":Asia/Tokyo", "Asia/Tokyo"),
            ("/usr/share/zoneinfo/Europe/Paris", "Europe/Paris"),
        ],
    )
    def test_lookup_when_tz_variable_set_then_zone_from_variable(
        self, detector, monkeypatch, value, expected
    ) -> None:
        monkeypatch.setenv("TZ", value)

        assert detector.lookup_local() == expected

    def test_lookup_when_tz_variable_unknown_then_next_strategy(
        self, detector, monkeypatch, tmp_path
    ) -> None:
        monkeypatch.setenv("TZ", "Mars/Olympus")
        (tmp_path / "timezone").write_text("Asia/Tokyo\n", encoding="utf-8")

        assert detector.lookup_local() == "Asia/Tokyo"

    def test_lookup_when_localtime_symlink_then_zone_from_target(self, detector, tmp_path) -> None:
        target = tmp_path / "zoneinfo" / "America" / "Chicago"
        target.parent.mkdir(parents=True)
        target.write_bytes(b"TZif")
        (tmp_path / "localtime").symlink_to(target)

        assert detector.lookup_local() == "America/Chicago"

    def test_lookup_when_localtime_not_symlink_then_skipped(self, detector, tmp_path) -> None:
        (tmp_path / "localtime").write_bytes(b"TZif")

        with patch.object(LocalZoneDetector, "_system_abbreviation", return_value="PDT"):
            assert detector.lookup_local() == "America/Los_Angeles"

    def test_lookup_when_system_abbreviation_known_then_mapped_zone(self, detector) -> None:
        with patch.object(LocalZoneDetector, "_system_abbreviation", return_value="GMT"):
            assert detector.lookup_local() == "UTC"

    def test_lookup_when_only_offset_known_then_whole_hours(self, detector) -> None:
        with patch.object(LocalZoneDetector, "_system_abbreviation", return_value="XYZ"), \
                patch.object(LocalZoneDetector, "_system_offset_hours", return_value=-3):
            assert detector.lookup_local() == -3

    def test_lookup_when_nothing_detected_then_fallback_with_warning(
        self, tmp_path, monkeypatch, caplog
    ) -> None:
        monkeypatch.delenv("TZ", raising=False)
        detector = LocalZoneDetector(
            fallback_zone="Europe/Paris",
            etc_timezone=tmp_path / "timezone",
            etc_localtime=tmp_path / "localtime",
        )

        with patch.object(LocalZoneDetector, "_system_abbreviation", return_value="XYZ"), \
                patch.object(LocalZoneDetector, "_system_offset_hours", return_value=None), \
                caplog.at_level(logging.WARNING, logger="tzresolver.timezone.local"):
            assert detector.lookup_local() == "Europe/Paris"

        assert "falling back to Europe/Paris" in caplog.text


class TestSystemOffsetHours:
    """Test reading the host UTC offset."""

    def test_system_offset_when_called_then_int_or_none(self) -> None:
        result = LocalZoneDetector()._system_offset_hours(datetime(2024, 1, 15, 12, 0, 0))

        assert result is None or isinstance(result, int)


class TestResolveLocal:
    """Test resolving the detected host zone."""

    def test_resolve_local_when_zone_name_detected_then_descriptor(
        self, sample_resolver, winter_instant
    ) -> None:
        detector = LocalZoneDetector(configured_zone="Test/Eastern")

        descriptor = resolve_local(sample_resolver, detector, winter_instant)

        assert descriptor.full_name == "Test/Eastern"
        assert descriptor.abbreviation == "XST"

    def test_resolve_local_when_offset_detected_then_offset_zone(
        self, pytz_resolver, winter_instant
    ) -> None:
        detector = LocalZoneDetector(configured_zone="UTC")

        with patch.object(LocalZoneDetector, "lookup_local", return_value=0):
            assert resolve_local(pytz_resolver, detector, winter_instant) == UTC_DESCRIPTOR

    def test_resolve_local_when_no_instant_then_resolver_clock_used(self, sample_catalog) -> None:
        resolver = ZoneResolver(
            catalog=sample_catalog, clock=Clock(test_time="2024-07-15T12:00:00")
        )
        detector = LocalZoneDetector(configured_zone="Test/Eastern")

        assert resolve_local(resolver, detector).abbreviation == "XDT"
