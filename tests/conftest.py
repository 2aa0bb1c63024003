"""Shared fixtures for tzresolver tests."""

import logging
from collections.abc import Iterator
from datetime import datetime

import pytest

from tzresolver.config.settings import reset_settings
from tzresolver.timezone.catalog import InMemoryZoneCatalog, PytzZoneCatalog
from tzresolver.timezone.models import Bound, RawPeriod, wall_seconds
from tzresolver.timezone.resolver import ZoneResolver
from tzresolver.timezone.service import reset_service

HOUR = 3600

# Shared transition boundaries of the in-memory "Test/Eastern" zone
SPRING_FORWARD = wall_seconds(datetime(2024, 3, 10, 2, 0, 0))
FALL_BACK = wall_seconds(datetime(2024, 11, 3, 2, 0, 0))


def eastern_like_periods() -> list[RawPeriod]:
    """A zone on XST in winter and XDT in summer."""
    return [
        RawPeriod(Bound.MIN, SPRING_FORWARD, -5 * HOUR, 0, "XST"),
        RawPeriod(SPRING_FORWARD, FALL_BACK, -5 * HOUR, HOUR, "XDT"),
        RawPeriod(FALL_BACK, Bound.MAX, -5 * HOUR, 0, "XST"),
    ]


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate tests from TZRESOLVER_* variables and cached globals."""
    for key in (
        "ZONE_SET",
        "EAGER_ABBREVIATION_INDEX",
        "LOCAL_TIMEZONE",
        "FALLBACK_TIMEZONE",
        "TEST_TIME",
        "LOG_LEVEL",
        "LOG_COLORS",
    ):
        monkeypatch.delenv(f"TZRESOLVER_{key}", raising=False)
    reset_settings()
    reset_service()
    yield
    reset_settings()
    reset_service()


@pytest.fixture(scope="session")
def pytz_catalog() -> PytzZoneCatalog:
    """Full pytz catalog shared across the session; its period cache is read-only."""
    return PytzZoneCatalog()


@pytest.fixture(scope="session")
def pytz_resolver(pytz_catalog: PytzZoneCatalog) -> ZoneResolver:
    """Resolver over the full pytz catalog."""
    return ZoneResolver(catalog=pytz_catalog)


@pytest.fixture
def sample_catalog() -> InMemoryZoneCatalog:
    """Small catalog with a shared abbreviation and an unnamed period."""
    return InMemoryZoneCatalog(
        {
            "Test/Eastern": eastern_like_periods(),
            "Test/Island": [RawPeriod(Bound.MIN, Bound.MAX, -5 * HOUR, 0, "XST")],
            "Test/Blank": [RawPeriod(Bound.MIN, Bound.MAX, 0, 0, "")],
            "Test/Other": [RawPeriod(Bound.MIN, Bound.MAX, HOUR, 0, "OST")],
        }
    )


@pytest.fixture
def sample_resolver(sample_catalog: InMemoryZoneCatalog) -> ZoneResolver:
    """Resolver over the in-memory sample catalog."""
    return ZoneResolver(catalog=sample_catalog)


@pytest.fixture(scope="session")
def winter_instant() -> datetime:
    """Northern-hemisphere winter wall-clock instant."""
    return datetime(2024, 1, 15, 12, 0, 0)


@pytest.fixture(scope="session")
def summer_instant() -> datetime:
    """Northern-hemisphere summer wall-clock instant."""
    return datetime(2024, 7, 15, 12, 0, 0)


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo handler and level changes made by setup_logging."""
    logger = logging.getLogger("tzresolver")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
