"""Timezone-specific exceptions."""

from typing import Any


class TimezoneError(Exception):
    """Base exception for all timezone resolution errors."""


class ZoneNotFoundError(TimezoneError):
    """Raised by the raising lookup helpers when an identifier cannot be resolved."""

    def __init__(self, identifier: Any) -> None:
        """Initialize ZoneNotFoundError.

        Args:
            identifier: The identifier exactly as the caller supplied it
        """
        super().__init__(f"No timezone found for: {identifier}")
        self.identifier = identifier


class UnknownZoneError(TimezoneError):
    """Raised when a catalog is asked for a zone it does not contain."""

    def __init__(self, zone_name: str) -> None:
        super().__init__(f"Unknown zone: {zone_name}")
        self.zone_name = zone_name


class CatalogIntegrityError(TimezoneError):
    """Raised when catalog data violates its own invariants.

    A zone the catalog confirmed as existing must have exactly one period
    covering every wall-clock instant.
    """

    def __init__(self, zone_name: str, instant_secs: int) -> None:
        super().__init__(f"Zone {zone_name} has no period covering wall second {instant_secs}")
        self.zone_name = zone_name
        self.instant_secs = instant_secs


class InvalidInstantError(TimezoneError, ValueError):
    """Raised when an instant argument has an unsupported shape."""
