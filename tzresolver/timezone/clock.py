"""Current-time provider with test time override support."""

import logging
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)


class Clock:
    """Provides the current UTC wall-clock time.

    A fixed ISO 8601 ``test_time`` replaces the real clock. Aware timestamps
    are normalized to UTC; naive ones are taken as UTC already.
    """

    def __init__(self, test_time: Optional[str] = None) -> None:
        self.test_time = test_time

    def now_utc(self) -> datetime:
        """Return the current UTC time as a naive wall-clock datetime."""
        if self.test_time:
            try:
                dt = date_parser.isoparse(self.test_time)
            except ValueError as e:
                logger.warning("Failed to parse test_time=%r: %s", self.test_time, e)
            else:
                if dt.tzinfo is not None:
                    dt = dt.astimezone(timezone.utc)
                return dt.replace(tzinfo=None)

        return datetime.now(timezone.utc).replace(tzinfo=None)
