"""Index of every abbreviation used by any period of any catalog zone."""

import logging
from collections.abc import Iterable, Iterator

from .catalog import ZoneCatalog

logger = logging.getLogger(__name__)


class AbbreviationIndex:
    """Immutable, deduplicated set of period abbreviations.

    Empty abbreviations are never indexed. Iteration follows first appearance
    in catalog order.
    """

    __slots__ = ("_members", "_ordered")

    def __init__(self, abbreviations: Iterable[str]) -> None:
        ordered = dict.fromkeys(abbr for abbr in abbreviations if abbr)
        self._ordered = tuple(ordered)
        self._members = frozenset(ordered)

    @classmethod
    def build(cls, catalog: ZoneCatalog) -> "AbbreviationIndex":
        """Scan every period of every zone in ``catalog``."""
        index = cls(
            period.abbreviation
            for name in catalog.all_zone_names()
            for period in catalog.periods_for(name)
        )
        logger.debug("Built abbreviation index with %d entries", len(index))
        return index

    def __contains__(self, abbreviation: object) -> bool:
        return abbreviation in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"AbbreviationIndex({len(self._ordered)} abbreviations)"
