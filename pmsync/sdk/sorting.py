"""Multi-key stable sorting of list items.

Criteria are written as field names with an optional leading ``-`` for
descending order, e.g. ``["-date", "subject", "id"]``. The first criterion
that distinguishes two items decides their order; full ties keep the input
order. Unrecognized fields are ignored.
"""

import logging
from typing import Iterable, List, NamedTuple, Sequence

from .models import ListItem

logger = logging.getLogger(__name__)

SORT_FIELDS = ("id", "subject", "date", "snippet")


class SortCriterion(NamedTuple):
    field: str
    descending: bool = False

    @classmethod
    def parse(cls, text: str) -> "SortCriterion":
        text = text.strip().lower()
        if text.startswith("-"):
            return cls(text[1:], True)
        return cls(text, False)

    def __str__(self):
        return ("-" if self.descending else "") + self.field


def parse_criteria(values: Iterable[str]) -> List[SortCriterion]:
    """Parse criteria from strings; each string may hold a comma-separated list."""
    criteria = []
    for value in values:
        for part in value.split(","):
            if part.strip():
                criteria.append(SortCriterion.parse(part))
    return criteria


def _key(field: str):
    # Python compares str by code point, which matches UTF-8 byte order.
    return lambda item: getattr(item, field)


def sort_items(items: Sequence[ListItem], criteria: Sequence[SortCriterion]) -> List[ListItem]:
    """Return a new list of items sorted by the given criteria.

    Sorting runs one stable pass per criterion, from the lowest priority
    to the highest, so earlier criteria dominate and full ties keep their
    input order (``sorted`` stays stable with ``reverse=True``).
    """
    result = list(items)
    for criterion in reversed(criteria):
        if criterion.field not in SORT_FIELDS:
            logger.debug(f"Ignoring unknown sort field '{criterion.field}'")
            continue
        result = sorted(result, key=_key(criterion.field), reverse=criterion.descending)
    return result
