"""
In-memory query evaluation over AgencyRecords: free-text search, structured
filters and a stable, type-aware sort.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from models.agency_record import AgencyRecord
from models.enums import SortDirection
from models.filter_options import FilterOptions


logger = logging.getLogger(__name__)


# --- Filtering ---

def _contains(haystack: Optional[str], needle_lower: str) -> bool:
    return bool(haystack) and needle_lower in haystack.lower()


def _any_contains(values: Iterable[str], needle_lower: str) -> bool:
    return any(needle_lower in v.lower() for v in values)


def matches_search(record: AgencyRecord, search_query: str) -> bool:
    """Case-insensitive substring match against the searchable fields.

    An empty query matches everything.
    """
    if not search_query:
        return True
    q = search_query.lower()
    return (
        _contains(record.agency, q)
        or _contains(record.description, q)
        or _contains(record.location, q)
        or _any_contains(record.focus, q)
        or _any_contains(record.platforms, q)
        or _any_contains(record.references, q)
    )


def matches_filters(record: AgencyRecord, filters: FilterOptions) -> bool:
    return (
        (filters.platform == "" or _any_contains(record.platforms, filters.platform.lower()))
        and (filters.focus == "" or _any_contains(record.focus, filters.focus.lower()))
        and (filters.status == "" or record.status == filters.status)
        and (filters.type == "" or record.type == filters.type)
        and (filters.pricing_model == "" or record.pricing_model == filters.pricing_model)
        and (filters.min_followers == 0 or record.followers >= filters.min_followers)
    )


def filter_records(
    records: Iterable[Optional[AgencyRecord]],
    search_query: str = "",
    filters: Optional[FilterOptions] = None,
) -> List[AgencyRecord]:
    """Return the records passing search and every filter, in input order."""
    filters = filters or FilterOptions()
    return [
        r for r in records
        if r is not None and matches_search(r, search_query) and matches_filters(r, filters)
    ]


# --- Sorting ---

_DIGITS = re.compile(r"(\d+)")


def _natural(text: str) -> List[Union[str, int]]:
    # re.split with a capture group alternates text/number, so two keys
    # always hold the same type at the same index
    parts: List[Union[str, int]] = []
    for i, piece in enumerate(_DIGITS.split(text)):
        parts.append(int(piece) if i % 2 else piece)
    return parts


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> Tuple[Any, ...]:
    """German-style, numeric-aware collation key.

    Base letters decide first (a = ä, case ignored, "Agency 2" < "Agency 10"),
    then accents (a < ä), then case (lower before upper).
    """
    folded = text.casefold()
    return (
        _natural(_strip_accents(folded)),
        _natural(unicodedata.normalize("NFC", folded)),
        text.swapcase(),
    )


class SortKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    SEQUENCE = "sequence"


SORT_FIELDS: Dict[str, SortKind] = {
    "agency": SortKind.TEXT,
    "url": SortKind.TEXT,
    "type": SortKind.TEXT,
    "pricing_model": SortKind.TEXT,
    "legal_form": SortKind.TEXT,
    "location": SortKind.TEXT,
    "status": SortKind.TEXT,
    "description": SortKind.TEXT,
    "notes": SortKind.TEXT,
    "followers": SortKind.NUMBER,
    "founding_year": SortKind.NUMBER,
    "departments": SortKind.SEQUENCE,
    "focus": SortKind.SEQUENCE,
    "platforms": SortKind.SEQUENCE,
    "references": SortKind.SEQUENCE,
    "conditions": SortKind.SEQUENCE,
}


def _key_for(field: str, kind: SortKind) -> Callable[[AgencyRecord], Any]:
    if kind is SortKind.NUMBER:
        return lambda r: getattr(r, field)
    if kind is SortKind.SEQUENCE:
        return lambda r: collation_key(",".join(getattr(r, field)))
    # Optional text (description, notes) sorts as empty when missing
    return lambda r: collation_key(getattr(r, field) or "")


def sort_records(
    records: Sequence[AgencyRecord],
    field: str,
    direction: Union[SortDirection, str] = SortDirection.ASC,
) -> List[AgencyRecord]:
    """Stable sort by field; equal keys keep their input order in both directions.

    Unknown fields leave the order unchanged. The input is not modified.
    """
    kind = SORT_FIELDS.get(field)
    if kind is None:
        logger.debug(f"Unsortable field {field!r}; keeping input order")
        return list(records)
    descending = SortDirection(direction) is SortDirection.DESC
    return sorted(records, key=_key_for(field, kind), reverse=descending)


def is_sortable(field: str) -> bool:
    return field in SORT_FIELDS
