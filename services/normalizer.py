from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from models.agency_record import AgencyRecord
from utils.number_parsing import parse_followers, parse_founding_year


MULTI_VALUE_FIELDS: Tuple[str, ...] = ("focus", "platforms", "references", "conditions", "departments")
TEXT_FIELDS: Tuple[str, ...] = (
    "agency",
    "url",
    "type",
    "pricing_model",
    "legal_form",
    "location",
    "status",
)
OPTIONAL_TEXT_FIELDS: Tuple[str, ...] = ("description", "notes")


def split_multi_value(value: Optional[str]) -> Tuple[str, ...]:
    """'Gaming, Tech,, ' -> ('Gaming', 'Tech'). Order and duplicates are kept."""
    if not value:
        return ()
    return tuple(part.strip() for part in str(value).split(",") if part.strip())


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_row(row: Mapping[str, Any], today: Optional[date] = None) -> AgencyRecord:
    data: Dict[str, Any] = {f: _text(row.get(f)) for f in TEXT_FIELDS}
    for f in OPTIONAL_TEXT_FIELDS:
        value = row.get(f)
        data[f] = str(value) if value else None
    for f in MULTI_VALUE_FIELDS:
        data[f] = split_multi_value(row.get(f))
    data["followers"] = parse_followers(row.get("followers"))
    data["founding_year"] = parse_founding_year(row.get("founding_year"), today=today)
    return AgencyRecord(**data)


def normalize_rows(rows: Iterable[Optional[Mapping[str, Any]]], today: Optional[date] = None) -> List[AgencyRecord]:
    """Turn raw CSV rows into AgencyRecords, skipping empty rows.

    Never raises for bad values: unparsable followers become 0 and an
    unparsable founding year becomes the current year.
    """
    return [normalize_row(row, today=today) for row in rows if row and len(row) > 0]


def record_to_row(record: AgencyRecord) -> Dict[str, str]:
    """Inverse of normalize_row, used for CSV export."""
    row: Dict[str, str] = {}
    for key, value in record.model_dump().items():
        if isinstance(value, (list, tuple)):
            row[key] = ", ".join(value)
        elif value is None:
            row[key] = ""
        else:
            row[key] = str(value)
    return row
