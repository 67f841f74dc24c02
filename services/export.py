from __future__ import annotations

import csv
from pathlib import Path
from typing import IO, Iterable, List, Union

from models.agency_record import AgencyRecord
from services.normalizer import record_to_row


EXPORT_COLUMNS: List[str] = [
    "agency", "url", "type", "pricing_model", "focus", "platforms",
    "references", "conditions", "followers", "status", "notes",
    "description", "departments", "legal_form", "location", "founding_year",
]


def write_csv(records: Iterable[AgencyRecord], stream: IO[str]) -> int:
    """Write records with every cell quoted; multi-value fields joined by ', '."""
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    count = 0
    for record in records:
        row = record_to_row(record)
        writer.writerow([row.get(col, "") for col in EXPORT_COLUMNS])
        count += 1
    return count


def export_to_csv(records: Iterable[AgencyRecord], path: Union[str, Path] = "agencies.csv") -> int:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8", newline="") as f:
        return write_csv(records, f)
