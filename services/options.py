from __future__ import annotations

from typing import Iterable, Optional, Set

from models.agency_record import AgencyRecord
from models.filter_options import FilterChoices


def extract_filter_options(records: Iterable[Optional[AgencyRecord]]) -> FilterChoices:
    """Collect the distinct values of each categorical field, sorted."""
    platforms: Set[str] = set()
    focus: Set[str] = set()
    locations: Set[str] = set()
    legal_forms: Set[str] = set()
    departments: Set[str] = set()

    for record in records:
        if record is None:
            continue
        platforms.update(record.platforms)
        focus.update(record.focus)
        departments.update(record.departments)
        if record.location:
            locations.add(record.location)
        if record.legal_form:
            legal_forms.add(record.legal_form)

    return FilterChoices(
        platforms=sorted(platforms),
        focus=sorted(focus),
        locations=sorted(locations),
        legal_forms=sorted(legal_forms),
        departments=sorted(departments),
    )
