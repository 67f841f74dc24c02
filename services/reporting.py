from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from models.agency_record import AgencyRecord
from models.filter_options import FilterOptions, SortConfig
from services.domain_utils import extract_domain, format_number


def _clip(text: str, width: int) -> str:
    return text if len(text) <= width else text[: width - 1] + "…"


def print_summary(
    records: List[AgencyRecord],
    total: int,
    search_query: str = "",
    filters: Optional[FilterOptions] = None,
    sort: Optional[SortConfig] = None,
    last_updated: Optional[datetime] = None,
    from_cache: bool = False,
) -> None:
    """Print the visible agencies as a plain-text table."""
    filters = filters or FilterOptions()
    sort = sort or SortConfig()

    print("\n" + "="*60)
    print("AGENCY DIRECTORY")
    print("="*60)
    print(f"Search: {search_query or 'N/A'}")
    active = {k: v for k, v in filters.model_dump().items() if v not in ("", 0)}
    print(f"Filters: {', '.join(f'{k}={v}' for k, v in active.items()) or 'none'}")
    print(f"Sort: {sort.field} {sort.direction.value}")
    print(f"Showing {len(records)} of {total} agencies")
    if last_updated:
        origin = " (cached)" if from_cache else ""
        print(f"Last updated: {last_updated.strftime('%Y-%m-%d %H:%M')}{origin}")
    print("-"*60)
    for r in records:
        platforms = ", ".join(r.platforms) or "-"
        print(
            f"{_clip(r.agency, 28):<28} {format_number(r.followers):>12} "
            f"{(r.status or '-'):<9} {_clip(platforms, 30)}"
        )
        if r.url:
            print(f"{'':<28} {extract_domain(r.url)}")
    print("="*60)
