from .agency_record import AgencyRecord
from .cache_entry import CacheEntry
from .enums import AgencyStatus, AgencyType, LegalForm, PricingModel, SortDirection
from .filter_options import FilterChoices, FilterOptions, SortConfig
from .load_result import FetchError, LoadOk, LoadResult, ParseError, RowIssue

__all__ = [
    "AgencyRecord",
    "CacheEntry",
    "AgencyStatus",
    "AgencyType",
    "LegalForm",
    "PricingModel",
    "SortDirection",
    "FilterChoices",
    "FilterOptions",
    "SortConfig",
    "FetchError",
    "LoadOk",
    "LoadResult",
    "ParseError",
    "RowIssue",
]
