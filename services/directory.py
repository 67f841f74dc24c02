"""
State holders consumed by the presentation layer.

AgencyDirectory owns the loaded dataset ({records, loading, error, refresh}).
DirectoryView owns the query state (search, filters, sort) and derives the
visible record list and the filter choices from it.
"""
from __future__ import annotations

import asyncio
import time
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence, Tuple

from config.settings import Settings, get_settings
from models.agency_record import AgencyRecord
from models.filter_options import FilterChoices, FilterOptions, SortConfig
from models.load_result import LoadOk, LoadResult, RowIssue
from pipelines.load_agencies import load_agencies
from ports.cache import CacheStorePort
from ports.source import DataSourcePort
from services.debounce import Debouncer
from services.options import extract_filter_options
from services.query_engine import filter_records, sort_records


class AgencyDirectory:
    def __init__(
        self,
        source: DataSourcePort,
        cache: CacheStorePort,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.source = source
        self.cache = cache
        self.settings = settings or get_settings()
        self.clock = clock
        self.records: List[AgencyRecord] = []
        self.loading = False
        self.error: Optional[str] = None
        self.last_updated: Optional[datetime] = None
        self.from_cache = False
        self.warnings: List[RowIssue] = []
        self._inflight: Optional[asyncio.Future] = None

    async def load(self, use_cache: bool = True) -> LoadResult:
        """Load once; concurrent callers share the in-flight load."""
        inflight = self._inflight
        if inflight is not None and not inflight.done():
            return await inflight
        task = asyncio.ensure_future(self._load(use_cache))
        self._inflight = task
        try:
            return await task
        finally:
            if self._inflight is task:
                self._inflight = None

    async def _load(self, use_cache: bool) -> LoadResult:
        self.loading = True
        self.error = None
        try:
            result = await load_agencies(self.source, self.cache, self.settings, clock=self.clock, use_cache=use_cache)
        finally:
            self.loading = False
        if isinstance(result, LoadOk):
            self.records = result.records
            self.last_updated = datetime.fromtimestamp(result.timestamp)
            self.from_cache = result.from_cache
            self.warnings = list(result.warnings)
        else:
            self.records = []
            self.error = result.message
        return result

    async def refresh(self) -> LoadResult:
        """Drop the cached dataset and load it again.

        A load already in flight may have read the old cache entry, so it is
        allowed to finish and a fetch-only load runs after it.
        """
        inflight = self._inflight
        if inflight is not None and not inflight.done():
            await inflight
        self.cache.remove(self.settings.cache_key)
        return await self.load(use_cache=False)


class DirectoryView:
    """Search / filter / sort state over one record collection."""

    def __init__(
        self,
        records: Sequence[AgencyRecord] = (),
        debounce_ms: Optional[float] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.records: Sequence[AgencyRecord] = records
        self.search_query = ""
        self.effective_query = ""
        self.filters = FilterOptions()
        self.sort_config = SortConfig()
        if debounce_ms is None:
            debounce_ms = get_settings().search_debounce_ms
        self._search_gate: Optional[Debouncer] = (
            Debouncer(self._apply_search, debounce_ms, loop=loop) if debounce_ms > 0 else None
        )
        self._result_source: Optional[Sequence[AgencyRecord]] = None
        self._result_key: Optional[Tuple[Any, ...]] = None
        self._result: List[AgencyRecord] = []
        self._choices_source: Optional[Sequence[AgencyRecord]] = None
        self._choices = FilterChoices()

    def set_records(self, records: Sequence[AgencyRecord]) -> None:
        self.records = records

    # --- callbacks from the presentation layer ---

    def on_search(self, query: str) -> None:
        """Record the typed query; it takes effect after the debounce delay.

        Without an event loop to schedule on (plain synchronous callers) the
        query applies immediately.
        """
        self.search_query = query
        if self._search_gate is None or self._search_gate.event_loop() is None:
            if self._search_gate is not None:
                self._search_gate.cancel()
            self._apply_search(query)
        else:
            self._search_gate.call(query)

    def flush_search(self) -> None:
        if self._search_gate is not None:
            self._search_gate.flush()

    def on_filter_change(self, **changes: Any) -> None:
        self.filters = self.filters.merged(**changes)

    def on_sort(self, field: str) -> None:
        self.sort_config = self.sort_config.toggled(field)

    def clear_filters(self) -> None:
        self.filters = FilterOptions()
        self.search_query = ""
        if self._search_gate is not None:
            self._search_gate.cancel()
        self._apply_search("")

    def close(self) -> None:
        if self._search_gate is not None:
            self._search_gate.cancel()

    # --- derived state ---

    @property
    def has_active_filters(self) -> bool:
        return self.filters.is_active() or self.search_query != ""

    @property
    def filtered_and_sorted(self) -> List[AgencyRecord]:
        if not self.records:
            return []
        key = (
            self.effective_query,
            tuple(self.filters.model_dump().items()),
            self.sort_config,
        )
        if self._result_source is not self.records or key != self._result_key:
            filtered = filter_records(self.records, self.effective_query, self.filters)
            self._result = sort_records(filtered, self.sort_config.field, self.sort_config.direction)
            self._result_key = key
            self._result_source = self.records
        return list(self._result)

    @property
    def filter_choices(self) -> FilterChoices:
        # Keyed on collection identity; recomputed only when records are replaced
        if self._choices_source is not self.records:
            self._choices = extract_filter_options(self.records)
            self._choices_source = self.records
        return self._choices

    def _apply_search(self, query: str) -> None:
        self.effective_query = query
