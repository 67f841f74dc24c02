"""
Load the agency dataset: cache check -> fetch -> parse -> normalize ->
validate -> cache write.

Each stage hands back either its output or a terminal result (FetchError /
ParseError); only those two ever reach the caller as failures.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional, Union

from pydantic import ValidationError

from config.settings import Settings, get_settings
from models.cache_entry import CacheEntry
from models.load_result import FetchError, LoadOk, LoadResult, ParseError
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import NormalizeAgencies, ParseCsv, ValidateAgencies
from ports.cache import CacheStorePort
from ports.source import DataSourcePort
from services.csv_parser import CsvFatalError
from sources.base import FetchFailed


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def read_cached(cache: CacheStorePort, key: str, now: float, window_seconds: float) -> Optional[CacheEntry]:
    """Return the cache entry when present, well-formed and younger than the window."""
    raw = cache.get(key, None)
    if raw is None:
        logger.debug("Cache miss", extra={"step": "cache", "status": "miss"})
        return None
    try:
        entry = CacheEntry.model_validate(raw)
    except ValidationError as e:
        logger.info("Ignoring malformed cache entry", extra={"step": "cache", "status": "invalid", "error": str(e)})
        return None
    if not entry.is_fresh(now, window_seconds):
        logger.info(f"Cache expired ({int(entry.age(now))}s old)", extra={"step": "cache", "status": "expired"})
        return None
    logger.info(f"Cache hit: {len(entry.data)} agencies", extra={"step": "cache", "status": "hit"})
    return entry


def write_cached(cache: CacheStorePort, key: str, entry: CacheEntry) -> None:
    cache.set(key, entry.model_dump(mode="json"))


async def fetch_stage(source: DataSourcePort) -> Union[str, FetchError]:
    name = getattr(source, "source_name", type(source).__name__)
    try:
        # requests is blocking; keep the event loop free while it runs
        return await asyncio.to_thread(source.fetch_text)
    except FetchFailed as e:
        logger.error(f"Error loading data: {e}", extra={"step": "fetch", "status": "error", "source": name, "error": str(e)})
        return FetchError(str(e), status_code=e.status_code)


def process_stage(text: str, strict_enums: bool = True) -> Union[RunContext, ParseError]:
    ctx = RunContext(raw_text=text)
    pipeline = Pipeline([
        ParseCsv(),
        NormalizeAgencies(),
        ValidateAgencies(strict_enums=strict_enums),
    ])
    try:
        return pipeline.run(ctx)
    except CsvFatalError as e:
        logger.error(f"CSV parsing error: {e}", extra={"step": "parse", "status": "error", "error": str(e)})
        return ParseError(f"Failed to parse CSV data: {e}")


async def load_agencies(
    source: DataSourcePort,
    cache: CacheStorePort,
    settings: Optional[Settings] = None,
    clock: Clock = time.time,
    use_cache: bool = True,
) -> LoadResult:
    settings = settings or get_settings()
    key = settings.cache_key

    if use_cache:
        cached = read_cached(cache, key, clock(), settings.cache_ttl_seconds)
        if cached is not None:
            return LoadOk(records=cached.data, timestamp=cached.timestamp, from_cache=True)

    fetched = await fetch_stage(source)
    if isinstance(fetched, FetchError):
        return fetched

    processed = process_stage(fetched, strict_enums=settings.strict_enums)
    if isinstance(processed, ParseError):
        return processed

    entry = CacheEntry(data=processed.records, timestamp=clock())
    write_cached(cache, key, entry)
    logger.info(f"Loaded {len(entry.data)} agencies", extra={"step": "load", "status": "ok"})
    return LoadOk(records=entry.data, timestamp=entry.timestamp, warnings=processed.issues)
