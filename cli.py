import argparse
import asyncio
import json
import sys

import sources  # noqa: F401 ensure registration
from config.settings import get_settings
from db import schema
from db.connection import get_connection
from models.enums import AgencyStatus, AgencyType, PricingModel, SortDirection
from models.filter_options import SortConfig
from services.cache_store import SqliteCacheStore
from services.directory import AgencyDirectory, DirectoryView
from services.export import export_to_csv
from services.query_engine import SORT_FIELDS
from services.reporting import print_summary
from sources.registry import available_sources, get_source
from utils.logging_setup import init_logging


def _open_directory(args):
    settings = get_settings()
    conn = get_connection(args.db)
    cache = SqliteCacheStore(conn)
    source = get_source(args.source, settings)
    return conn, AgencyDirectory(source, cache, settings)


def _load_or_exit(directory: AgencyDirectory, args) -> None:
    asyncio.run(directory.load(use_cache=not args.no_cache))
    if directory.error:
        print(f"Error loading data: {directory.error}")
        sys.exit(1)


def _view_from_args(directory: AgencyDirectory, args) -> DirectoryView:
    # No debounce for one-shot queries
    view = DirectoryView(directory.records, debounce_ms=0)
    view.on_filter_change(
        platform=args.platform or "",
        status=args.status or "",
        min_followers=args.min_followers or 0,
        focus=args.focus or "",
        type=args.type or "",
        pricing_model=args.pricing_model or "",
    )
    view.on_search(args.search or "")
    view.sort_config = SortConfig(
        field=args.sort,
        direction=SortDirection.DESC if args.desc else SortDirection.ASC,
    )
    return view


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    try:
        schema.bootstrap(conn)
    finally:
        conn.close()
    print("Schema ready")


def cmd_list(args):
    conn, directory = _open_directory(args)
    try:
        _load_or_exit(directory, args)
        view = _view_from_args(directory, args)
        rows = view.filtered_and_sorted
        if args.limit:
            rows = rows[: args.limit]
        if args.json:
            print(json.dumps([r.model_dump(mode="json") for r in rows], indent=2, ensure_ascii=False))
            return
        print_summary(
            rows,
            total=len(directory.records),
            search_query=view.search_query,
            filters=view.filters,
            sort=view.sort_config,
            last_updated=directory.last_updated,
            from_cache=directory.from_cache,
        )
    finally:
        conn.close()


def cmd_options(args):
    conn, directory = _open_directory(args)
    try:
        _load_or_exit(directory, args)
        choices = DirectoryView(directory.records, debounce_ms=0).filter_choices
        print(json.dumps(choices.model_dump(), indent=2, ensure_ascii=False))
    finally:
        conn.close()


def cmd_export(args):
    conn, directory = _open_directory(args)
    try:
        _load_or_exit(directory, args)
        view = _view_from_args(directory, args)
        count = export_to_csv(view.filtered_and_sorted, args.output)
        print(f"Exported {count} agencies to {args.output}")
    finally:
        conn.close()


def cmd_clear_cache(args):
    settings = get_settings()
    conn = get_connection(args.db)
    try:
        SqliteCacheStore(conn).remove(settings.cache_key)
    finally:
        conn.close()
    print("Cache cleared")


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _add_query_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument('--search', '-q', type=str, default="", help='Free-text search (agency, description, location, focus, platforms, references)')
    p.add_argument('--platform', type=str, help='Platform substring, e.g. YouTube')
    p.add_argument('--focus', type=str, help='Focus substring, e.g. Gaming')
    p.add_argument('--status', choices=[s.value for s in AgencyStatus])
    p.add_argument('--type', choices=[t.value for t in AgencyType])
    p.add_argument('--pricing-model', choices=[m.value for m in PricingModel])
    p.add_argument('--min-followers', type=_non_negative_int, default=0, help='Minimum followers (0 = no limit)')
    p.add_argument('--sort', choices=sorted(SORT_FIELDS), default="agency", help='Sort field (default: agency)')
    p.add_argument('--desc', action='store_true', help='Sort descending')


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Creator agency directory")
    parser.add_argument("--db", default=settings.cache_db_path, help="Path to SQLite cache DB (default from settings)")
    parser.add_argument("--source", default=settings.data_source, choices=sorted(available_sources()), help="Data source (default from settings)")
    parser.add_argument("--no-cache", action="store_true", help="Ignore a fresh cached dataset and fetch again")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create the cache table")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_list = sub.add_parser("list", help="Search, filter and sort agencies")
    _add_query_flags(p_list)
    p_list.add_argument('--limit', type=int, default=0, help='Show at most N agencies (0 = all)')
    p_list.add_argument('--json', action='store_true', help='Print records as JSON')
    p_list.set_defaults(func=cmd_list)

    p_opt = sub.add_parser("options", help="Print the distinct filter values as JSON")
    p_opt.set_defaults(func=cmd_options)

    p_exp = sub.add_parser("export", help="Write the (filtered) agencies to a CSV file")
    _add_query_flags(p_exp)
    p_exp.add_argument('--output', '-o', default="agencies.csv", help='Output CSV path (default: agencies.csv)')
    p_exp.set_defaults(func=cmd_export)

    p_clear = sub.add_parser("clear-cache", help="Remove the cached dataset")
    p_clear.set_defaults(func=cmd_clear_cache)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
