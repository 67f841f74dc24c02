from __future__ import annotations

import logging

from pipelines.runner import RunContext
from services.csv_parser import parse_csv


logger = logging.getLogger(__name__)


class ParseCsv:
    """raw_text -> rows. Raises CsvFatalError when the document is unreadable."""

    def run(self, ctx: RunContext) -> RunContext:
        result = parse_csv(ctx.raw_text or "", header=True)
        if result.issues:
            logger.warning(
                f"CSV parsing warnings: {len(result.issues)} row(s)",
                extra={"step": "parse_csv", "status": "warn"},
            )
            for issue in result.issues:
                logger.warning(f"Row {issue.row}: {issue.code} - {issue.message}", extra={"step": "parse_csv"})
        ctx.rows = result.rows
        ctx.issues = list(result.issues)
        ctx.meta["csv_headers"] = result.headers
        return ctx
