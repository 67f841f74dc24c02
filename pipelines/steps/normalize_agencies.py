from __future__ import annotations

from pipelines.runner import RunContext
from services.normalizer import normalize_rows


class NormalizeAgencies:
    def run(self, ctx: RunContext) -> RunContext:
        ctx.records = normalize_rows(ctx.rows or [])
        ctx.meta["normalized_records"] = len(ctx.records)
        return ctx
