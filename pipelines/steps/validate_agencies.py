from __future__ import annotations

from typing import List

from data_validator import AgencyValidator
from models.agency_record import AgencyRecord
from pipelines.runner import RunContext


class ValidateAgencies:
    """Trim and canonicalize records, then drop the ones failing validation.

    With strict_enums=False only the agency name is required.
    """

    def __init__(self, strict_enums: bool = True) -> None:
        self.validator = AgencyValidator(strict_enums=strict_enums)

    def run(self, ctx: RunContext) -> RunContext:
        records: List[AgencyRecord] = ctx.records or []
        if not records:
            ctx.records = []
            return ctx

        cleaned = [self.validator.clean_record(r) for r in records]
        ctx.records = self.validator.validate_all_records(cleaned)
        # Attach validation stats into meta for optional logging
        ctx.meta["validation_stats"] = self.validator.get_validation_stats()
        return ctx
