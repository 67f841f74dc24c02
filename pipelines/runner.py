from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from models.agency_record import AgencyRecord
from models.load_result import RowIssue
from utils.logging_setup import init_logging


logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    raw_text: Optional[str] = None
    rows: List[Dict[str, str]] = field(default_factory=list)
    records: List[AgencyRecord] = field(default_factory=list)
    issues: List[RowIssue] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            name = type(step).__name__
            started = time.perf_counter()
            ctx = step.run(ctx)
            duration_ms = int((time.perf_counter() - started) * 1000)
            logger.debug(f"{name} done", extra={"step": name, "status": "ok", "duration_ms": duration_ms})
        return ctx
