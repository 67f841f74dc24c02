from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from models.agency_record import AgencyRecord


@dataclass(frozen=True)
class RowIssue:
    """Row-level CSV problem; logged as a warning, never fatal."""

    row: int
    code: str
    message: str


@dataclass(frozen=True)
class LoadOk:
    records: list[AgencyRecord]
    timestamp: float
    from_cache: bool = False
    warnings: list[RowIssue] = field(default_factory=list)

    ok = True


@dataclass(frozen=True)
class FetchError:
    message: str
    status_code: Optional[int] = None

    ok = False


@dataclass(frozen=True)
class ParseError:
    message: str

    ok = False


LoadResult = Union[LoadOk, FetchError, ParseError]
