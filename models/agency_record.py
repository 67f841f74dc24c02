from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


def _current_year() -> int:
    return date.today().year


class AgencyRecord(BaseModel):
    """One creator agency as shown in the directory.

    Enum-like fields (type, pricing_model, status, legal_form) are kept as
    plain strings so unknown values survive normalization; ValidateAgencies
    decides whether to keep them.
    """

    agency: str
    url: str = ""
    type: str = ""
    pricing_model: str = ""
    legal_form: str = ""
    location: str = ""
    founding_year: int = Field(default_factory=_current_year)
    departments: tuple[str, ...] = ()
    focus: tuple[str, ...] = ()
    platforms: tuple[str, ...] = ()
    references: tuple[str, ...] = ()
    conditions: tuple[str, ...] = ()
    followers: int = 0
    status: str = ""
    description: str | None = None
    notes: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)
