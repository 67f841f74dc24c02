from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.enums import SortDirection


class FilterOptions(BaseModel):
    """Structured filter set. Empty string / zero means no constraint."""

    platform: str = ""
    status: str = ""
    min_followers: int = Field(default=0, ge=0)
    focus: str = ""
    type: str = ""
    pricing_model: str = ""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    def merged(self, **changes: Any) -> "FilterOptions":
        """Return a copy with the given fields replaced (partial update)."""
        data = self.model_dump()
        data.update(changes)
        return FilterOptions(**data)

    def is_active(self) -> bool:
        return any(v not in ("", 0) for v in self.model_dump().values())


class SortConfig(BaseModel):
    field: str = "agency"
    direction: SortDirection = SortDirection.ASC

    model_config = ConfigDict(frozen=True)

    def toggled(self, field: str) -> "SortConfig":
        """Same field flips direction; a new field starts ascending."""
        if field == self.field and self.direction == SortDirection.ASC:
            return SortConfig(field=field, direction=SortDirection.DESC)
        return SortConfig(field=field, direction=SortDirection.ASC)


class FilterChoices(BaseModel):
    """Distinct values per categorical field, used to populate choice controls."""

    platforms: list[str] = Field(default_factory=list)
    focus: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    legal_forms: list[str] = Field(default_factory=list)
    departments: list[str] = Field(default_factory=list)
