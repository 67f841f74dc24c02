from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from models.agency_record import AgencyRecord


class CacheEntry(BaseModel):
    """Serialized dataset snapshot: records plus the epoch seconds they were stored at."""

    data: list[AgencyRecord]
    timestamp: float

    model_config = ConfigDict(extra="ignore")

    def age(self, now: float) -> float:
        return now - self.timestamp

    def is_fresh(self, now: float, window_seconds: float) -> bool:
        return self.age(now) < window_seconds
