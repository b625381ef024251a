"""
Typed global analytics.

The persisted form is a flat mapping of counter names to integers
(logins_<date>, searches_<date>, ids_<date>, hour_<h>, total_ids,
total_searches). In memory the counters live in typed fields and the
names only exist at the storage boundary.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

HOURS_PER_DAY = 24

_DAILY_KEY = re.compile(r"^(logins|searches|ids)_(\d{4}-\d{2}-\d{2})$")
_HOUR_KEY = re.compile(r"^hour_(\d{1,2})$")


class MetricKind(str, Enum):
    """Per-day metrics"""
    LOGINS = "logins"
    SEARCHES = "searches"
    IDS = "ids"


class DailyCounters(BaseModel):
    logins: int = 0
    searches: int = 0
    ids: int = 0


class GlobalAnalytics(BaseModel):
    total_ids: int = 0
    total_searches: int = 0
    hourly: List[int] = Field(default_factory=lambda: [0] * HOURS_PER_DAY)
    daily: Dict[str, DailyCounters] = Field(default_factory=dict)

    @field_validator("hourly")
    @classmethod
    def _exactly_24_buckets(cls, value: List[int]) -> List[int]:
        if len(value) != HOURS_PER_DAY:
            raise ValueError(f"hourly must have {HOURS_PER_DAY} buckets")
        return value

    def increment_daily(self, date: str, kind: MetricKind, by: int = 1) -> None:
        counters = self.daily.setdefault(date, DailyCounters())
        setattr(counters, kind.value, getattr(counters, kind.value) + by)

    def increment_hour(self, hour: int, by: int = 1) -> None:
        self.hourly[hour] += by

    def daily_value(self, date: str, kind: MetricKind) -> int:
        counters = self.daily.get(date)
        return getattr(counters, kind.value) if counters else 0

    def peak_hour(self) -> Optional[int]:
        """Busiest hour by ids saved; the earliest wins a tie, None when nothing was saved"""
        busiest = max(self.hourly)
        if busiest <= 0:
            return None
        return self.hourly.index(busiest)

    @classmethod
    def from_counters(cls, counters: Dict[str, Any]) -> "GlobalAnalytics":
        """Build from the flat persisted mapping, skipping unknown or non-integer entries"""
        analytics = cls()
        for name, value in counters.items():
            if isinstance(value, bool) or not isinstance(value, int):
                continue
            if name == "total_ids":
                analytics.total_ids = value
                continue
            if name == "total_searches":
                analytics.total_searches = value
                continue

            hour_match = _HOUR_KEY.match(name)
            if hour_match:
                hour = int(hour_match.group(1))
                if 0 <= hour < HOURS_PER_DAY:
                    analytics.hourly[hour] = value
                continue

            daily_match = _DAILY_KEY.match(name)
            if daily_match:
                kind, date = MetricKind(daily_match.group(1)), daily_match.group(2)
                analytics.increment_daily(date, kind, value)
        return analytics

    def to_counters(self) -> Dict[str, int]:
        """Flatten back to the persisted mapping; zero counters are omitted"""
        counters: Dict[str, int] = {}
        for date, daily in sorted(self.daily.items()):
            for kind in MetricKind:
                value = getattr(daily, kind.value)
                if value:
                    counters[f"{kind.value}_{date}"] = value
        for hour, value in enumerate(self.hourly):
            if value:
                counters[f"hour_{hour}"] = value
        counters["total_ids"] = self.total_ids
        counters["total_searches"] = self.total_searches
        return counters


class AdminOverview(BaseModel):
    """Headline numbers for the admin dashboard"""
    total_users: int
    total_ids: int
    total_searches: int
    logins_today: int
    ids_today: int
    searches_today: int
    peak_hour: Optional[int] = Field(None, description="Hour with the most ids saved, None before any save")
    peak_hour_label: str = Field("--", description="peak_hour as HH:00, or -- when there is none")
