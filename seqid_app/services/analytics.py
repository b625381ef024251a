"""
Incremental usage analytics.

Counters are only ever incremented by login and save events; nothing here
recomputes a total from the records. The one derived value, a user's
today_ids, is counted from the record store on read.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from seqid_app.core.logging import get_logger
from seqid_app.schemas.analytics import AdminOverview, GlobalAnalytics, MetricKind
from seqid_app.schemas.users import UserProfile, UserSummary
from seqid_app.services.record_store import RecordStore

logger = get_logger("analytics")


class AnalyticsAggregator:
    """Per-user profiles plus global counters, loaded from their blobs"""

    def __init__(self, users: Dict[str, UserProfile] = None, analytics: GlobalAnalytics = None):
        self.users: Dict[str, UserProfile] = users or {}
        self.analytics = analytics or GlobalAnalytics()

    @classmethod
    def from_blobs(cls, users_blob: Dict[str, Any], analytics_blob: Dict[str, Any]) -> "AnalyticsAggregator":
        users = {}
        for user_id, entry in users_blob.items():
            try:
                users[user_id] = UserProfile.model_validate(entry)
            except ValidationError as e:
                logger.warning(f"⚠️  Malformed user profile skipped: {e.error_count()} errors", extra={"user_id": user_id})
        return cls(users, GlobalAnalytics.from_counters(analytics_blob))

    def users_blob(self) -> Dict[str, Dict[str, Any]]:
        return {user_id: profile.model_dump(mode="json") for user_id, profile in self.users.items()}

    def analytics_blob(self) -> Dict[str, int]:
        return self.analytics.to_counters()

    def _ensure_profile(self, user_id: str, when: datetime) -> UserProfile:
        profile = self.users.get(user_id)
        if profile is None:
            profile = UserProfile(user_id=user_id, created_at=when)
            self.users[user_id] = profile
        return profile

    def on_login(self, user_id: str, when: datetime) -> UserProfile:
        """Count the login and create or refresh the user's profile"""
        self.analytics.increment_daily(when.date().isoformat(), MetricKind.LOGINS)

        profile = self._ensure_profile(user_id, when)
        profile.last_login = when
        profile.last_login_date = when.date().isoformat()
        return profile

    def on_save(self, user_id: str, new_count: int, duplicate_total: int, when: datetime) -> None:
        """
        Record one execute action.

        A save is one search no matter how many ids it carried; id
        counters move by new_count only. duplicate_total is not counted
        anywhere, it is accepted so callers pass the whole save outcome.
        """
        date = when.date().isoformat()

        self.analytics.total_searches += 1
        self.analytics.increment_daily(date, MetricKind.SEARCHES)

        if new_count > 0:
            self.analytics.total_ids += new_count
            self.analytics.increment_daily(date, MetricKind.IDS, new_count)
            self.analytics.increment_hour(when.hour, new_count)

        profile = self._ensure_profile(user_id, when)
        profile.total_searches += 1
        profile.total_ids += new_count

    def on_heartbeat(self, user_id: str, when: datetime) -> bool:
        """Mark the user active; returns False for unknown users"""
        profile = self.users.get(user_id)
        if profile is None:
            return False
        profile.last_active = when
        return True

    def global_snapshot(self) -> GlobalAnalytics:
        return self.analytics.model_copy(deep=True)

    def profile(self, user_id: str) -> Optional[UserProfile]:
        return self.users.get(user_id)

    def all_user_summaries(self, records: RecordStore, today: str) -> List[UserSummary]:
        return [
            UserSummary(
                id=profile.user_id,
                total_ids=profile.total_ids,
                today_ids=records.count_on(profile.user_id, today),
                searches=profile.total_searches,
                last_active=profile.last_active or profile.last_login,
            )
            for profile in self.users.values()
        ]

    def overview(self, today: str) -> AdminOverview:
        """Dashboard summary for one day, read straight off the counters"""
        peak = self.analytics.peak_hour()
        return AdminOverview(
            total_users=len(self.users),
            total_ids=self.analytics.total_ids,
            total_searches=self.analytics.total_searches,
            logins_today=self.analytics.daily_value(today, MetricKind.LOGINS),
            ids_today=self.analytics.daily_value(today, MetricKind.IDS),
            searches_today=self.analytics.daily_value(today, MetricKind.SEARCHES),
            peak_hour=peak,
            peak_hour_label=f"{peak:02d}:00" if peak is not None else "--",
        )
