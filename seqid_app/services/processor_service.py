from typing import List, Optional, Sequence, Tuple

from seqid_app.config import settings
from seqid_app.core.clock import Clock
from seqid_app.core.logging import get_logger
from seqid_app.exceptions import (
    AuthenticationError,
    EmptyInput,
    NoIdentifiersFound,
    NoSequentialIdentifiers,
)
from seqid_app.schemas.analytics import AdminOverview, GlobalAnalytics
from seqid_app.schemas.auth import SessionInfo
from seqid_app.schemas.processing import ProcessResult, SaveResult
from seqid_app.schemas.records import Record, RecordFilters, ReportSummary
from seqid_app.schemas.users import UserStats, UserSummary
from seqid_app.services.analytics import AnalyticsAggregator
from seqid_app.services.deduplicator import partition
from seqid_app.services.extractor import extract
from seqid_app.services.identity import format_user_id, is_admin, verify_admin_password
from seqid_app.services.record_store import RecordStore
from seqid_app.services.report import summarize
from seqid_app.services.sequential import find_sequential
from seqid_app.storage.strategies import BlobStorageStrategy

logger = get_logger("processor")


class ProcessorService:
    """
    Processor Service with dependency injection for storage and clock.

    Every mutating operation is one read-modify-write of the blobs it
    touches, done under the storage write lock and written back with a single
    set_many, so a save either lands completely or not at all.
    """

    def __init__(self, storage: BlobStorageStrategy, clock: Optional[Clock] = None):
        """
        Initialize processor service with dependencies.

        Args:
            storage: Blob storage strategy holding users, records and analytics
            clock: Clock for record stamps and analytics buckets
        """
        self.storage = storage
        self.clock = clock or Clock(settings.timezone)

    async def _load_records(self) -> RecordStore:
        return RecordStore.from_blob(await self.storage.get(settings.records_store_name))

    async def _load_aggregator(self) -> AnalyticsAggregator:
        users_blob = await self.storage.get(settings.users_store_name)
        analytics_blob = await self.storage.get(settings.analytics_store_name)
        return AnalyticsAggregator.from_blobs(users_blob, analytics_blob)

    async def _load_state(self) -> Tuple[RecordStore, AnalyticsAggregator]:
        return await self._load_records(), await self._load_aggregator()

    async def login(self, raw_user_id: str, password: Optional[str] = None) -> SessionInfo:
        """
        Log a user in and count the login.

        The admin user must also present the configured password.
        """
        user_id = format_user_id(raw_user_id)
        admin = is_admin(user_id)
        if admin and not verify_admin_password(password):
            raise AuthenticationError("Invalid admin password")

        async with self.storage.write_lock():
            aggregator = await self._load_aggregator()
            aggregator.on_login(user_id, self.clock.now())
            await self.storage.set_many({
                settings.users_store_name: aggregator.users_blob(),
                settings.analytics_store_name: aggregator.analytics_blob(),
            })

        logger.info("🔑 User logged in", extra={"user_id": user_id})
        return SessionInfo(
            user_id=user_id,
            is_admin=admin,
            heartbeat_interval_seconds=settings.heartbeat_interval_seconds,
        )

    async def heartbeat(self, user_id: str) -> bool:
        """Mark a known user active. Unknown users are ignored (returns False)."""
        async with self.storage.write_lock():
            aggregator = await self._load_aggregator()
            if not aggregator.on_heartbeat(user_id, self.clock.now()):
                return False
            await self.storage.set(settings.users_store_name, aggregator.users_blob())
        return True

    async def execute(self, user_id: str, text: str) -> ProcessResult:
        """
        Run one execute action on raw text.

        Flow:
        1. Extract 11 and 15 digit identifiers
        2. Keep the sequential ones, per length class
        3. Save them (dedupe + append + analytics)

        Raises:
            EmptyInput: Text is blank
            NoIdentifiersFound: No 11 or 15 digit identifiers in the text
            NoSequentialIdentifiers: Identifiers found but none sequential
        """
        if not text or not text.strip():
            raise EmptyInput()

        extraction = extract(text)
        if extraction.total == 0:
            raise NoIdentifiersFound()

        sequential = find_sequential(extraction)
        if not sequential:
            raise NoSequentialIdentifiers()

        result = await self.save_records(user_id, sequential)
        return ProcessResult(**result.model_dump(), total_found=len(sequential))

    async def save_records(self, user_id: str, ids: Sequence[str]) -> SaveResult:
        """
        Save candidate identifiers for a user.

        Identifiers already recorded for the user count as duplicates.
        An empty list changes nothing, not even the search counters.
        """
        if not ids:
            return SaveResult()

        async with self.storage.write_lock():
            when = self.clock.now()
            records, aggregator = await self._load_state()

            split = partition(ids, records.ids_for(user_id))
            appended = records.append(user_id, split.new, when)
            aggregator.on_save(user_id, len(appended), split.duplicate_count, when)

            await self.storage.set_many({
                settings.records_store_name: records.to_blob(),
                settings.users_store_name: aggregator.users_blob(),
                settings.analytics_store_name: aggregator.analytics_blob(),
            })

        logger.info(
            f"💾 Saved {len(appended)} new ids, {split.duplicate_count} duplicates",
            extra={"user_id": user_id, "new_count": len(appended), "duplicate_count": split.duplicate_count},
        )
        return SaveResult(
            new_count=len(appended),
            duplicate_count=split.duplicate_count,
            new_ids=[record.id for record in appended],
        )

    async def get_user_records(self, user_id: str, filters: Optional[RecordFilters] = None) -> List[Record]:
        """Records for a user, most recent first"""
        records = await self._load_records()
        return records.query(user_id, filters)

    async def get_user_stats(self, user_id: str) -> UserStats:
        records, aggregator = await self._load_state()
        profile = aggregator.profile(user_id)
        return UserStats(
            total=profile.total_ids if profile else 0,
            today=records.count_on(user_id, self.clock.today()),
            searches=profile.total_searches if profile else 0,
        )

    async def get_report(self, user_id: str) -> ReportSummary:
        records = await self._load_records()
        return summarize(records.query(user_id), self.clock.today())

    async def global_snapshot(self) -> GlobalAnalytics:
        aggregator = await self._load_aggregator()
        return aggregator.global_snapshot()

    async def all_user_summaries(self) -> List[UserSummary]:
        records, aggregator = await self._load_state()
        return aggregator.all_user_summaries(records, self.clock.today())

    async def admin_overview(self) -> AdminOverview:
        aggregator = await self._load_aggregator()
        return aggregator.overview(self.clock.today())
