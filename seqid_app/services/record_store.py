"""
Append-only per-user record collection.

The store wraps the decoded records blob (user_id -> list of records in
insertion order). Records are never mutated or removed; ordering by
timestamp happens on read.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence, Set

from pydantic import ValidationError

from seqid_app.core.logging import get_logger
from seqid_app.exceptions import DuplicateIdentifier, InvalidIdentifier
from seqid_app.schemas.records import Record, RecordFilters
from seqid_app.services.extractor import is_valid_identifier

logger = get_logger("record_store")


class RecordStore:
    """Records of every user, keyed by user id"""

    def __init__(self, records: Dict[str, List[Record]] = None):
        self._records: Dict[str, List[Record]] = records or {}

    @classmethod
    def from_blob(cls, data: Dict[str, Any]) -> "RecordStore":
        """Load from the persisted mapping; malformed entries are skipped"""
        records: Dict[str, List[Record]] = {}
        for user_id, entries in data.items():
            if not isinstance(entries, list):
                logger.warning("⚠️  Records entry is not a list, skipped", extra={"user_id": user_id})
                continue

            user_records = []
            for entry in entries:
                try:
                    record = Record.model_validate(entry)
                except ValidationError as e:
                    logger.warning(f"⚠️  Malformed record skipped: {e.error_count()} errors", extra={"user_id": user_id})
                    continue
                if record.timestamp.tzinfo is None:
                    record = record.model_copy(update={"timestamp": record.timestamp.replace(tzinfo=timezone.utc)})
                user_records.append(record)
            records[user_id] = user_records
        return cls(records)

    def to_blob(self) -> Dict[str, List[Dict[str, Any]]]:
        return {
            user_id: [record.model_dump(mode="json") for record in user_records]
            for user_id, user_records in self._records.items()
        }

    def ids_for(self, user_id: str) -> Set[str]:
        return {record.id for record in self._records.get(user_id, [])}

    def count(self, user_id: str) -> int:
        return len(self._records.get(user_id, []))

    def count_on(self, user_id: str, date: str) -> int:
        return sum(1 for record in self._records.get(user_id, []) if record.date == date)

    def _check_acceptable(self, identifier: str, existing: Set[str]) -> None:
        if not is_valid_identifier(identifier):
            raise InvalidIdentifier(f"'{identifier}' is not an 11 or 15 digit identifier")
        if identifier in existing:
            raise DuplicateIdentifier(f"'{identifier}' is already recorded")

    def append(self, user_id: str, new_ids: Sequence[str], when: datetime) -> List[Record]:
        """
        Append one record per identifier, all stamped with `when`.

        Identifiers that are not 11/15 digits, or already recorded for the
        user, are logged and skipped rather than raised: both mean an
        upstream check was bypassed, and the rest of the batch is still valid.

        Returns:
            The records actually appended, in input order
        """
        existing = self.ids_for(user_id)
        date = when.date().isoformat()
        appended: List[Record] = []

        for identifier in new_ids:
            try:
                self._check_acceptable(identifier, existing)
            except (InvalidIdentifier, DuplicateIdentifier) as e:
                logger.warning(f"⚠️  Record skipped: {e.message}", extra={"user_id": user_id})
                continue

            record = Record(id=identifier, date=date, hour=when.hour, timestamp=when)
            appended.append(record)
            existing.add(identifier)

        if appended:
            self._records.setdefault(user_id, []).extend(appended)
        return appended

    def query(self, user_id: str, filters: RecordFilters = None) -> List[Record]:
        """
        Records for a user, most recent first.

        Filters are AND-combined: exact date, case-insensitive substring of
        the id, and digit length. Records with the same timestamp keep
        their insertion order.
        """
        filters = filters or RecordFilters()
        records = sorted(
            self._records.get(user_id, []),
            key=lambda record: record.timestamp,
            reverse=True,
        )

        if filters.date:
            records = [r for r in records if r.date == filters.date]
        if filters.search:
            term = filters.search.lower()
            records = [r for r in records if term in r.id.lower()]
        length = filters.digit_length.length
        if length is not None:
            records = [r for r in records if len(r.id) == length]

        return records
