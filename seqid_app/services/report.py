from typing import Sequence

from seqid_app.schemas.records import Record, ReportSummary
from seqid_app.services.extractor import ELEVEN_DIGITS, FIFTEEN_DIGITS


def summarize(records: Sequence[Record], today: str) -> ReportSummary:
    """Counts shown above a user's history"""
    return ReportSummary(
        total=len(records),
        eleven_digit_count=sum(1 for r in records if len(r.id) == ELEVEN_DIGITS),
        fifteen_digit_count=sum(1 for r in records if len(r.id) == FIFTEEN_DIGITS),
        today_count=sum(1 for r in records if r.date == today),
        unique_dates=len({r.date for r in records}),
    )
