"""
Clock used to stamp records and bucket analytics.

Record dates, hour buckets and "today" all come from the same zone so that
the per-day and per-hour counters agree with the stored records.
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo


class Clock:
    """Wall clock in a configured zone (process-local when none is given)"""
    
    def __init__(self, timezone_name: Optional[str] = None):
        self.tz = ZoneInfo(timezone_name) if timezone_name else None
    
    def now(self) -> datetime:
        """Current instant as an aware datetime"""
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(self.tz)
    
    def today(self) -> str:
        """Current calendar date as YYYY-MM-DD"""
        return self.now().date().isoformat()
