from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from enum import Enum


class DigitLength(str, Enum):
    """Length classes a record query can be narrowed to"""
    ELEVEN = "11"
    FIFTEEN = "15"
    ALL = "all"

    @property
    def length(self) -> Optional[int]:
        if self is DigitLength.ALL:
            return None
        return int(self.value)


class Record(BaseModel):
    """One accepted identifier for one user. Never mutated after creation."""
    id: str = Field(..., description="The 11 or 15 digit identifier")
    date: str = Field(..., description="Insertion date (YYYY-MM-DD)")
    hour: int = Field(..., ge=0, le=23, description="Insertion hour of day")
    timestamp: datetime = Field(..., description="Insertion instant")

    model_config = ConfigDict(frozen=True)


class RecordFilters(BaseModel):
    """AND-combined record filters; None means no constraint"""
    date: Optional[str] = None
    search: Optional[str] = None
    digit_length: DigitLength = DigitLength.ALL


class ReportSummary(BaseModel):
    total: int
    eleven_digit_count: int
    fifteen_digit_count: int
    today_count: int
    unique_dates: int
