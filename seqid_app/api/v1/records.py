from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from seqid_app.schemas.records import DigitLength, Record, RecordFilters, ReportSummary
from seqid_app.schemas.users import UserStats
from seqid_app.services.processor_service import ProcessorService
from seqid_app.dependencies import get_processor_service, get_current_user

router = APIRouter(prefix="/records", tags=["records"])


@router.get("/", response_model=List[Record])
async def list_records(
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    search: Optional[str] = Query(None),
    digit_length: DigitLength = Query(DigitLength.ALL),
    user_id: str = Depends(get_current_user),
    service: ProcessorService = Depends(get_processor_service)
):
    """The caller's records, most recent first"""
    filters = RecordFilters(date=date, search=search, digit_length=digit_length)
    return await service.get_user_records(user_id, filters)


@router.get("/stats", response_model=UserStats)
async def get_stats(
    user_id: str = Depends(get_current_user),
    service: ProcessorService = Depends(get_processor_service)
):
    return await service.get_user_stats(user_id)


@router.get("/report", response_model=ReportSummary)
async def get_report(
    user_id: str = Depends(get_current_user),
    service: ProcessorService = Depends(get_processor_service)
):
    return await service.get_report(user_id)
