from typing import List

from fastapi import APIRouter, Depends
from seqid_app.schemas.analytics import AdminOverview, GlobalAnalytics
from seqid_app.schemas.users import UserSummary
from seqid_app.services.processor_service import ProcessorService
from seqid_app.dependencies import get_processor_service, require_admin

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/analytics", response_model=GlobalAnalytics)
async def get_global_analytics(
    service: ProcessorService = Depends(get_processor_service)
):
    """Global counters: totals, per-day metrics and the 24 hour buckets"""
    return await service.global_snapshot()


@router.get("/users", response_model=List[UserSummary])
async def list_users(
    service: ProcessorService = Depends(get_processor_service)
):
    return await service.all_user_summaries()


@router.get("/overview", response_model=AdminOverview)
async def get_overview(
    service: ProcessorService = Depends(get_processor_service)
):
    """Today's logins, searches and ids, user count and the peak hour"""
    return await service.admin_overview()
