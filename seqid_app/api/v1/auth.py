from fastapi import APIRouter, Depends, status, Response
from seqid_app.schemas.auth import LoginRequest, SessionInfo
from seqid_app.services.processor_service import ProcessorService
from seqid_app.dependencies import get_processor_service, get_current_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionInfo)
async def login(
    login_data: LoginRequest,
    service: ProcessorService = Depends(get_processor_service)
):
    """Log in (creates the profile on first login) and count the login"""
    return await service.login(login_data.user_id, login_data.password)


@router.post("/heartbeat", status_code=status.HTTP_204_NO_CONTENT)
async def heartbeat(
    user_id: str = Depends(get_current_user),
    service: ProcessorService = Depends(get_processor_service)
):
    """Mark the caller active. Sent by clients every heartbeat interval."""
    await service.heartbeat(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
