from fastapi import APIRouter, Depends
from seqid_app.schemas.processing import ExecuteRequest, ProcessResult
from seqid_app.services.processor_service import ProcessorService
from seqid_app.dependencies import get_processor_service, get_current_user

router = APIRouter(prefix="/ids", tags=["ids"])


@router.post("/execute", response_model=ProcessResult)
async def execute(
    request: ExecuteRequest,
    user_id: str = Depends(get_current_user),
    service: ProcessorService = Depends(get_processor_service)
):
    """
    Extract sequential IDs from text and save the new ones.
    
    Errors (empty input, nothing found, nothing sequential) come back as
    JSON with a `code` and leave all state untouched.
    """
    return await service.execute(user_id, request.text)
