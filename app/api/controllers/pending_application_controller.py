from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_pending_application_service
from app.core.exceptions import AppError
from app.schemas.pending_application import PendingApplicationIn, PendingApplicationOut
from app.services.pending_application_service import PendingApplicationService

router = APIRouter(prefix="/pending-applications", tags=["pending-applications"])


@router.post("", response_model=PendingApplicationOut, status_code=status.HTTP_201_CREATED)
async def start_application(
    data: PendingApplicationIn,
    service: PendingApplicationService = Depends(get_pending_application_service),
):
    try:
        pending = await service.start(
            student_name=data.student_name,
            course=data.course,
            email=data.email,
            user_id=data.user_id,
            data=data.data,
            image_url=data.image_url,
            image_id=data.image_id,
        )
    except AppError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)
    return PendingApplicationOut.model_validate(pending)
