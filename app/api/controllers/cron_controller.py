from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_cleanup_service, require_cron_secret
from app.core.exceptions import AppError
from app.schemas.cleanup import CleanupOut
from app.services.cleanup_service import PendingApplicationCleanupService

router = APIRouter(prefix="/cron", tags=["cron"], dependencies=[Depends(require_cron_secret)])


@router.get("/cleanup-pending-applications", response_model=CleanupOut)
async def cleanup_pending_applications(
    service: PendingApplicationCleanupService = Depends(get_cleanup_service),
):
    try:
        result = await service.sweep()
    except AppError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)
    return CleanupOut(
        message=result.message,
        deleted=result.deleted,
        orphaned_assets=result.orphaned,
        recovered_assets=result.recovered,
    )
