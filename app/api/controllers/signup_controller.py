from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.deps import get_signup_service
from app.core.exceptions import AppError
from app.domain.enums import VerificationOutcome
from app.schemas.common import MessageOut
from app.schemas.signup import SignupIn, SignupOut, VerifyCodeIn
from app.services.signup_service import SignupService

router = APIRouter(prefix="/signup", tags=["signup"])


@router.post("", response_model=SignupOut)
async def register(
    data: SignupIn,
    service: SignupService = Depends(get_signup_service),
):
    try:
        result = await service.register(data.name, data.email, data.password)
        return SignupOut(message=result.message, user_id=result.user_id)
    except AppError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)


@router.put(
    "",
    response_model=MessageOut,
    responses={202: {"model": MessageOut, "description": "Verified, welcome email not sent"}},
)
async def verify(
    data: VerifyCodeIn,
    service: SignupService = Depends(get_signup_service),
):
    try:
        result = await service.verify(data.user_id, data.code)
    except AppError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.message)

    if result.outcome == VerificationOutcome.verified_email_failed:
        return JSONResponse(status_code=202, content={"message": result.message})
    return MessageOut(message=result.message)
