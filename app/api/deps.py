import secrets

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.constants import MSG_UNAUTHORIZED
from app.core.database import get_session
from app.services.cleanup_service import PendingApplicationCleanupService
from app.services.pending_application_service import PendingApplicationService
from app.services.signup_service import SignupService


async def get_db(session: AsyncSession = Depends(get_session)) -> AsyncSession:
    return session


def get_signup_service(session: AsyncSession = Depends(get_db)) -> SignupService:
    return SignupService(session)


def get_cleanup_service(session: AsyncSession = Depends(get_db)) -> PendingApplicationCleanupService:
    return PendingApplicationCleanupService(session)


def get_pending_application_service(session: AsyncSession = Depends(get_db)) -> PendingApplicationService:
    return PendingApplicationService(session)


def is_valid_cron_secret(auth_header: str | None) -> bool:
    if not settings.cron_secret or not auth_header:
        return False
    expected = f"Bearer {settings.cron_secret}"
    return secrets.compare_digest(auth_header.encode(), expected.encode())


async def require_cron_secret(request: Request) -> None:
    if not is_valid_cron_secret(request.headers.get("Authorization")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MSG_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
