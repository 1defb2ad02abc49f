from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.pending_application_model import PendingApplication


class PendingApplicationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        *,
        user_id: UUID | None,
        student_name: str,
        email: str | None,
        course: str,
        data: dict[str, Any] | None,
        image_url: str | None,
        image_id: str | None,
    ) -> PendingApplication:
        pending = PendingApplication(
            user_id=user_id,
            student_name=student_name,
            email=email,
            course=course,
            data=data,
            image_url=image_url,
            image_id=image_id,
            created_at=datetime.now(timezone.utc),
        )
        self.session.add(pending)
        await self.session.flush()
        return pending

    async def list_created_before(self, cutoff: datetime) -> list[PendingApplication]:
        stmt = (
            select(PendingApplication)
            .where(PendingApplication.created_at < cutoff)
            .order_by(PendingApplication.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_id(self, pending_id: UUID) -> bool:
        result = await self.session.execute(
            delete(PendingApplication).where(PendingApplication.id == pending_id)
        )
        return (result.rowcount or 0) > 0
