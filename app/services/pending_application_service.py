from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InternalError, ValidationError
from app.domain.pending_application_model import PendingApplication
from app.repositories.pending_application_repository import PendingApplicationRepository
from app.services.utils.validation_utils import anonymize_email

logger = logging.getLogger("portal.pending_application_service")


class PendingApplicationService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.pending_repo = PendingApplicationRepository(session)

    async def start(
        self,
        *,
        student_name: str | None,
        course: str | None,
        email: str | None = None,
        user_id: str | None = None,
        data: dict[str, Any] | None = None,
        image_url: str | None = None,
        image_id: str | None = None,
    ) -> PendingApplication:
        student_name = (student_name or "").strip()
        course = (course or "").strip()
        if not student_name or not course:
            raise ValidationError("Missing student name or course")

        uid = None
        if user_id:
            try:
                uid = uuid.UUID(str(user_id))
            except ValueError:
                raise ValidationError("Invalid user id")

        try:
            pending = await self.pending_repo.create(
                user_id=uid,
                student_name=student_name,
                email=(email or "").strip() or None,
                course=course,
                data=data,
                image_url=image_url,
                image_id=image_id,
            )
            await self.session.commit()
        except Exception as exc:
            await self.session.rollback()
            logger.error(f"Could not store pending application for {anonymize_email(email)}: {exc}")
            raise InternalError()

        logger.info(f"Pending application {pending.id} started")
        return pending
