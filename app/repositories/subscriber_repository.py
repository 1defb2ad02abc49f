from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.subscriber_model import Subscriber


class SubscriberRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Subscriber | None:
        result = await self.session.execute(
            select(Subscriber).where(Subscriber.email == email)
        )
        return result.scalar_one_or_none()

    async def ensure(self, email: str) -> bool:
        """Subscribe `email` unless it already is. Returns True when a row was inserted."""
        result = await self.session.execute(
            insert(Subscriber)
            .values(email=email)
            .on_conflict_do_nothing(index_elements=[Subscriber.email])
        )
        return (result.rowcount or 0) > 0
