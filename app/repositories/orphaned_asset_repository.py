from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.orphaned_asset_model import OrphanedAsset


class OrphanedAssetRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self, limit: int = 100) -> list[OrphanedAsset]:
        stmt = (
            select(OrphanedAsset)
            .order_by(OrphanedAsset.last_attempt_at.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def record_failure(self, asset_id: str, *, source: str, error: str) -> None:
        now = datetime.now(timezone.utc)
        stmt = insert(OrphanedAsset).values(
            asset_id=asset_id,
            source=source,
            last_error=error,
            attempts=1,
            last_attempt_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[OrphanedAsset.asset_id],
            set_={
                "last_error": error,
                "attempts": OrphanedAsset.attempts + 1,
                "last_attempt_at": func.now(),
            },
        )
        await self.session.execute(stmt)

    async def delete_by_asset_id(self, asset_id: str) -> None:
        await self.session.execute(
            delete(OrphanedAsset).where(OrphanedAsset.asset_id == asset_id)
        )
