"""Time-based cleanup of abandoned pending applications.

Runs from the cron trigger. Each stale row is removed together with the photo
it owns on the image host. A photo that cannot be deleted never blocks the
row deletion: it is recorded in `orphaned_assets` and retried on the next run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import InternalError
from app.repositories.orphaned_asset_repository import OrphanedAssetRepository
from app.repositories.pending_application_repository import PendingApplicationRepository
from app.services.asset_service import CloudinaryAssetStore

logger = logging.getLogger("portal.cleanup_service")

ASSET_SOURCE = "pending_application"


@dataclass
class CleanupResult:
    deleted: int = 0
    orphaned: int = 0
    recovered: int = 0

    @property
    def message(self) -> str:
        return f"Successfully cleaned up {self.deleted} old pending applications."


class PendingApplicationCleanupService:
    def __init__(self, session: AsyncSession, asset_store: CloudinaryAssetStore | None = None):
        self.session = session
        self.pending_repo = PendingApplicationRepository(session)
        self.orphan_repo = OrphanedAssetRepository(session)
        self.asset_store = asset_store or CloudinaryAssetStore()

    def cutoff(self, now: datetime) -> datetime:
        return now - timedelta(hours=settings.pending_retention_hours)

    async def sweep(self, now: datetime | None = None) -> CleanupResult:
        now = now or datetime.now(timezone.utc)
        cutoff = self.cutoff(now)
        result = CleanupResult()

        try:
            result.recovered = await self._retry_orphaned_assets()

            stale = await self.pending_repo.list_created_before(cutoff)
            logger.info(f"Cleanup: {len(stale)} pending application(s) older than {cutoff.isoformat()}")

            for pending in stale:
                if pending.image_id:
                    try:
                        await self.asset_store.destroy(pending.image_id)
                    except Exception as exc:
                        logger.error(
                            f"Failed to delete image {pending.image_id} of pending application {pending.id}: {exc}"
                        )
                        await self.orphan_repo.record_failure(
                            pending.image_id, source=ASSET_SOURCE, error=str(exc)
                        )
                        result.orphaned += 1

                if await self.pending_repo.delete_by_id(pending.id):
                    result.deleted += 1
                await self.session.commit()
        except Exception as exc:
            await self.session.rollback()
            logger.error(f"Cleanup aborted after {result.deleted} deletion(s): {exc}")
            raise InternalError()

        logger.info(
            f"Cleanup finished: deleted={result.deleted} orphaned={result.orphaned} recovered={result.recovered}"
        )
        return result

    async def _retry_orphaned_assets(self) -> int:
        recovered = 0
        for orphan in await self.orphan_repo.list_all():
            try:
                await self.asset_store.destroy(orphan.asset_id)
            except Exception as exc:
                logger.warning(f"Retry of orphaned asset {orphan.asset_id} failed: {exc}")
                await self.orphan_repo.record_failure(
                    orphan.asset_id, source=orphan.source, error=str(exc)
                )
                continue
            await self.orphan_repo.delete_by_asset_id(orphan.asset_id)
            recovered += 1
        await self.session.commit()
        return recovered
