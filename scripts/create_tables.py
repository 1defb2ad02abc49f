"""
Create every portal table (users, subscribers, pending_applications, orphaned_assets).
Existing tables are left untouched.
Run once per database: python scripts/create_tables.py (from project root)
"""
import asyncio
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlalchemy import inspect

from app.core.database import Base, engine
from app.domain import init  # noqa: F401


async def main():
    async with engine.begin() as conn:
        existing = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        for name in Base.metadata.tables:
            print(f"  {'skip (exists)' if name in existing else 'created'}: {name}")
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
