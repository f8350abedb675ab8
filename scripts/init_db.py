# scripts/init_db.py

import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from audit_trail.config.settings import get_settings
from audit_trail.infrastructure.database import models  # noqa: F401  (registers tables)
from audit_trail.infrastructure.database.session import Base, create_engine_from_settings


async def init_db():
    engine = create_engine_from_settings(get_settings())
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("Tables created:", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    asyncio.run(init_db())
