import asyncio

from shared.db import engine, Base
import services.school_directory.models  # registers the tables
from create_db import init_models


async def reset_db(bind=engine):
    if bind is None:
        print("⚠️ No remote database configured; nothing to reset.")
        return

    async with bind.begin() as conn:
        print("🗑️ Dropping tables...")
        await conn.run_sync(Base.metadata.drop_all)
    await init_models(bind)

if __name__ == "__main__":
    asyncio.run(reset_db())
