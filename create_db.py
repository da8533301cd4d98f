# create_db.py
import asyncio
from shared.db import engine, Base

# Import all models here so they are registered with SQLAlchemy's metadata
import services.school_directory.models
from services.school_directory.backends.realtime import install_change_triggers


async def init_models(bind=engine):
    if bind is None:
        print("⚠️ DATABASE_URL and DATABASE_KEY are not set; the app will use local storage.")
        return

    async with bind.begin() as conn:
        print("🔧 Creating tables...")
        await conn.run_sync(Base.metadata.create_all)
        print("✅ Tables created.")

        if conn.dialect.name == "postgresql":
            print("🔧 Installing change notification triggers...")
            await install_change_triggers(conn)
            print("✅ Triggers installed.")

if __name__ == "__main__":
    asyncio.run(init_models())
