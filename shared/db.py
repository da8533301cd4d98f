# shared/db.py
from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from shared.config import DATABASE_KEY, DATABASE_URL, is_remote_enabled

Base = declarative_base()

# Native text[] on Postgres, JSON everywhere else (SQLite in tests)
StringList = ARRAY(String).with_variant(JSON(), "sqlite")

ASYNC_DRIVERS = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "sqlite": "sqlite+aiosqlite",
}


def build_database_url(url: str, key: str):
    """
    Combine the endpoint URL and access key into a SQLAlchemy URL using an
    async driver. The key is used as the connection password.
    """
    db_url = make_url(url)
    db_url = db_url.set(drivername=ASYNC_DRIVERS.get(db_url.drivername, db_url.drivername))
    if key and db_url.get_backend_name() != "sqlite":
        db_url = db_url.set(password=key)
    return db_url


def create_engine_for(url: str, key: str, **kwargs):
    return create_async_engine(build_database_url(url, key), pool_pre_ping=True, **kwargs)


def create_session_factory(bind):
    return async_sessionmaker(bind=bind, expire_on_commit=False)


# Only built when remote mode is configured
engine = create_engine_for(DATABASE_URL, DATABASE_KEY) if is_remote_enabled() else None
