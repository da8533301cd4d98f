# services/school_directory/context.py

import logging
from uuid import uuid4

from shared.config import DATABASE_KEY, DATABASE_URL, LOCAL_STORAGE_DIR, is_remote_enabled
from shared.db import create_engine_for
from shared.storage import JsonFileStore
from services.school_directory.backends.local import LocalBackend
from services.school_directory.backends.remote import RemoteBackend
from services.school_directory.session import Session
from services.school_directory.store import DataStore

logger = logging.getLogger(__name__)


def new_client_id() -> str:
    return uuid4().hex


class Directory:
    """Everything a request needs: the shared DataStore and per-client storage."""

    def __init__(self, data: DataStore, storage: JsonFileStore):
        self.data = data
        self.clients = storage.namespace("clients")

    def session_for(self, client_id: str) -> Session:
        return Session(self.data, self.clients.namespace(client_id))

    async def start(self) -> None:
        await self.data.load()
        if self.data.is_remote:
            await self.data.start_realtime()

    async def close(self) -> None:
        await self.data.close()


def build_directory(
    database_url: str = DATABASE_URL,
    database_key: str = DATABASE_KEY,
    storage_dir: str = LOCAL_STORAGE_DIR,
) -> Directory:
    """Pick the storage backend once, for the lifetime of the process."""
    storage = JsonFileStore(storage_dir)
    if is_remote_enabled(database_url, database_key):
        logger.info("Storage mode: remote database")
        backend = RemoteBackend(create_engine_for(database_url, database_key))
    else:
        logger.info("Storage mode: local JSON store at %s", storage_dir)
        backend = LocalBackend(storage.namespace("collections"))
    return Directory(DataStore(backend), storage)
