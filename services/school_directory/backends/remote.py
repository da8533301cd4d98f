# services/school_directory/backends/remote.py

import asyncio
import inspect
import logging
from typing import List, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from shared.db import create_session_factory
from services.school_directory.backends.base import (
    ChangeCallback,
    ChangeEvent,
    ChangeKind,
    Row,
    StorageBackend,
    Table,
)
from services.school_directory.backends.realtime import CHANGE_CHANNEL, parse_notification
from services.school_directory.models import Review, School, User

logger = logging.getLogger(__name__)

MODELS = {
    Table.SCHOOLS: School,
    Table.USERS: User,
    Table.REVIEWS: Review,
}


def _to_row(obj) -> Row:
    return {column.name: getattr(obj, column.name) for column in obj.__table__.columns}


class RemoteBackend(StorageBackend):
    """Mirrors collections to the SQL database and listens for row changes."""

    mode = "remote"

    def __init__(self, engine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)
        self._callback: Optional[ChangeCallback] = None
        self._listen_conn = None
        self._driver_conn = None
        self._tasks = set()

    async def fetch_all(self, table: Table) -> List[Row]:
        model = MODELS[table]
        async with self.session_factory() as session:
            result = await session.execute(select(model))
            return [_to_row(obj) for obj in result.scalars().all()]

    async def fetch_one(self, table: Table, record_id: str) -> Optional[Row]:
        async with self.session_factory() as session:
            obj = await session.get(MODELS[table], record_id)
            return _to_row(obj) if obj is not None else None

    async def insert(self, table: Table, row: Row) -> None:
        async with self.session_factory() as session:
            session.add(MODELS[table](**row))
            try:
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

    async def update(self, table: Table, record_id: str, fields: Row) -> None:
        if not fields:
            return
        model = MODELS[table]
        async with self.session_factory() as session:
            try:
                await session.execute(update(model).where(model.id == record_id).values(**fields))
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

    async def delete(self, table: Table, record_id: str) -> None:
        model = MODELS[table]
        async with self.session_factory() as session:
            try:
                await session.execute(delete(model).where(model.id == record_id))
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

    async def upsert_many(self, table: Table, rows: List[Row]) -> None:
        model = MODELS[table]
        async with self.session_factory() as session:
            try:
                for row in rows:
                    await session.merge(model(**row))
                await session.commit()
            except SQLAlchemyError:
                await session.rollback()
                raise

    # --- REALTIME ---

    async def subscribe(self, callback: ChangeCallback) -> None:
        self._callback = callback
        if self.engine.dialect.name != "postgresql":
            logger.warning("Realtime changes need PostgreSQL, %s has no change feed", self.engine.dialect.name)
            return

        self._listen_conn = await self.engine.connect()
        try:
            raw = await self._listen_conn.get_raw_connection()
            self._driver_conn = raw.driver_connection
            await self._driver_conn.add_listener(CHANGE_CHANNEL, self._on_notify)
        except Exception:
            self._driver_conn = None
            await self._listen_conn.close()
            self._listen_conn = None
            raise
        logger.info("Listening for row changes on '%s'", CHANGE_CHANNEL)

    def _on_notify(self, connection, pid, channel, payload):
        task = asyncio.get_running_loop().create_task(self.dispatch(payload))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def dispatch(self, payload: str) -> Optional[ChangeEvent]:
        """Turn one channel payload into a ChangeEvent and hand it to the subscriber."""
        try:
            table, kind, record_id = parse_notification(payload)
        except ValueError as e:
            logger.warning("Ignoring change notification: %s", e)
            return None

        if kind is ChangeKind.DELETE:
            event = ChangeEvent(table=table, kind=kind, record_id=record_id)
        else:
            try:
                row = await self.fetch_one(table, record_id)
            except SQLAlchemyError:
                logger.exception("Could not fetch %s/%s for %s event", table.value, record_id, kind.value)
                return None
            if row is None:
                # Deleted again before we got to read it
                return None
            event = ChangeEvent(table=table, kind=kind, record=row)

        if self._callback is not None:
            result = self._callback(event)
            if inspect.isawaitable(result):
                await result
        return event

    async def close(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        # Let in-flight dispatches finish unwinding before the engine goes away
        await asyncio.gather(*tasks, return_exceptions=True)
        if self._driver_conn is not None:
            await self._driver_conn.remove_listener(CHANGE_CHANNEL, self._on_notify)
            self._driver_conn = None
        if self._listen_conn is not None:
            await self._listen_conn.close()
            self._listen_conn = None
        await self.engine.dispose()
